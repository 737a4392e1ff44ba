"""
Checklist item model - generated materials and safety tasks of a project.
"""

from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from enum import Enum

from app.models.project import ProjectRead
from app.utils.time import utc_now

if TYPE_CHECKING:
    from app.models.project import Project


class ChecklistCategory(str, Enum):
    """Checklist grouping, in display order."""
    SAFETY = "safety"
    ELECTRICAL_MATERIALS = "electrical-materials"
    STRUCTURE = "structure"


class ChecklistItemBase(SQLModel):
    """Base checklist item schema."""
    title: str = Field(..., max_length=200)
    description: str = Field(default="")
    category: ChecklistCategory = Field(...)


class ChecklistItem(ChecklistItemBase, table=True):
    """Checklist item database table."""
    __tablename__ = "checklist_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(..., foreign_key="projects.id", ondelete="CASCADE", index=True)
    is_completed: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)

    # Relationship
    project: "Project" = Relationship(back_populates="checklist_items")


class ChecklistItemCreate(ChecklistItemBase):
    """Generated item, before it is attached to a project."""
    pass


class ChecklistItemUpdate(SQLModel):
    """Only completion can change after an item is generated."""
    is_completed: bool


class ChecklistItemRead(ChecklistItemBase):
    """Schema for reading a checklist item."""
    id: int
    project_id: int
    is_completed: bool
    created_at: datetime


class ProjectDetail(ProjectRead):
    """Project with its checklist and derived progress."""
    string_configuration: str
    completed_items: int
    total_items: int
    progress_percent: int
    checklist_items: List[ChecklistItemRead] = []
