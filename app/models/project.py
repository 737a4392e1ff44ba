"""
Project model - a solar installation job and its lifecycle status.
"""

from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import date, datetime
from enum import Enum

from app.utils.time import utc_now
from app.core.constants import (
    MIN_PANEL_COUNT,
    MAX_PANEL_COUNT,
    MIN_INVERTER_POWER_KW,
    MAX_INVERTER_POWER_KW,
)

if TYPE_CHECKING:
    from app.models.checklist import ChecklistItem


class RoofType(str, Enum):
    """Mounting surface, drives the structure part of the checklist."""
    CERAMIC = "ceramic"
    METAL = "metal"
    FIBER_CEMENT = "fiber-cement"
    GROUND_MOUNT = "ground-mount"


class ProjectStatus(str, Enum):
    """Project status lifecycle."""
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class ProjectBase(SQLModel):
    """Base project schema."""
    name: str = Field(default="Solar Project", min_length=1, max_length=200)
    address: Optional[str] = Field(default=None, description="Installation address")
    phone: Optional[str] = Field(default=None, max_length=20, description="Customer phone")
    roof_type: RoofType = Field(..., description="Installation surface")
    inverter_power_kw: float = Field(
        ...,
        ge=MIN_INVERTER_POWER_KW,
        le=MAX_INVERTER_POWER_KW,
        description="Inverter power in kilowatts"
    )
    inverter_brand: Optional[str] = Field(default=None, max_length=100)
    panel_count: int = Field(..., ge=MIN_PANEL_COUNT, le=MAX_PANEL_COUNT)
    installation_date: Optional[date] = Field(default=None, description="Planned or actual installation date")
    installer: Optional[str] = Field(default=None, max_length=100, description="Responsible installer")
    platform_url: Optional[str] = Field(default=None, max_length=200, description="Inverter monitoring platform URL")
    platform_login: Optional[str] = Field(default=None, max_length=100)
    platform_notes: Optional[str] = Field(default=None)


class Project(ProjectBase, table=True):
    """Project database table."""
    __tablename__ = "projects"

    id: Optional[int] = Field(default=None, primary_key=True)
    status: ProjectStatus = Field(default=ProjectStatus.PLANNING)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # Relationship
    checklist_items: List["ChecklistItem"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "passive_deletes": True}
    )


class ProjectCreate(ProjectBase):
    """Schema for creating a project."""
    pass


class ProjectUpdate(SQLModel):
    """Schema for a partial project update (PATCH)."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    address: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    roof_type: Optional[RoofType] = None
    inverter_power_kw: Optional[float] = Field(
        default=None,
        ge=MIN_INVERTER_POWER_KW,
        le=MAX_INVERTER_POWER_KW
    )
    inverter_brand: Optional[str] = Field(default=None, max_length=100)
    panel_count: Optional[int] = Field(default=None, ge=MIN_PANEL_COUNT, le=MAX_PANEL_COUNT)
    installation_date: Optional[date] = None
    installer: Optional[str] = Field(default=None, max_length=100)
    platform_url: Optional[str] = Field(default=None, max_length=200)
    platform_login: Optional[str] = Field(default=None, max_length=100)
    platform_notes: Optional[str] = None
    status: Optional[ProjectStatus] = None


class ProjectStatusUpdate(SQLModel):
    """Body of PATCH /projects/{id}/status."""
    status: ProjectStatus


class ProjectRead(ProjectBase):
    """Schema for reading a project."""
    id: int
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime
