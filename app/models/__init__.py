# SQLModel database models

from app.models.project import Project, ProjectStatus, RoofType
from app.models.checklist import ChecklistItem, ChecklistCategory

__all__ = [
    "Project",
    "ProjectStatus",
    "RoofType",
    "ChecklistItem",
    "ChecklistCategory",
]
