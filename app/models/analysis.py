"""
AI analysis schemas - not stored, returned straight to the caller.
"""

from sqlmodel import SQLModel, Field
from typing import List


class ProjectAnalysis(SQLModel):
    """Narrative efficiency analysis of a project."""
    efficiency_score: float = Field(..., ge=0, le=100)
    recommendations: List[str] = Field(default_factory=list)
    cost_optimization: str = Field(default="")
    installation_tips: List[str] = Field(default_factory=list)


class InstallationReport(SQLModel):
    """Body returned by the report endpoint."""
    report: str
