"""
Project management endpoints.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_session
from app.models.project import ProjectCreate, ProjectUpdate, ProjectRead, ProjectStatusUpdate
from app.models.checklist import ProjectDetail
from app.models.analysis import ProjectAnalysis, InstallationReport
from app.handlers.projects import (
    create_project,
    get_projects,
    get_project,
    get_project_detail,
    update_project,
    update_project_status,
    delete_project,
)
from app.handlers.analysis import GeminiAnalyzer, get_analyzer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/", response_model=ProjectDetail, status_code=status.HTTP_201_CREATED)
async def create_project_endpoint(
    project: ProjectCreate,
    session: AsyncSession = Depends(get_session)
):
    """
    Create a new project.

    The materials and safety checklist is generated from panel count,
    inverter power and roof type and returned with the project.
    """
    try:
        return await create_project(session, project)
    except Exception as e:
        logger.exception("Error creating project")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error creating project: {str(e)}"
        )


@router.get("", response_model=List[ProjectRead])
async def list_projects_endpoint(
    session: AsyncSession = Depends(get_session)
):
    """List all projects, newest first."""
    return await get_projects(session)


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project_endpoint(
    project_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Get project with checklist items and progress."""
    project = await get_project_detail(session, project_id)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found"
        )
    return project


@router.patch("/{project_id}", response_model=ProjectDetail)
async def update_project_endpoint(
    project_id: int,
    updates: ProjectUpdate,
    session: AsyncSession = Depends(get_session)
):
    """
    Update project fields.

    Changing panel count, inverter power or roof type regenerates the
    checklist; completion is kept for items that come out unchanged.
    """
    try:
        return await update_project(session, project_id, updates)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.patch("/{project_id}/status", response_model=ProjectRead)
async def update_project_status_endpoint(
    project_id: int,
    body: ProjectStatusUpdate,
    session: AsyncSession = Depends(get_session)
):
    """Set project status (planning, in-progress, completed)."""
    try:
        return await update_project_status(session, project_id, body.status)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.delete("/{project_id}")
async def delete_project_endpoint(
    project_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Delete a project and its checklist."""
    try:
        await delete_project(session, project_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    return {"message": f"Project {project_id} deleted"}


@router.post("/{project_id}/analyze", response_model=ProjectAnalysis)
async def analyze_project_endpoint(
    project_id: int,
    session: AsyncSession = Depends(get_session),
    analyzer: GeminiAnalyzer = Depends(get_analyzer)
):
    """
    Efficiency analysis of a project by Gemini.

    Falls back to a canned analysis when the model is unavailable.
    """
    project = await get_project(session, project_id)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found"
        )
    return await analyzer.analyze_project(
        project.panel_count,
        project.inverter_power_kw,
        project.roof_type
    )


@router.post("/{project_id}/report", response_model=InstallationReport)
async def project_report_endpoint(
    project_id: int,
    session: AsyncSession = Depends(get_session),
    analyzer: GeminiAnalyzer = Depends(get_analyzer)
):
    """
    Installation report written by Gemini from a fresh analysis.

    Falls back to a report assembled from the analysis when the model is
    unavailable.
    """
    project = await get_project(session, project_id)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found"
        )
    analysis = await analyzer.analyze_project(
        project.panel_count,
        project.inverter_power_kw,
        project.roof_type
    )
    report = await analyzer.generate_installation_report(
        project.name,
        analysis,
        project.panel_count,
        project.inverter_power_kw
    )
    return InstallationReport(report=report)
