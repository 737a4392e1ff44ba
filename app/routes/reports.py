"""
Report and aggregation endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any

from app.core.database import get_session
from app.handlers.projects import get_project_detail
from app.handlers.reports import get_portfolio_summary, render_checklist_export

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/summary")
async def portfolio_summary_endpoint(
    session: AsyncSession = Depends(get_session)
) -> Dict[str, Any]:
    """
    Get portfolio-level aggregation summary.

    Returns:
        - total_projects
        - planning_projects / in_progress_projects / completed_projects
        - total_panels
        - total_panel_power_kw
        - total_checklist_items
        - completed_checklist_items
    """
    return await get_portfolio_summary(session)


@router.get("/projects/{project_id}/export", response_class=PlainTextResponse)
async def project_export_endpoint(
    project_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Plain-text export of a project and its checklist grouped by category."""
    detail = await get_project_detail(session, project_id)
    if not detail:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found"
        )
    return PlainTextResponse(
        render_checklist_export(detail),
        headers={"Content-Disposition": f'attachment; filename="project-{project_id}.txt"'}
    )
