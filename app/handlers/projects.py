"""
Project and checklist persistence handler.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete
from sqlmodel import select
from typing import List, Optional, Dict, Tuple

from app.models.project import Project, ProjectCreate, ProjectUpdate, ProjectStatus, ProjectRead
from app.models.checklist import (
    ChecklistItem,
    ChecklistItemRead,
    ChecklistItemUpdate,
    ProjectDetail,
)
from app.handlers.checklist import generate_checklist_items, string_configuration
from app.utils.time import utc_now

logger = logging.getLogger(__name__)

# Fields whose change invalidates the generated checklist
GENERATOR_INPUTS = ("panel_count", "inverter_power_kw", "roof_type")

# NOT NULL columns: an explicit null in a PATCH leaves them unchanged
REQUIRED_FIELDS = ("name", "roof_type", "inverter_power_kw", "panel_count", "status")


def progress_percent(completed: int, total: int) -> int:
    """Rounded completion percentage, 0 for an empty checklist."""
    if total == 0:
        return 0
    return round(completed * 100 / total)


def next_status(current: ProjectStatus, completed: int, total: int) -> ProjectStatus:
    """
    Status implied by checklist progress.

    A fully checked list completes the project, and the first checked item
    moves a planning project to in-progress. Unchecking never moves the
    status backwards.
    """
    progress = progress_percent(completed, total)
    if progress == 100 and current != ProjectStatus.COMPLETED:
        return ProjectStatus.COMPLETED
    if 0 < progress < 100 and current == ProjectStatus.PLANNING:
        return ProjectStatus.IN_PROGRESS
    return current


async def _get_items(session: AsyncSession, project_id: int) -> List[ChecklistItem]:
    statement = select(ChecklistItem).where(
        ChecklistItem.project_id == project_id
    ).order_by(ChecklistItem.id)
    result = await session.execute(statement)
    return list(result.scalars().all())


def _build_items(
    project: Project,
    carried_over: Optional[Dict[Tuple[str, str, str], bool]] = None
) -> List[ChecklistItem]:
    """Generate checklist rows for a project, optionally keeping completion flags."""
    carried_over = carried_over or {}
    rows = []
    for generated in generate_checklist_items(
        project.panel_count,
        project.inverter_power_kw,
        project.roof_type
    ):
        key = (generated.category.value, generated.title, generated.description)
        rows.append(ChecklistItem(
            **generated.model_dump(),
            project_id=project.id,
            is_completed=carried_over.get(key, False)
        ))
    return rows


def build_project_detail(project: Project, items: List[ChecklistItem]) -> ProjectDetail:
    """Assemble the detail view of a project from its row and items."""
    completed = sum(1 for item in items if item.is_completed)
    return ProjectDetail(
        **ProjectRead.model_validate(project).model_dump(),
        string_configuration=string_configuration(project.panel_count).label,
        completed_items=completed,
        total_items=len(items),
        progress_percent=progress_percent(completed, len(items)),
        checklist_items=[ChecklistItemRead.model_validate(item) for item in items]
    )


async def create_project(
    session: AsyncSession,
    project_data: ProjectCreate
) -> ProjectDetail:
    """Create a project and its generated checklist in one transaction."""
    project = Project(**project_data.model_dump())
    session.add(project)
    await session.flush()

    items = _build_items(project)
    session.add_all(items)
    await session.commit()
    await session.refresh(project)

    logger.info(
        "Created project %s (%s panels, %s kW, %s) with %d checklist items",
        project.id,
        project.panel_count,
        project.inverter_power_kw,
        project.roof_type.value,
        len(items)
    )
    return build_project_detail(project, await _get_items(session, project.id))


async def get_projects(session: AsyncSession) -> List[Project]:
    """Return all projects, newest first."""
    statement = select(Project).order_by(Project.created_at.desc(), Project.id.desc())
    result = await session.execute(statement)
    return list(result.scalars().all())


async def get_project(session: AsyncSession, project_id: int) -> Project | None:
    """Get project by ID."""
    return await session.get(Project, project_id)


async def get_project_detail(session: AsyncSession, project_id: int) -> ProjectDetail | None:
    """Get project with its checklist items and progress."""
    project = await session.get(Project, project_id)
    if not project:
        return None
    return build_project_detail(project, await _get_items(session, project_id))


async def regenerate_checklist(session: AsyncSession, project: Project) -> List[ChecklistItem]:
    """
    Replace a project's checklist with a freshly generated one.

    Items whose category, title and description did not change keep their
    completion flag; everything else starts unchecked. Caller commits.
    """
    old_items = await _get_items(session, project.id)
    carried_over = {
        (item.category.value, item.title, item.description): item.is_completed
        for item in old_items
    }
    await session.execute(
        delete(ChecklistItem).where(ChecklistItem.project_id == project.id)
    )
    items = _build_items(project, carried_over)
    session.add_all(items)
    return items


async def update_project(
    session: AsyncSession,
    project_id: int,
    updates: ProjectUpdate
) -> ProjectDetail:
    """
    Apply a partial update to a project.

    Changing panel count, inverter power or roof type regenerates the
    checklist.
    """
    project = await session.get(Project, project_id)
    if not project:
        raise ValueError(f"Project {project_id} not found")

    changes = updates.model_dump(exclude_unset=True)
    inputs_changed = any(
        changes.get(field) is not None and changes[field] != getattr(project, field)
        for field in GENERATOR_INPUTS
    )

    for field, value in changes.items():
        if value is None and field in REQUIRED_FIELDS:
            continue
        setattr(project, field, value)
    project.updated_at = utc_now()

    if inputs_changed:
        items = await regenerate_checklist(session, project)
        logger.info(
            "Regenerated checklist of project %s (%d items)", project_id, len(items)
        )

    await session.commit()
    await session.refresh(project)
    return build_project_detail(project, await _get_items(session, project_id))


async def update_project_status(
    session: AsyncSession,
    project_id: int,
    status: ProjectStatus
) -> Project:
    """Set project status explicitly."""
    project = await session.get(Project, project_id)
    if not project:
        raise ValueError(f"Project {project_id} not found")

    project.status = status
    project.updated_at = utc_now()
    await session.commit()
    await session.refresh(project)

    logger.info("Project %s status set to %s", project_id, status.value)
    return project


async def delete_project(session: AsyncSession, project_id: int) -> None:
    """Delete a project together with its checklist items."""
    project = await session.get(Project, project_id)
    if not project:
        raise ValueError(f"Project {project_id} not found")

    await session.execute(
        delete(ChecklistItem).where(ChecklistItem.project_id == project_id)
    )
    await session.delete(project)
    await session.commit()

    logger.info("Deleted project %s", project_id)


async def update_checklist_item(
    session: AsyncSession,
    item_id: int,
    updates: ChecklistItemUpdate
) -> ChecklistItem:
    """
    Toggle an item and advance the owning project's status.

    The completion flag and any resulting status change commit together.
    """
    item = await session.get(ChecklistItem, item_id)
    if not item:
        raise ValueError(f"Checklist item {item_id} not found")

    item.is_completed = updates.is_completed

    project = await session.get(Project, item.project_id)
    items = await _get_items(session, item.project_id)
    completed = sum(1 for i in items if i.is_completed)
    new_status = next_status(project.status, completed, len(items))

    if new_status != project.status:
        logger.info(
            "Project %s moved from %s to %s (%d/%d items done)",
            project.id,
            project.status.value,
            new_status.value,
            completed,
            len(items)
        )
        project.status = new_status
        project.updated_at = utc_now()

    await session.commit()
    await session.refresh(item)
    return item
