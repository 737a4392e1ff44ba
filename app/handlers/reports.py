"""
Report and aggregation handlers.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select, func
from typing import Dict, Any

from app.models.project import Project, ProjectStatus
from app.models.checklist import ChecklistItem, ChecklistCategory, ProjectDetail
from app.core.constants import PANEL_POWER_W

CATEGORY_LABELS = {
    ChecklistCategory.SAFETY: "Safety",
    ChecklistCategory.ELECTRICAL_MATERIALS: "Electrical materials",
    ChecklistCategory.STRUCTURE: "Structure",
}

STATUS_LABELS = {
    ProjectStatus.PLANNING: "Planning",
    ProjectStatus.IN_PROGRESS: "In progress",
    ProjectStatus.COMPLETED: "Completed",
}


async def get_portfolio_summary(session: AsyncSession) -> Dict[str, Any]:
    """
    Get portfolio-level aggregation summary.

    Returns:
        Dictionary with project counts per status, installed power and
        checklist completion totals
    """
    total_projects = await session.execute(select(func.count(Project.id)))
    project_count = total_projects.scalar() or 0

    status_rows = await session.execute(
        select(Project.status, func.count(Project.id)).group_by(Project.status)
    )
    by_status = {status: count for status, count in status_rows.all()}

    total_panels = await session.execute(select(func.sum(Project.panel_count)))
    panel_count = total_panels.scalar() or 0

    total_items = await session.execute(select(func.count(ChecklistItem.id)))
    item_count = total_items.scalar() or 0

    completed_items = await session.execute(
        select(func.count(ChecklistItem.id)).where(
            ChecklistItem.is_completed.is_(True)
        )
    )
    completed_count = completed_items.scalar() or 0

    return {
        "total_projects": project_count,
        "planning_projects": by_status.get(ProjectStatus.PLANNING, 0),
        "in_progress_projects": by_status.get(ProjectStatus.IN_PROGRESS, 0),
        "completed_projects": by_status.get(ProjectStatus.COMPLETED, 0),
        "total_panels": panel_count,
        "total_panel_power_kw": round(panel_count * PANEL_POWER_W / 1000.0, 2),
        "total_checklist_items": item_count,
        "completed_checklist_items": completed_count,
    }


def render_checklist_export(detail: ProjectDetail) -> str:
    """
    Render a project and its checklist as plain text.

    Items are grouped by category in display order, each prefixed with
    [x] when completed and [ ] otherwise.
    """
    info = [
        ("Name", detail.name),
        ("Inverter power", f"{detail.inverter_power_kw:g} kW"),
        ("Inverter brand", detail.inverter_brand or "Not specified"),
        ("Panels", f"{detail.panel_count} units"),
        ("Installation type", detail.roof_type.value),
        ("String configuration", detail.string_configuration),
        ("Status", STATUS_LABELS[detail.status]),
        ("Progress", f"{detail.completed_items} of {detail.total_items} items ({detail.progress_percent}%)"),
    ]
    if detail.address:
        info.append(("Address", detail.address))
    if detail.phone:
        info.append(("Phone", detail.phone))
    if detail.installation_date:
        info.append(("Installation date", detail.installation_date.isoformat()))
    if detail.installer:
        info.append(("Installer", detail.installer))

    width = max(len(label) for label, _ in info)
    lines = ["SOLAR PROJECT REPORT", detail.name, "", "PROJECT INFORMATION"]
    lines.extend(f"{label.ljust(width)}  {value}" for label, value in info)
    lines.extend(["", "MATERIALS CHECKLIST"])

    for category in ChecklistCategory:
        items = [item for item in detail.checklist_items if item.category == category]
        if not items:
            continue
        lines.extend(["", CATEGORY_LABELS[category]])
        for item in items:
            mark = "[x]" if item.is_completed else "[ ]"
            lines.append(f"{mark} {item.title}")
            if item.description:
                lines.append(f"    {item.description}")

    return "\n".join(lines) + "\n"
