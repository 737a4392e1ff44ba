"""
Checklist item endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session
from app.models.checklist import ChecklistItemRead, ChecklistItemUpdate
from app.handlers.projects import update_checklist_item

router = APIRouter(prefix="/checklist-items", tags=["checklist"])


@router.patch("/{item_id}", response_model=ChecklistItemRead)
async def update_checklist_item_endpoint(
    item_id: int,
    updates: ChecklistItemUpdate,
    session: AsyncSession = Depends(get_session)
):
    """
    Mark a checklist item as done or not done.

    The owning project's status follows progress: the first checked item
    moves it from planning to in-progress, a fully checked list completes it.
    """
    try:
        return await update_checklist_item(session, item_id, updates)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
