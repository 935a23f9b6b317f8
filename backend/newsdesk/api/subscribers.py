import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.auth.guard import current_profile
from newsdesk.database import get_db
from newsdesk.models.profile import Profile
from newsdesk.schemas.subscriber import SubscriberCounts, SubscriberListResponse, SubscriberRead
from newsdesk.services.subscriber_directory import (
    DirectoryFilter,
    count_by_category,
    filter_subscribers,
    list_subscribers,
    toggle_active,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=SubscriberListResponse)
async def get_subscribers(
    search: Optional[str] = Query(None, max_length=255),
    filter: DirectoryFilter = Query("all"),
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """List subscribers newest first, optionally narrowed by a search term and a category."""
    try:
        subscribers = await list_subscribers(db)
    except SQLAlchemyError as e:
        logger.error(f"Fetch subscribers error: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return {"subscribers": filter_subscribers(subscribers, search or "", filter)}


@router.get("/summary", response_model=SubscriberCounts)
async def get_subscriber_summary(
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """Totals for each directory filter tab."""
    try:
        subscribers = await list_subscribers(db)
    except SQLAlchemyError as e:
        logger.error(f"Subscriber summary error: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return count_by_category(subscribers)


@router.post("/{subscriber_id}/toggle-active", response_model=SubscriberRead)
async def toggle_subscriber_active(
    subscriber_id: UUID,
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """Activate an inactive subscriber or deactivate an active one."""
    try:
        return await toggle_active(db, subscriber_id)
    except SQLAlchemyError as e:
        logger.error(f"Toggle subscriber {subscriber_id} failed: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
