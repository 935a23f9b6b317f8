import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.auth.guard import current_profile
from newsdesk.config import get_settings
from newsdesk.database import get_db
from newsdesk.models.profile import Profile
from newsdesk.schemas.newsletter import NewsletterRead
from newsdesk.schemas.profile import ProfileRead
from newsdesk.schemas.stats import DashboardOverview, DashboardStats
from newsdesk.services.newsletter_service import list_newsletters
from newsdesk.services.stats_service import compute_dashboard_stats, count_active_subscribers

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DashboardOverview)
async def get_dashboard(
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """Landing data for the dashboard: the caller's profile, recent newsletters and the audience size."""
    try:
        newsletters = await list_newsletters(db, limit=get_settings().dashboard_recent_newsletters)
        subscriber_count = await count_active_subscribers(db)
    except SQLAlchemyError as e:
        logger.error(f"Dashboard error: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return DashboardOverview(
        profile=ProfileRead.model_validate(profile),
        newsletters=[NewsletterRead.model_validate(n) for n in newsletters],
        subscriber_count=subscriber_count,
    )


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """
    Headline counters: active subscribers, total newsletters, published and
    draft newsletters, and the open rate shown on the dashboard cards.
    """
    try:
        return await compute_dashboard_stats(db)
    except SQLAlchemyError as e:
        logger.error(f"Dashboard stats error: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
