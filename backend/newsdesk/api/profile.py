import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.auth.guard import current_profile
from newsdesk.database import get_db
from newsdesk.models.profile import Profile
from newsdesk.schemas.profile import ProfileRead, ProfileUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ProfileRead)
async def get_profile(profile: Profile = Depends(current_profile)):
    return profile


@router.put("", response_model=ProfileRead)
async def update_profile(
    payload: ProfileUpdate,
    profile: Profile = Depends(current_profile),
    db: AsyncSession = Depends(get_db),
):
    """Update the display name shown in the dashboard settings page."""
    try:
        profile.name = payload.name
        await db.flush()
        await db.refresh(profile)
    except SQLAlchemyError as e:
        logger.error(f"Profile update failed for {profile.id}: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error updating profile",
        )
    return profile
