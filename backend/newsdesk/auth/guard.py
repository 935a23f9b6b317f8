"""Dashboard session guard.

Every dashboard endpoint depends on ``current_profile``: it requires an
authenticated user and creates the matching ``profiles`` row the first time
that user reaches the dashboard.
"""
import logging

from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.auth.users import current_active_user
from newsdesk.database import get_db
from newsdesk.models.profile import Profile, ProfileRole
from newsdesk.models.user import User
from newsdesk.utils.redaction import redact_email

logger = logging.getLogger(__name__)


async def get_or_create_profile(db: AsyncSession, user: User) -> Profile:
    result = await db.execute(select(Profile).where(Profile.id == user.id))
    profile = result.scalar_one_or_none()
    if profile is not None:
        return profile

    logger.info(f"No profile for {redact_email(user.email)}, creating one")
    profile = Profile(
        id=user.id,
        email=user.email or "",
        name=getattr(user, "full_name", None) or "",
        role=ProfileRole.SUBSCRIBER,
    )
    db.add(profile)
    await db.flush()
    return profile


async def current_profile(
    user: User = Depends(current_active_user),
    db: AsyncSession = Depends(get_db),
) -> Profile:
    try:
        return await get_or_create_profile(db, user)
    except SQLAlchemyError as e:
        logger.error(f"Failed to resolve profile for user {user.id}: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
