"""Public subscription intake."""
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.models.subscriber import Subscriber, SubscriptionTier
from newsdesk.utils.redaction import redact_email

logger = logging.getLogger(__name__)


async def subscribe(db: AsyncSession, email: Optional[str], name: Optional[str] = None) -> str:
    """Add ``email`` to the list, or reactivate it if it previously left.

    Returns the message to show the reader. Raises a 400 when the email is
    missing or already has an active subscription.
    """
    if not email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is required")

    result = await db.execute(select(Subscriber).where(Subscriber.email == email))
    existing = result.scalars().first()

    if existing:
        if existing.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already subscribed")
        existing.is_active = True
        existing.updated_at = datetime.now(timezone.utc)
        await db.flush()
        logger.info(f"Reactivated subscriber {redact_email(email)}")
        return "Successfully resubscribed!"

    db.add(
        Subscriber(
            email=email,
            name=name,
            subscription_tier=SubscriptionTier.FREE,
            is_active=True,
        )
    )
    await db.flush()
    logger.info(f"New subscriber {redact_email(email)}")
    return "Successfully subscribed!"
