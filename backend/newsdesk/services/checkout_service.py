"""Mock checkout. No payment provider is contacted anywhere in this module.

Confirmation is a timer: it waits, logs and reports success without writing
anything, so an anonymous caller cannot change a subscriber's tier.
"""
import asyncio
import logging
from typing import Optional, Union
from urllib.parse import quote

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.config import get_settings
from newsdesk.models.subscriber import SubscriptionTier
from newsdesk.services.subscriber_directory import find_subscriber_by_email
from newsdesk.utils.redaction import redact_email

logger = logging.getLogger(__name__)


def build_checkout_url(email: str, tier: Union[SubscriptionTier, str]) -> str:
    base = get_settings().site_url.rstrip("/")
    tier_value = tier.value if isinstance(tier, SubscriptionTier) else tier
    return f"{base}/checkout?email={quote(email, safe='')}&tier={quote(tier_value, safe='')}"


async def create_checkout(
    db: AsyncSession,
    email: Optional[str],
    tier: Optional[SubscriptionTier],
) -> str:
    if not email or not tier:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and tier are required")
    if await find_subscriber_by_email(db, email) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subscriber not found")
    return build_checkout_url(email, tier)


async def confirm_checkout(email: Optional[str], tier: SubscriptionTier) -> None:
    """Stand in for payment processing with a fixed delay."""
    delay = get_settings().checkout_simulated_delay_seconds
    if delay > 0:
        await asyncio.sleep(delay)
    logger.info(f"Simulated checkout completed for {redact_email(email)}: tier={tier.value}")
