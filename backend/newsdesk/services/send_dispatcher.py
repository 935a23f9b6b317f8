"""Newsletter send dispatcher.

There is no mail transport: a send resolves the eligible audience, writes one
``newsletter_sends`` row per reader, logs a simulated delivery line for each
and waits a fixed delay to stand in for network latency.

Nothing prevents sending the same issue twice; every trigger appends a fresh
batch of send rows.
"""
import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List

import structlog
from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.config import get_settings
from newsdesk.models.newsletter import Newsletter, NewsletterSend
from newsdesk.models.subscriber import Subscriber, SubscriptionTier
from newsdesk.services.newsletter_service import find_newsletter

logger = structlog.get_logger(__name__)


@dataclass
class SendResult:
    sent_count: int
    newsletter_title: str


def eligible_subscribers(newsletter: Newsletter, subscribers: Iterable[Subscriber]) -> List[Subscriber]:
    """Premium issues go to pro readers only; everything else goes to every active reader."""
    subscribers = list(subscribers)
    if newsletter.is_premium:
        return [s for s in subscribers if s.subscription_tier == SubscriptionTier.PRO]
    return subscribers


async def _load_active_subscribers(db: AsyncSession) -> List[Subscriber]:
    try:
        result = await db.execute(select(Subscriber).where(Subscriber.is_active.is_(True)))
    except SQLAlchemyError as e:
        logger.error("Failed to fetch subscribers", error=f"{type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch subscribers",
        )
    return list(result.scalars().all())


async def _record_sends(db: AsyncSession, newsletter: Newsletter, audience: List[Subscriber]) -> None:
    sent_at = datetime.now(timezone.utc)
    # A failed batch is logged and the send still reports success
    try:
        records = [
            NewsletterSend(newsletter_id=newsletter.id, subscriber_id=s.id, sent_at=sent_at)
            for s in audience
        ]
        async with db.begin_nested():
            db.add_all(records)
    except SQLAlchemyError as e:
        logger.error(
            "Error creating send records",
            newsletter_id=str(newsletter.id),
            error=f"{type(e).__name__}: {e}",
        )


async def send_newsletter(db: AsyncSession, newsletter_id) -> SendResult:
    if not newsletter_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Newsletter ID is required")

    newsletter = await find_newsletter(db, newsletter_id)
    if newsletter is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Newsletter not found")

    if not newsletter.is_published:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Newsletter must be published first")

    subscribers = await _load_active_subscribers(db)
    if not subscribers:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No active subscribers found")

    audience = eligible_subscribers(newsletter, subscribers)
    if not audience:
        detail = (
            "No pro subscribers found for this premium newsletter"
            if newsletter.is_premium
            else "No subscribers found"
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    await _record_sends(db, newsletter, audience)

    logger.info(
        "Simulating newsletter send",
        newsletter_id=str(newsletter.id),
        recipients=len(audience),
    )
    for subscriber in audience:
        logger.info(
            "Sending newsletter",
            title=newsletter.title,
            to=subscriber.email,
        )

    delay = get_settings().send_simulated_delay_seconds
    if delay > 0:
        await asyncio.sleep(delay)

    return SendResult(sent_count=len(audience), newsletter_title=newsletter.title)
