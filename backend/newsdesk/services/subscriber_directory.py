"""Subscriber directory: listing, search/category filtering and activation toggles."""
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Literal, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.models.subscriber import Subscriber, SubscriptionTier
from newsdesk.schemas.subscriber import SubscriberCounts

logger = logging.getLogger(__name__)

DirectoryFilter = Literal["all", "active", "inactive", "free", "pro"]


async def list_subscribers(db: AsyncSession) -> List[Subscriber]:
    result = await db.execute(select(Subscriber).order_by(desc(Subscriber.created_at)))
    return list(result.scalars().all())


def _matches_search(subscriber: Subscriber, term: str) -> bool:
    if not term:
        return True
    term = term.lower()
    if term in subscriber.email.lower():
        return True
    return bool(subscriber.name) and term in subscriber.name.lower()


def _matches_category(subscriber: Subscriber, category: DirectoryFilter) -> bool:
    if category == "active":
        return subscriber.is_active
    if category == "inactive":
        return not subscriber.is_active
    if category == "free":
        return subscriber.subscription_tier == SubscriptionTier.FREE
    if category == "pro":
        return subscriber.subscription_tier == SubscriptionTier.PRO
    return True


def filter_subscribers(
    subscribers: Iterable[Subscriber],
    search: str = "",
    category: DirectoryFilter = "all",
) -> List[Subscriber]:
    """Case-insensitive substring match on email or name, combined with a category filter.

    Runs over an already loaded list and preserves its order.
    """
    return [
        s for s in subscribers
        if _matches_search(s, search or "") and _matches_category(s, category)
    ]


def count_by_category(subscribers: Iterable[Subscriber]) -> SubscriberCounts:
    subscribers = list(subscribers)
    return SubscriberCounts(
        all=len(subscribers),
        active=sum(1 for s in subscribers if s.is_active),
        inactive=sum(1 for s in subscribers if not s.is_active),
        free=sum(1 for s in subscribers if s.subscription_tier == SubscriptionTier.FREE),
        pro=sum(1 for s in subscribers if s.subscription_tier == SubscriptionTier.PRO),
    )


async def find_subscriber_by_email(db: AsyncSession, email: str) -> Optional[Subscriber]:
    result = await db.execute(select(Subscriber).where(Subscriber.email == email))
    return result.scalars().first()


async def toggle_active(db: AsyncSession, subscriber_id: UUID) -> Subscriber:
    result = await db.execute(select(Subscriber).where(Subscriber.id == subscriber_id))
    subscriber = result.scalar_one_or_none()
    if subscriber is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subscriber not found")

    subscriber.is_active = not subscriber.is_active
    subscriber.updated_at = datetime.now(timezone.utc)
    await db.flush()
    logger.info(f"Subscriber {subscriber.id} is_active={subscriber.is_active}")
    return subscriber
