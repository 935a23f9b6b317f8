from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.config import get_settings
from newsdesk.models.newsletter import Newsletter
from newsdesk.models.subscriber import Subscriber
from newsdesk.schemas.stats import DashboardStats


async def count_active_subscribers(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(Subscriber).where(Subscriber.is_active.is_(True))
    )
    return result.scalar() or 0


async def compute_dashboard_stats(db: AsyncSession) -> DashboardStats:
    """Recount everything on each call. The open rate is a fixed placeholder until opens are tracked."""
    subscriber_count = await count_active_subscribers(db)

    total_result = await db.execute(select(func.count()).select_from(Newsletter))
    published_result = await db.execute(
        select(func.count()).select_from(Newsletter).where(Newsletter.is_published.is_(True))
    )
    draft_result = await db.execute(
        select(func.count()).select_from(Newsletter).where(Newsletter.is_published.is_(False))
    )

    return DashboardStats(
        subscriber_count=subscriber_count,
        total_newsletters=total_result.scalar() or 0,
        published_newsletters=published_result.scalar() or 0,
        draft_newsletters=draft_result.scalar() or 0,
        open_rate=get_settings().dashboard_open_rate,
    )
