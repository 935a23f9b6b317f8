"""Newsletter editor and draft/published lifecycle.

A newsletter is either a draft (``is_published`` false, ``published_at``
null) or published (``is_published`` true, ``published_at`` stamped). Both
states are reachable from each other at any time.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.models.newsletter import Newsletter
from newsdesk.schemas.newsletter import NewsletterSave

logger = logging.getLogger(__name__)


def parse_newsletter_id(value) -> Optional[UUID]:
    """Coerce a client supplied id to a UUID, or None when it is malformed."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Newsletter not found")


def apply_publish_state(newsletter: Newsletter, published: bool) -> None:
    newsletter.is_published = published
    newsletter.published_at = datetime.now(timezone.utc) if published else None


async def find_newsletter(db: AsyncSession, newsletter_id) -> Optional[Newsletter]:
    parsed = parse_newsletter_id(newsletter_id)
    if parsed is None:
        return None
    result = await db.execute(select(Newsletter).where(Newsletter.id == parsed))
    return result.scalar_one_or_none()


async def find_authored_newsletter(db: AsyncSession, newsletter_id, author_id: UUID) -> Optional[Newsletter]:
    parsed = parse_newsletter_id(newsletter_id)
    if parsed is None:
        return None
    result = await db.execute(
        select(Newsletter).where(Newsletter.id == parsed, Newsletter.author_id == author_id)
    )
    return result.scalar_one_or_none()


async def get_newsletter(db: AsyncSession, newsletter_id) -> Newsletter:
    newsletter = await find_newsletter(db, newsletter_id)
    if newsletter is None:
        raise _not_found()
    return newsletter


async def list_newsletters(db: AsyncSession, limit: Optional[int] = None) -> List[Newsletter]:
    query = select(Newsletter).order_by(desc(Newsletter.created_at))
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def save_newsletter(
    db: AsyncSession,
    payload: NewsletterSave,
    author_id: UUID,
    newsletter_id: Optional[UUID] = None,
) -> Newsletter:
    """Create a newsletter, or overwrite an existing one when ``newsletter_id`` is given.

    Saving always resets the publish state from ``payload.publish``: a
    published issue saved as a draft goes back to draft. Only the author
    can overwrite an issue; anyone else gets a 404.
    """
    if newsletter_id is None:
        newsletter = Newsletter(author_id=author_id)
        db.add(newsletter)
    else:
        newsletter = await find_authored_newsletter(db, newsletter_id, author_id)
        if newsletter is None:
            raise _not_found()

    newsletter.title = payload.title
    newsletter.content = payload.content
    newsletter.excerpt = payload.excerpt
    newsletter.is_premium = payload.is_premium
    apply_publish_state(newsletter, payload.publish)

    await db.flush()
    await db.refresh(newsletter)
    logger.info(
        f"Saved newsletter {newsletter.id} "
        f"({'published' if newsletter.is_published else 'draft'})"
    )
    return newsletter


async def toggle_publish(db: AsyncSession, newsletter_id) -> Newsletter:
    newsletter = await get_newsletter(db, newsletter_id)
    apply_publish_state(newsletter, not newsletter.is_published)
    await db.flush()
    await db.refresh(newsletter)
    logger.info(f"Newsletter {newsletter.id} is_published={newsletter.is_published}")
    return newsletter


async def delete_newsletter(db: AsyncSession, newsletter_id) -> None:
    # Send records are left untouched and keep pointing at the removed id
    parsed = parse_newsletter_id(newsletter_id)
    if parsed is None:
        raise _not_found()
    result = await db.execute(delete(Newsletter).where(Newsletter.id == parsed))
    if result.rowcount == 0:
        raise _not_found()
    logger.info(f"Deleted newsletter {parsed}")
