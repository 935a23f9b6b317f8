"""Row builders shared by the API tests."""
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from newsdesk.database import AsyncSessionLocal
from newsdesk.models.newsletter import Newsletter, NewsletterSend
from newsdesk.models.subscriber import Subscriber, SubscriptionTier


async def create_subscriber(
    email: str,
    tier: SubscriptionTier = SubscriptionTier.FREE,
    is_active: bool = True,
    name: str | None = None,
    created_at: datetime | None = None,
) -> Subscriber:
    now = created_at or datetime.now(timezone.utc)
    async with AsyncSessionLocal() as session:
        subscriber = Subscriber(
            email=email,
            name=name,
            subscription_tier=tier,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        session.add(subscriber)
        await session.commit()
        await session.refresh(subscriber)
        return subscriber


async def create_newsletter(
    title: str = "Weekly AI Brief",
    is_published: bool = True,
    is_premium: bool = False,
    age: timedelta = timedelta(0),
    author_id=None,
) -> Newsletter:
    now = datetime.now(timezone.utc) - age
    async with AsyncSessionLocal() as session:
        newsletter = Newsletter(
            title=title,
            content="Body text",
            excerpt="Short preview",
            is_published=is_published,
            is_premium=is_premium,
            published_at=now if is_published else None,
            created_at=now,
            author_id=author_id,
        )
        session.add(newsletter)
        await session.commit()
        await session.refresh(newsletter)
        return newsletter


async def get_subscriber(email: str) -> Subscriber | None:
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Subscriber).where(Subscriber.email == email))
        return result.scalars().first()


async def count_subscribers(email: str) -> int:
    async with AsyncSessionLocal() as session:
        result = await session.execute(
            select(func.count()).select_from(Subscriber).where(Subscriber.email == email)
        )
        return result.scalar()


async def list_sends(newsletter_id=None) -> list[NewsletterSend]:
    async with AsyncSessionLocal() as session:
        query = select(NewsletterSend)
        if newsletter_id is not None:
            query = query.where(NewsletterSend.newsletter_id == newsletter_id)
        result = await session.execute(query)
        return list(result.scalars().all())


async def create_user(email: str, full_name: str | None = None):
    from fastapi_users.password import PasswordHelper

    from newsdesk.models.user import User

    async with AsyncSessionLocal() as session:
        user = User(
            email=email,
            hashed_password=PasswordHelper().hash("password123"),
            is_active=True,
            is_superuser=False,
            is_verified=True,
            full_name=full_name,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


async def get_newsletter_row(newsletter_id) -> Newsletter | None:
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Newsletter).where(Newsletter.id == newsletter_id))
        return result.scalars().first()
