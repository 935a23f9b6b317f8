import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, Index
from fastapi_users_db_sqlalchemy.generics import GUID

from newsdesk.database import Base


class Newsletter(Base):
    """A newsletter issue. Two states only: draft (unpublished) or published."""
    __tablename__ = "newsletters"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    is_published = Column(Boolean, default=False, nullable=False, index=True)
    is_premium = Column(Boolean, default=False, nullable=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    view_count = Column(Integer, default=0, nullable=False)
    author_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))


class NewsletterSend(Base):
    """Append-only record of one simulated delivery to one subscriber.

    The id columns carry no foreign keys: deleting a newsletter leaves its
    send history behind.
    """
    __tablename__ = "newsletter_sends"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    newsletter_id = Column(GUID, nullable=False)
    subscriber_id = Column(GUID, nullable=False)
    sent_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    __table_args__ = (
        Index("ix_newsletter_sends_newsletter_subscriber", "newsletter_id", "subscriber_id"),
    )
