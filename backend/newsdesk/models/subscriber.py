import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String, Enum as SQLEnum
from fastapi_users_db_sqlalchemy.generics import GUID

from newsdesk.database import Base


class SubscriptionTier(str, enum.Enum):
    """Payment level of a reader; ``pro`` unlocks premium newsletters."""
    FREE = "free"
    PRO = "pro"


class Subscriber(Base):
    __tablename__ = "subscribers"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    subscription_tier = Column(
        SQLEnum(SubscriptionTier, values_callable=lambda x: [e.value for e in x]),
        default=SubscriptionTier.FREE,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
