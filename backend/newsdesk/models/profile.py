import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Enum as SQLEnum
from fastapi_users_db_sqlalchemy.generics import GUID

from newsdesk.database import Base
from newsdesk.models.subscriber import SubscriptionTier


class ProfileRole(str, enum.Enum):
    SUBSCRIBER = "subscriber"
    ADMIN = "admin"


class Profile(Base):
    """Per-user dashboard profile. Shares its primary key with ``users.id``."""
    __tablename__ = "profiles"

    id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    email = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    role = Column(
        SQLEnum(ProfileRole, values_callable=lambda x: [e.value for e in x]),
        default=ProfileRole.SUBSCRIBER,
        nullable=False,
    )
    subscription_tier = Column(
        SQLEnum(SubscriptionTier, values_callable=lambda x: [e.value for e in x]),
        default=SubscriptionTier.FREE,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))
