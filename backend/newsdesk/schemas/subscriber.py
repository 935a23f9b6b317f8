from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from newsdesk.models.subscriber import SubscriptionTier


class SubscribeRequest(BaseModel):
    # Only presence is checked; the address format is not validated
    email: Optional[str] = None
    name: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class SubscriberRead(BaseModel):
    id: UUID
    email: str
    name: Optional[str] = None
    subscription_tier: SubscriptionTier
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SubscriberListResponse(BaseModel):
    subscribers: List[SubscriberRead]


class SubscriberCounts(BaseModel):
    """Directory totals per filter category."""
    all: int
    active: int
    inactive: int
    free: int
    pro: int
