from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from newsdesk.models.profile import ProfileRole
from newsdesk.models.subscriber import SubscriptionTier


class ProfileRead(BaseModel):
    id: UUID
    email: str
    name: Optional[str] = None
    role: ProfileRole
    subscription_tier: SubscriptionTier
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    # role and tier are deliberately absent: clients cannot grant themselves admin or pro
    name: str = Field(..., max_length=255)
