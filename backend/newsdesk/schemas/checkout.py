from typing import Optional

from pydantic import BaseModel

from newsdesk.models.subscriber import SubscriptionTier


class CheckoutRequest(BaseModel):
    email: Optional[str] = None
    tier: Optional[SubscriptionTier] = None


class CheckoutResponse(BaseModel):
    url: str


class CheckoutConfirmRequest(BaseModel):
    # Echoed into the log line only; confirmation never touches the subscriber row
    email: Optional[str] = None
    tier: SubscriptionTier = SubscriptionTier.PRO


class CheckoutConfirmResponse(BaseModel):
    success: bool
    message: str
