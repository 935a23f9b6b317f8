from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NewsletterSave(BaseModel):
    """Editor payload. ``publish`` picks between "Save Draft" and "Publish"."""
    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = None
    is_premium: bool = False
    publish: bool = False


class NewsletterRead(BaseModel):
    id: UUID
    title: str
    content: str
    excerpt: Optional[str] = None
    is_published: bool
    is_premium: bool
    published_at: Optional[datetime] = None
    view_count: int
    author_id: Optional[UUID] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NewsletterListResponse(BaseModel):
    newsletters: List[NewsletterRead]


class SendNewsletterRequest(BaseModel):
    newsletter_id: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SendNewsletterResponse(BaseModel):
    message: str
    sent_count: int
    newsletter_title: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
