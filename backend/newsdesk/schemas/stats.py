from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from newsdesk.schemas.newsletter import NewsletterRead
from newsdesk.schemas.profile import ProfileRead


class DashboardStats(BaseModel):
    """Headline counters for the dashboard home page."""
    subscriber_count: int
    total_newsletters: int
    published_newsletters: int
    draft_newsletters: int
    open_rate: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DashboardOverview(BaseModel):
    """Everything the dashboard landing page needs in one response."""
    profile: ProfileRead
    newsletters: List[NewsletterRead]
    subscriber_count: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
