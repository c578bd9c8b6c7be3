from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema that speaks camelCase JSON but accepts snake_case too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LinkCreate(CamelModel):
    target_url: str
    code: Optional[str] = None


class Link(CamelModel):
    id: int
    code: str
    target_url: str
    click_count: int
    last_clicked_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LinkSummary(CamelModel):
    total_links: int = 0
    total_clicks: int = 0
    average_clicks: float = 0.0


class LinkList(CamelModel):
    links_count: int
    total_clicks: int
    average_clicks: float
    links: List[Link]


class Dashboard(LinkSummary):
    top_links: List[Link] = []
    recent_links: List[Link] = []


class DbHealth(BaseModel):
    ok: bool


class Health(BaseModel):
    ok: bool
    version: str
    uptime: float
    db: DbHealth
