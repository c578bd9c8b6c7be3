from typing import Iterable, Optional

from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from tinylink.core.config import STATS_RECENT_LIMIT, STATS_TOP_LIMIT
from tinylink.models.models import Link
from tinylink.models.schemas import Dashboard, LinkSummary


def summarize(links: Iterable[Link]) -> LinkSummary:
    """Aggregate click stats over a set of links."""
    total_links = 0
    total_clicks = 0
    for link in links:
        total_links += 1
        total_clicks += link.click_count or 0

    average = total_clicks / total_links if total_links else 0.0
    return LinkSummary(total_links=total_links, total_clicks=total_clicks, average_clicks=average)


def get_top_links(db: Session, limit: Optional[int] = None) -> list[Link]:
    """Most clicked active links first."""
    if limit is None:
        limit = STATS_TOP_LIMIT

    return (
        db.query(Link)
        .filter(Link.deleted == False)  # noqa: E712
        .order_by(Link.click_count.desc(), Link.id.asc())
        .limit(limit)
        .all()
    )


def get_recent_links(db: Session, limit: Optional[int] = None) -> list[Link]:
    """
    Get the most recently created active links.
    Limit is taken from environment variable STATS_RECENT_LIMIT if not specified.
    """
    if limit is None:
        limit = STATS_RECENT_LIMIT

    return (
        db.query(Link)
        .filter(Link.deleted == False)  # noqa: E712
        .order_by(Link.created_at.desc(), Link.id.desc())
        .limit(limit)
        .all()
    )


def get_summary(db: Session) -> LinkSummary:
    """Totals over active links, computed by the database in one query."""
    total_links, total_clicks = (
        db.query(func.count(Link.id), func.coalesce(func.sum(Link.click_count), 0))
        .filter(Link.deleted == False)  # noqa: E712
        .one()
    )
    average = total_clicks / total_links if total_links else 0.0
    return LinkSummary(total_links=total_links, total_clicks=total_clicks, average_clicks=average)


def get_dashboard(db: Session) -> Dashboard:
    summary = get_summary(db)
    return Dashboard(
        **summary.model_dump(),
        top_links=get_top_links(db),
        recent_links=get_recent_links(db),
    )
