"""Storage operations for links.

Every mutation is a single statement so concurrent requests never race on a
read-modify-write of the same row.
"""
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from tinylink.core.errors import DuplicateCodeError
from tinylink.models.models import Link


def insert_link(db: Session, code: str, target_url: str) -> Link:
    """Persist a new link, relying on the unique index to reject taken codes."""
    link = Link(code=code, target_url=target_url)
    db.add(link)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # only a row already holding the code makes this a collision
        if find_by_code(db, code) is not None:
            raise DuplicateCodeError(code) from exc
        raise
    db.refresh(link)
    return link


def find_by_code(db: Session, code: str) -> Optional[Link]:
    """Look a link up by code, soft-deleted rows included."""
    return db.query(Link).filter(Link.code == code).first()


def list_active(db: Session) -> list[Link]:
    return (
        db.query(Link)
        .filter(Link.deleted == False)  # noqa: E712
        .order_by(Link.created_at.desc(), Link.id.desc())
        .all()
    )


def soft_delete(db: Session, code: str) -> bool:
    """Flag an active link as deleted. Returns False when no active row matched."""
    updated = (
        db.query(Link)
        .filter(Link.code == code, Link.deleted == False)  # noqa: E712
        .update({Link.deleted: True}, synchronize_session=False)
    )
    db.commit()
    return updated > 0


def record_click(db: Session, code: str) -> Optional[Link]:
    """Increment the click counter of an active link in place.

    Issues ``UPDATE links SET click_count = click_count + 1, last_clicked_at = now()``
    so the database applies the increment atomically.
    """
    updated = (
        db.query(Link)
        .filter(Link.code == code, Link.deleted == False)  # noqa: E712
        .update(
            {Link.click_count: Link.click_count + 1, Link.last_clicked_at: func.now()},
            synchronize_session=False,
        )
    )
    db.commit()
    if not updated:
        return None
    return find_by_code(db, code)
