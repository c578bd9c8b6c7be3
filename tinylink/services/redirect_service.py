import logging

from sqlalchemy.orm import Session

from tinylink.core.errors import LinkNotFound
from tinylink.db import crud

logger = logging.getLogger(__name__)


def resolve_redirect(db: Session, code: str) -> str:
    """Record a visit on an active link and return where to send the visitor.

    Storage errors propagate to the caller untouched; retrying here could
    count the same visit twice.
    """
    link = crud.find_by_code(db, code)
    if link is None or link.deleted:
        raise LinkNotFound(code)

    clicked = crud.record_click(db, code)
    if clicked is None:
        # deleted between lookup and update
        raise LinkNotFound(code)

    logger.debug("Redirecting %s -> %s (clicks=%d)", code, clicked.target_url, clicked.click_count)
    return clicked.target_url
