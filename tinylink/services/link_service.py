import logging

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from tinylink.core.errors import (
    CodeConflict,
    CodeGenerationExhausted,
    DuplicateCodeError,
    InvalidInput,
    LinkNotFound,
    ServiceUnavailable,
)
from tinylink.db import crud
from tinylink.models.models import Link
from tinylink.models.schemas import LinkCreate, LinkList
from tinylink.services.codegen import allocate_unique_code, is_reserved_code, is_valid_code
from tinylink.services.stats_service import summarize

logger = logging.getLogger(__name__)

_url_adapter = TypeAdapter(AnyHttpUrl)


def validate_target_url(target_url: str) -> str:
    """Return the stripped URL if it is an absolute http(s) URL."""
    candidate = target_url.strip()
    try:
        _url_adapter.validate_python(candidate)
    except ValidationError:
        raise InvalidInput(f"'{target_url}' is not a valid absolute http(s) URL")
    return candidate


def create_link(db: Session, link_data: LinkCreate) -> Link:
    """Create a new short link, under a custom code if one was supplied."""
    target_url = validate_target_url(link_data.target_url)

    if link_data.code is not None:
        if not is_valid_code(link_data.code):
            raise InvalidInput("Code must be 6 to 8 letters or digits")
        if is_reserved_code(link_data.code):
            raise CodeConflict(link_data.code)
        try:
            link = crud.insert_link(db, link_data.code, target_url)
        except DuplicateCodeError:
            raise CodeConflict(link_data.code)
    else:
        try:
            link = allocate_unique_code(db, target_url)
        except CodeGenerationExhausted:
            raise ServiceUnavailable()

    logger.info("Created link %s -> %s", link.code, link.target_url)
    return link


def get_link(db: Session, code: str) -> Link:
    link = crud.find_by_code(db, code)
    if link is None or link.deleted:
        raise LinkNotFound(code)
    return link


def delete_link(db: Session, code: str) -> None:
    """Soft-delete a link. Deleting an already deleted link is reported as not found."""
    if not crud.soft_delete(db, code):
        raise LinkNotFound(code)
    logger.info("Deleted link %s", code)


def list_links(db: Session) -> LinkList:
    """List active links, newest first, with aggregate click stats."""
    links = crud.list_active(db)
    summary = summarize(links)
    return LinkList(
        links_count=summary.total_links,
        total_clicks=summary.total_clicks,
        average_clicks=summary.average_clicks,
        links=links,
    )
