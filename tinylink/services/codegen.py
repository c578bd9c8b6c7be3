import logging
import re
import secrets
import string

from sqlalchemy.orm import Session

from tinylink.core.config import CODE_MAX_ATTEMPTS
from tinylink.core.errors import CodeGenerationExhausted, DuplicateCodeError
from tinylink.db import crud
from tinylink.models.models import Link

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_letters + string.digits
CODE_LENGTHS = (6, 7, 8)
CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")

# Single-segment routes served ahead of GET /{code}; a link under one of
# these would never be reachable.
RESERVED_CODES = frozenset({"healthz"})


def generate_code() -> str:
    """Generate a random short code of 6 to 8 alphanumeric characters."""
    length = secrets.choice(CODE_LENGTHS)
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def is_valid_code(value: str) -> bool:
    return bool(CODE_PATTERN.fullmatch(value))


def is_reserved_code(value: str) -> bool:
    return value in RESERVED_CODES


def allocate_unique_code(
    db: Session, target_url: str, max_attempts: int = CODE_MAX_ATTEMPTS
) -> Link:
    """Insert a link under a freshly generated code, retrying on collisions.

    The insert itself is the uniqueness check, so two writers can never both
    claim the same candidate.
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generate_code()
        if is_reserved_code(candidate):
            logger.debug("Skipping reserved code %s (attempt %d/%d)", candidate, attempt, max_attempts)
            continue
        try:
            return crud.insert_link(db, candidate, target_url)
        except DuplicateCodeError:
            logger.debug("Code collision on %s (attempt %d/%d)", candidate, attempt, max_attempts)

    logger.warning("Gave up allocating a short code after %d attempts", max_attempts)
    raise CodeGenerationExhausted(max_attempts)
