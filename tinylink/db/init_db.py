import logging

from sqlalchemy.engine import Engine

from tinylink.core.logging_config import setup_logging
from tinylink.db.database import Base, engine as default_engine

# registers the links table on Base.metadata
from tinylink.models import models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine = default_engine) -> None:
    """Create the links table and its indexes if they do not exist yet."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready at %s", engine.url.render_as_string(hide_password=True))


def main() -> None:
    """Initialize database."""
    setup_logging()
    init_db()


if __name__ == "__main__":
    main()
