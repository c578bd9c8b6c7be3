import logging
import time

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tinylink.core.config import APP_VERSION
from tinylink.db.database import get_db
from tinylink.models.schemas import DbHealth, Health

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

STARTED_AT = time.monotonic()


def check_database(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)
        return False
    return True


@router.get("/healthz", response_model=Health)
def healthz(db: Session = Depends(get_db)):
    db_ok = check_database(db)
    return Health(
        ok=db_ok,
        version=APP_VERSION,
        uptime=round(time.monotonic() - STARTED_AT, 3),
        db=DbHealth(ok=db_ok),
    )
