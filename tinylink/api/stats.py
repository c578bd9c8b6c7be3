from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tinylink.db.database import get_db
from tinylink.models.schemas import Dashboard
from tinylink.services import stats_service

router = APIRouter(tags=["stats"], prefix="/api/stats")


@router.get("", response_model=Dashboard)
def get_dashboard(db: Session = Depends(get_db)):
    return stats_service.get_dashboard(db)
