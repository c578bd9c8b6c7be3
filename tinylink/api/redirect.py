from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from starlette.responses import RedirectResponse

from tinylink.core.errors import LinkNotFound
from tinylink.db.database import get_db
from tinylink.services.codegen import is_valid_code
from tinylink.services.redirect_service import resolve_redirect

router = APIRouter(tags=["redirect"])


@router.get("/{code}", response_class=RedirectResponse, status_code=307)
def redirect_to_url(code: str, db: Session = Depends(get_db)):
    """Redirect to the target URL and count the click."""
    if not is_valid_code(code):
        raise LinkNotFound(code)
    return RedirectResponse(url=resolve_redirect(db, code), status_code=307)
