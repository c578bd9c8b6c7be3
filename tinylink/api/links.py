from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from tinylink.db.database import get_db
from tinylink.models.schemas import Link, LinkCreate, LinkList
from tinylink.services.link_service import create_link, delete_link, get_link, list_links

router = APIRouter(tags=["links"], prefix="/api/links")


@router.get("", response_model=LinkList)
def get_links(db: Session = Depends(get_db)):
    """List active links with aggregate click stats."""
    return list_links(db)


@router.post("", response_model=Link, status_code=201)
def shorten_url(link_data: LinkCreate, db: Session = Depends(get_db)):
    """Create a new short link."""
    return create_link(db, link_data)


@router.get("/{code}", response_model=Link)
def get_link_info(code: str, db: Session = Depends(get_db)):
    """Get information about a specific link."""
    return get_link(db, code)


@router.delete("/{code}", status_code=204)
def remove_link(code: str, db: Session = Depends(get_db)):
    """Soft-delete a link."""
    delete_link(db, code)
    return Response(status_code=204)
