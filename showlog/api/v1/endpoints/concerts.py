# showlog/api/v1/endpoints/concerts.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from showlog import crud
from showlog.core.exceptions import NotFoundError
from showlog.db.session import get_db
from showlog.schemas.concert import Concert

router = APIRouter(tags=["Concerts"])


@router.get("/", response_model=List[Concert])
def list_concerts(
    q: Optional[str] = Query(
        None, description="Search artist, event, notes, venue name or city"
    ),
    db: Session = Depends(get_db),
):
    """
    List every concert with its venue, newest first.
    """
    return crud.concert.get_multi_with_venue(db, search=q)


@router.get("/concerts/{concert_id}", response_model=Concert)
def get_concert(concert_id: int, db: Session = Depends(get_db)):
    concert = crud.concert.get(db, id=concert_id)
    if not concert:
        raise NotFoundError("Concert not found", details={"concertId": concert_id})
    return concert


@router.get("/artists/{slug}", response_model=List[Concert])
def list_artist_concerts(slug: str, db: Session = Depends(get_db)):
    """
    All concerts for one artist slug. An unknown slug is an empty list.
    """
    return crud.concert.get_multi_by_artist_slug(db, slug=slug)
