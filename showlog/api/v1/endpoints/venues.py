# showlog/api/v1/endpoints/venues.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from showlog import crud
from showlog.core.exceptions import NotFoundError
from showlog.db.session import get_db
from showlog.schemas.concert import VenueDetail
from showlog.schemas.venue import Venue

router = APIRouter(tags=["Venues"])


@router.get("/venues", response_model=List[Venue])
def list_venues(db: Session = Depends(get_db)):
    """
    List all venues, alphabetically.
    """
    return crud.venue.get_multi_ordered(db)


@router.get("/venues/id/{venue_id}", response_model=Venue)
def get_venue(venue_id: int, db: Session = Depends(get_db)):
    venue = crud.venue.get(db, id=venue_id)
    if not venue:
        raise NotFoundError("Venue not found", details={"venueId": venue_id})
    return venue


@router.get("/venues/{slug}", response_model=VenueDetail)
def get_venue_by_slug(slug: str, db: Session = Depends(get_db)):
    """
    A venue and every concert played there, newest first.
    """
    venue = crud.venue.get_with_concerts(db, slug=slug)
    if not venue:
        raise NotFoundError("Venue not found", details={"slug": slug})
    return venue
