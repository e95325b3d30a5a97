from sqlalchemy.orm import Session

from showlog import crud
from showlog.models.venue import Venue
from showlog.schemas.venue import VenueCreate


def create_random_venue(
    db: Session, name: str = "Test Venue", city: str = "Test City"
) -> Venue:
    """
    Creates a dummy venue for testing purposes.
    """
    venue_in = VenueCreate(
        name=name, city=city, address="123 Test Lane", latitude=1.5, longitude=-2.5
    )
    return crud.venue.create(db, obj_in=venue_in)
