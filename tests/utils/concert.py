from datetime import date

from sqlalchemy.orm import Session

from showlog import crud
from showlog.models.concert import Concert
from showlog.schemas.concert import ConcertCreate


def create_random_concert(
    db: Session,
    venue_id: int,
    artist: str = "Test Artist",
    show_date: date = date(2016, 3, 15),
    **extra,
) -> Concert:
    """
    Creates a dummy concert at the given venue for testing purposes.
    """
    concert_in = ConcertCreate(
        artist=artist, date=show_date, venue_id=venue_id, **extra
    )
    return crud.concert.create(db, obj_in=concert_in)
