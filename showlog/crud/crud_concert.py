# showlog/crud/crud_concert.py
import logging
from typing import List, Optional

from sqlalchemy import Integer, cast, extract, func, or_
from sqlalchemy.orm import Session, joinedload

from .base import CRUDBase
from showlog.core.exceptions import NotFoundError
from showlog.models.concert import Concert
from showlog.models.venue import Venue
from showlog.schemas.concert import ConcertCreate, ConcertUpdate
from showlog.schemas.transfer import ConcertRecord
from showlog.utils.slug import require_slug

logger = logging.getLogger(__name__)

TOP_ARTISTS_LIMIT = 5
TOP_VENUES_LIMIT = 5
TOP_CITIES_LIMIT = 10


def media_urls(concert: Concert) -> List[str]:
    """Primary image first, then the gallery in display order."""
    urls = [concert.image_url] if concert.image_url else []
    urls.extend(concert.gallery or [])
    return urls


class CRUDConcert(CRUDBase[Concert, ConcertCreate, ConcertUpdate]):
    def get(self, db: Session, id: int) -> Optional[Concert]:
        return (
            db.query(Concert)
            .options(joinedload(Concert.venue))
            .filter(Concert.id == id)
            .first()
        )

    def get_multi_with_venue(
        self, db: Session, *, search: str | None = None
    ) -> List[Concert]:
        """
        All concerts, newest first, optionally filtered by a free-text search
        over artist, event name, notes, venue name and city.
        """
        query = db.query(Concert).join(Venue, Concert.venue_id == Venue.id)

        if search:
            term = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    Concert.artist.ilike(term),
                    Concert.event_name.ilike(term),
                    Concert.notes.ilike(term),
                    Venue.name.ilike(term),
                    Venue.city.ilike(term),
                )
            )

        return (
            query.options(joinedload(Concert.venue))
            .order_by(Concert.date.desc(), Concert.id.desc())
            .all()
        )

    def get_multi_by_artist_slug(self, db: Session, *, slug: str) -> List[Concert]:
        return (
            db.query(Concert)
            .options(joinedload(Concert.venue))
            .filter(Concert.artist_slug == slug)
            .order_by(Concert.date.desc(), Concert.id.desc())
            .all()
        )

    def _require_venue(self, db: Session, venue_id: int) -> None:
        if db.query(Venue.id).filter(Venue.id == venue_id).first() is None:
            raise NotFoundError(
                f"Venue {venue_id} not found", details={"venueId": venue_id}
            )

    def create(self, db: Session, *, obj_in: ConcertCreate) -> Concert:
        self._require_venue(db, obj_in.venue_id)
        data = obj_in.model_dump()
        db_obj = Concert(artist_slug=require_slug(obj_in.artist, "artist"), **data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        logger.info(f"Created concert {db_obj.id} ({db_obj.artist_slug})")
        return db_obj

    def update(
        self, db: Session, *, db_obj: Concert, obj_in: ConcertUpdate
    ) -> Concert:
        update_data = obj_in.model_dump(exclude_unset=True)

        if update_data.get("venue_id") is not None:
            self._require_venue(db, update_data["venue_id"])
        if update_data.get("artist"):
            update_data["artist_slug"] = require_slug(update_data["artist"], "artist")
        if "gallery" in update_data:
            update_data["gallery"] = list(update_data["gallery"] or [])
        if "image_url" in update_data:
            update_data["image_url"] = update_data["image_url"] or None

        # Required columns are never nulled by a partial update
        for field in ("date", "artist", "venue_id", "type"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, *, id: int) -> List[str]:
        """Delete concert and return its media URLs for cleanup."""
        db_obj = self.get(db, id=id)
        if db_obj is None:
            raise NotFoundError(f"Concert {id} not found")
        urls = media_urls(db_obj)
        db.delete(db_obj)
        db.commit()
        logger.info(f"Deleted concert {id}")
        return urls

    def insert_record(
        self, db: Session, *, record: ConcertRecord, venue_id: int
    ) -> Concert:
        """Stage an imported concert in the caller's transaction (no commit)."""
        db_obj = Concert(
            date=record.date,
            artist=record.artist,
            artist_slug=require_slug(record.artist, "artist"),
            venue_id=venue_id,
            type=record.type,
            event_name=record.event_name,
            setlist=record.setlist,
            notes=record.notes,
            image_url=record.image_url,
            gallery=list(record.gallery),
        )
        db.add(db_obj)
        db.flush()
        return db_obj

    def get_stats(self, db: Session) -> dict:
        """
        Aggregate statistics over the live concert table.

        Ties on the extreme dates go to the lowest concert id; ranked lists
        break count ties alphabetically.
        """
        total = db.query(func.count(Concert.id)).scalar() or 0

        first_show = (
            db.query(Concert)
            .options(joinedload(Concert.venue))
            .order_by(Concert.date.asc(), Concert.id.asc())
            .first()
        )
        latest_show = (
            db.query(Concert)
            .options(joinedload(Concert.venue))
            .order_by(Concert.date.desc(), Concert.id.asc())
            .first()
        )

        show_count = func.count(Concert.id).label("show_count")

        artist_name = func.min(Concert.artist).label("artist_name")
        top_artists = (
            db.query(Concert.artist_slug, artist_name, show_count)
            .group_by(Concert.artist_slug)
            .order_by(show_count.desc(), artist_name.asc())
            .limit(TOP_ARTISTS_LIMIT)
            .all()
        )

        top_venues = (
            db.query(Venue.name, Venue.city, Venue.slug, show_count)
            .join(Concert, Concert.venue_id == Venue.id)
            .group_by(Venue.id, Venue.name, Venue.city, Venue.slug)
            .order_by(show_count.desc(), Venue.name.asc(), Venue.id.asc())
            .limit(TOP_VENUES_LIMIT)
            .all()
        )

        year = cast(extract("year", Concert.date), Integer).label("show_year")
        shows_by_year = (
            db.query(year, show_count)
            .group_by(year)
            .order_by(year.desc())
            .all()
        )

        shows_by_city = (
            db.query(Venue.city, show_count)
            .join(Concert, Concert.venue_id == Venue.id)
            .group_by(Venue.city)
            .order_by(show_count.desc(), Venue.city.asc())
            .limit(TOP_CITIES_LIMIT)
            .all()
        )

        return {
            "total_concerts": total,
            "first_show": first_show,
            "latest_show": latest_show,
            "top_artists": [
                {"name": name, "slug": slug, "count": count}
                for slug, name, count in top_artists
            ],
            "top_venues": [
                {"name": name, "city": city, "slug": slug, "count": count}
                for name, city, slug, count in top_venues
            ],
            "shows_by_year": [
                {"year": int(y), "count": count} for y, count in shows_by_year
            ],
            "shows_by_city": [
                {"city": city, "count": count} for city, count in shows_by_city
            ],
        }


concert = CRUDConcert(Concert)
