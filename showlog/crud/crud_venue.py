# showlog/crud/crud_venue.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from .base import CRUDBase
from showlog.core.exceptions import (
    ConflictError,
    NotFoundError,
    ReferentialIntegrityError,
)
from showlog.models.concert import Concert
from showlog.models.venue import Venue
from showlog.schemas.transfer import VenueRecord
from showlog.schemas.venue import VenueCreate, VenueUpdate
from showlog.utils.slug import require_slug, slugify

logger = logging.getLogger(__name__)

# Columns an upsert may overwrite on an existing venue
UPSERT_MUTABLE_FIELDS = ("city", "address", "latitude", "longitude")


def _dialect_insert(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise NotImplementedError(f"Venue upsert is not supported on {dialect}")
    return insert


class CRUDVenue(CRUDBase[Venue, VenueCreate, VenueUpdate]):
    def get_by_slug(self, db: Session, *, slug: str) -> Optional[Venue]:
        return db.query(Venue).filter(Venue.slug == slug).first()

    def get_by_name(self, db: Session, *, name: str) -> Optional[Venue]:
        """Venue names resolve through their slug, so spelling variants match."""
        slug = slugify(name)
        if not slug:
            return None
        return self.get_by_slug(db, slug=slug)

    def get_multi_ordered(self, db: Session) -> List[Venue]:
        return db.query(Venue).order_by(Venue.name.asc(), Venue.id.asc()).all()

    def get_with_concerts(self, db: Session, *, slug: str) -> Optional[Venue]:
        return (
            db.query(Venue)
            .options(selectinload(Venue.concerts).joinedload(Concert.venue))
            .filter(Venue.slug == slug)
            .first()
        )

    def create(self, db: Session, *, obj_in: VenueCreate) -> Venue:
        slug = require_slug(obj_in.name, "name")
        if self.get_by_slug(db, slug=slug):
            raise ConflictError(
                f"A venue with this name/slug already exists: '{slug}'",
                details={"slug": slug},
            )

        db_obj = Venue(slug=slug, **obj_in.model_dump())
        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError(
                f"A venue with this name/slug already exists: '{slug}'",
                details={"slug": slug},
            )
        db.refresh(db_obj)
        logger.info(f"Created venue {db_obj.id} ({slug})")
        return db_obj

    def update(self, db: Session, *, db_obj: Venue, obj_in: VenueUpdate) -> Venue:
        update_data = {
            field: value
            for field, value in obj_in.model_dump(exclude_unset=True).items()
            if value is not None or field == "address"
        }

        if "name" in update_data:
            slug = require_slug(update_data["name"], "name")
            clash = self.get_by_slug(db, slug=slug)
            if clash and clash.id != db_obj.id:
                raise ConflictError(
                    f"Name collision: venue slug '{slug}' is already taken",
                    details={"slug": slug},
                )
            update_data["slug"] = slug

        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Name collision.")
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, *, id: int) -> None:
        db_obj = self.get(db, id=id)
        if db_obj is None:
            raise NotFoundError(f"Venue {id} not found")
        name = db_obj.name

        concert_count = (
            db.query(Concert.id).filter(Concert.venue_id == id).count()
        )
        if concert_count:
            raise ReferentialIntegrityError(
                f"Cannot delete venue '{name}' with {concert_count} associated concert(s).",
                details={"venueId": id, "concerts": concert_count},
            )

        db.delete(db_obj)
        try:
            db.commit()
        except IntegrityError:
            # A concert was attached between the check and the delete
            db.rollback()
            raise ReferentialIntegrityError(
                f"Cannot delete venue '{name}' with associated concerts.",
                details={"venueId": id},
            )
        logger.info(f"Deleted venue {id}")

    def upsert_by_slug(self, db: Session, *, obj_in: VenueRecord) -> int:
        """
        Insert the venue or refresh its mutable fields, keyed by slug.

        Runs as a single INSERT ... ON CONFLICT statement and does not commit;
        the caller owns the transaction. Returns the venue id.
        """
        slug = require_slug(obj_in.name, "name")
        values = {
            "name": obj_in.name,
            "slug": slug,
            "city": obj_in.city,
            "address": obj_in.address,
            "latitude": obj_in.latitude,
            "longitude": obj_in.longitude,
        }

        insert = _dialect_insert(db)
        stmt = insert(Venue).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Venue.slug],
            set_={field: stmt.excluded[field] for field in UPSERT_MUTABLE_FIELDS},
        ).returning(Venue.id)
        return db.execute(stmt).scalar_one()


venue = CRUDVenue(Venue)
