# showlog/services/transfer.py
"""
Bulk import and export of the whole show log.

The import document is ``{"venues": [...], "concerts": [...]}``. Venues are
upserted by slug first, then concerts are inserted against the venues known
to the same transaction. Any failing record rolls back the entire call.
The export produces the same document shape, so it can be re-imported.
"""

import logging
from typing import Any, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from showlog import crud
from showlog.core.exceptions import (
    ConflictError,
    NotFoundError,
    ShowlogError,
    TransactionAbortedError,
    ValidationError,
)
from showlog.models.concert import Concert
from showlog.models.venue import Venue
from showlog.schemas.transfer import (
    ConcertExport,
    ConcertRecord,
    ExportDocument,
    ImportResult,
    VenueExport,
    VenueRecord,
)
from showlog.utils.slug import slugify

logger = logging.getLogger(__name__)

RecordType = TypeVar("RecordType", bound=BaseModel)


def _venue_label(index: int, raw: Any) -> str:
    name = raw.get("name") if isinstance(raw, dict) else None
    return f'Venue #{index} ("{name}")' if name else f"Venue #{index}"


def _concert_label(index: int, raw: Any) -> str:
    if not isinstance(raw, dict):
        return f"Concert #{index}"
    artist = raw.get("artist") or "?"
    venue_name = raw.get("venueName") or raw.get("venue_name") or "?"
    return f'Concert #{index} ("{artist}" at "{venue_name}")'


def _parse_record(model: Type[RecordType], raw: Any, label: str) -> RecordType:
    if not isinstance(raw, dict):
        raise ValidationError(
            f"{label} must be an object", details={"record": label}
        )
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "record"
        if error["type"] == "missing":
            message = f"{label} is missing required field '{field}'"
        else:
            message = f"{label} has an invalid '{field}': {error['msg']}"
        raise ValidationError(message, details={"record": label, "field": field})


def _abort(error: ShowlogError, processed: int) -> ShowlogError:
    # Failing on the very first record needs no wrapping
    if processed == 0:
        return error
    return TransactionAbortedError(error, processed)


def import_document(db: Session, document: Any) -> ImportResult:
    """
    Import venues and concerts in one all-or-nothing transaction.

    Raises ValidationError, NotFoundError or ConflictError for a failure on
    the first record, TransactionAbortedError (wrapping one of those) for a
    failure after earlier records were already processed.
    """
    if not isinstance(document, dict):
        raise ValidationError("Import document must be a JSON object")
    for key in ("venues", "concerts"):
        if not isinstance(document.get(key), list):
            raise ValidationError(
                f"Import document requires '{key}' to be an array",
                details={"field": key},
            )

    venues_in = document["venues"]
    concerts_in = document["concerts"]
    processed = 0
    resolved_venues: dict[str, int] = {}

    try:
        for index, raw in enumerate(venues_in, start=1):
            record = _parse_record(VenueRecord, raw, _venue_label(index, raw))
            venue_id = crud.venue.upsert_by_slug(db, obj_in=record)
            resolved_venues[slugify(record.name)] = venue_id
            processed += 1

        for index, raw in enumerate(concerts_in, start=1):
            label = _concert_label(index, raw)
            record = _parse_record(ConcertRecord, raw, label)

            venue_slug = slugify(record.venue_name)
            venue_id = resolved_venues.get(venue_slug)
            if venue_id is None:
                venue = crud.venue.get_by_slug(db, slug=venue_slug) if venue_slug else None
                if venue is None:
                    raise NotFoundError(
                        f"Venue '{record.venue_name}' not found for {label}",
                        details={"record": label, "venueName": record.venue_name},
                    )
                venue_id = resolved_venues[venue_slug] = venue.id

            crud.concert.insert_record(db, record=record, venue_id=venue_id)
            processed += 1

        db.commit()
    except ShowlogError as e:
        db.rollback()
        logger.warning(f"Import rolled back after {processed} record(s): {e.message}")
        raise _abort(e, processed)
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Import rolled back after {processed} record(s): {e.orig}")
        raise _abort(
            ConflictError(f"Import violates a uniqueness constraint: {e.orig}"),
            processed,
        )
    except Exception:
        db.rollback()
        logger.exception("Import failed unexpectedly; rolled back")
        raise

    logger.info(
        f"Imported {len(venues_in)} venue(s) and {len(concerts_in)} concert(s)"
    )
    return ImportResult(
        imported_venues=len(venues_in), imported_concerts=len(concerts_in)
    )


def export_document(db: Session) -> dict:
    """Flatten the store into an import-ready document."""
    venues = db.query(Venue).order_by(Venue.name.asc(), Venue.id.asc()).all()
    concerts = (
        db.query(Concert)
        .options(joinedload(Concert.venue))
        .order_by(Concert.date.asc(), Concert.id.asc())
        .all()
    )

    document = ExportDocument(
        venues=[
            VenueExport(
                name=v.name,
                city=v.city,
                address=v.address,
                latitude=v.latitude,
                longitude=v.longitude,
            )
            for v in venues
        ],
        concerts=[
            ConcertExport(
                artist=c.artist,
                date=c.date.isoformat(),
                venue_name=c.venue.name,
                type=c.type,
                event_name=c.event_name,
                setlist=c.setlist,
                notes=c.notes,
                image_url=c.image_url,
                gallery=list(c.gallery or []),
            )
            for c in concerts
        ],
    )
    return document.model_dump(by_alias=True)
