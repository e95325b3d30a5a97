# showlog/api/v1/endpoints/records.py
"""
Protected create/edit/delete routes for concerts and venues.

The record type is part of the path (``/create/concert``,
``/edit/venue/3``) to match the admin client.
"""

from typing import Any, Dict, Literal, Type, TypeVar, Union

from fastapi import APIRouter, Body, Depends, Response, status
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from showlog import crud
from showlog.api import deps
from showlog.core.exceptions import NotFoundError, ValidationError
from showlog.core.storage import get_storage
from showlog.db.session import get_db
from showlog.schemas.concert import Concert, ConcertCreate, ConcertUpdate
from showlog.schemas.token import TokenPayload
from showlog.schemas.venue import Venue, VenueCreate, VenueUpdate
from showlog.services.media import remove_media_files

router = APIRouter(tags=["Records"])

RecordType = Literal["concert", "venue"]
SchemaType = TypeVar("SchemaType", bound=BaseModel)

# Keys the client echoes back from a fetched record that are never writable
READ_ONLY_KEYS = ("id", "slug", "artistSlug", "venue", "concerts")


def _parse_body(model: Type[SchemaType], payload: Dict[str, Any]) -> SchemaType:
    data = {k: v for k, v in payload.items() if k not in READ_ONLY_KEYS}
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "body"
        raise ValidationError(
            f"Invalid '{field}': {error['msg']}", details={"field": field}
        )


@router.post(
    "/create/{record_type}",
    response_model=Union[Concert, Venue],
    status_code=status.HTTP_201_CREATED,
)
def create_record(
    record_type: RecordType,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Create a concert (requires an existing `venueId`) or a venue (its
    name must not collide with another venue's slug).
    """
    if record_type == "concert":
        concert_in = _parse_body(ConcertCreate, payload)
        created = crud.concert.create(db, obj_in=concert_in)
        return Concert.model_validate(created)

    venue_in = _parse_body(VenueCreate, payload)
    return Venue.model_validate(crud.venue.create(db, obj_in=venue_in))


@router.put("/edit/{record_type}/{record_id}", response_model=Union[Concert, Venue])
def edit_record(
    record_type: RecordType,
    record_id: int,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Partially update a record. Changing a name or artist re-derives its slug.
    """
    if record_type == "concert":
        concert = crud.concert.get(db, id=record_id)
        if not concert:
            raise NotFoundError("Record not found", details={"concertId": record_id})
        concert_in = _parse_body(ConcertUpdate, payload)
        return Concert.model_validate(
            crud.concert.update(db, db_obj=concert, obj_in=concert_in)
        )

    venue = crud.venue.get(db, id=record_id)
    if not venue:
        raise NotFoundError("Record not found", details={"venueId": record_id})
    venue_in = _parse_body(VenueUpdate, payload)
    return Venue.model_validate(crud.venue.update(db, db_obj=venue, obj_in=venue_in))


@router.delete(
    "/delete/{record_type}/{record_id}", status_code=status.HTTP_204_NO_CONTENT
)
def delete_record(
    record_type: RecordType,
    record_id: int,
    db: Session = Depends(get_db),
    storage=Depends(get_storage),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Delete a record. Venues that still have concerts are refused; deleting
    a concert also removes its uploaded media.
    """
    if record_type == "concert":
        media = crud.concert.remove(db, id=record_id)
        remove_media_files(storage, media)
    else:
        crud.venue.remove(db, id=record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
