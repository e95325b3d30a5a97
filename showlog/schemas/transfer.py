# showlog/schemas/transfer.py
"""
Record shapes for the bulk import/export document.

The export shapes are exactly the import shapes so that an exported
document can be fed straight back into the importer.
"""

from datetime import date as date_type
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from showlog.schemas.venue import RequiredText
from showlog.utils.validators import (
    coerce_concert_type,
    coerce_coordinate,
    parse_show_date,
)


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class VenueRecord(_Record):
    name: RequiredText
    city: RequiredText
    address: Optional[str] = None
    latitude: float = 0.0
    longitude: float = 0.0

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_coordinates(cls, v):
        return coerce_coordinate(v)


class ConcertRecord(_Record):
    artist: RequiredText
    date: date_type
    venue_name: RequiredText
    type: str = "concert"
    event_name: Optional[str] = None
    setlist: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    gallery: List[str] = []

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v):
        return parse_show_date(v)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v):
        return coerce_concert_type(v)

    @field_validator("image_url", mode="before")
    @classmethod
    def _blank_image_is_none(cls, v):
        return v or None

    @field_validator("gallery", mode="before")
    @classmethod
    def _default_gallery(cls, v):
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, str) and item]


class ImportResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = "Import successful"
    imported_venues: int
    imported_concerts: int


class VenueExport(BaseModel):
    name: str
    city: str
    address: Optional[str] = None
    latitude: float
    longitude: float


class ConcertExport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    artist: str
    date: str = Field(..., json_schema_extra={"example": "2016-03-15"})
    venue_name: str
    type: str
    event_name: Optional[str] = None
    setlist: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    gallery: List[str] = []


class ExportDocument(BaseModel):
    venues: List[VenueExport]
    concerts: List[ConcertExport]
