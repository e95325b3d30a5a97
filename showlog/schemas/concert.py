from datetime import date as date_type
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from showlog.schemas.venue import RequiredText, Venue
from showlog.utils.validators import coerce_concert_type, parse_show_date


class ConcertBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: date_type = Field(..., json_schema_extra={"example": "2016-03-15"})
    artist: RequiredText = Field(..., json_schema_extra={"example": "Radiohead"})
    venue_id: int
    type: Literal["concert", "festival"] = "concert"
    event_name: Optional[str] = None
    setlist: Optional[str] = Field(None, json_schema_extra={"example": "https://www.setlist.fm/..."})
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

    @field_validator("gallery", mode="before")
    @classmethod
    def _default_gallery(cls, v):
        return v if isinstance(v, list) else []

    @field_validator("image_url", mode="before")
    @classmethod
    def _blank_image_is_none(cls, v):
        return v or None


class ConcertCreate(ConcertBase):
    pass


class ConcertUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: Optional[date_type] = None
    artist: Optional[RequiredText] = None
    venue_id: Optional[int] = None
    type: Optional[Literal["concert", "festival"]] = None
    event_name: Optional[str] = None
    setlist: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    gallery: Optional[List[str]] = None

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v):
        return None if v in (None, "") else parse_show_date(v)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v):
        return None if v is None else coerce_concert_type(v)


class Concert(ConcertBase):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    artist_slug: str
    venue: Optional[Venue] = None


class VenueDetail(Venue):
    """A venue together with every concert played there."""

    concerts: List[Concert] = []
