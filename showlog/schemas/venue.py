from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from showlog.utils.validators import coerce_coordinate

# Non-blank text, surrounding whitespace dropped
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class VenueBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: RequiredText = Field(..., json_schema_extra={"example": "The Fillmore"})
    city: RequiredText = Field(..., json_schema_extra={"example": "San Francisco"})
    address: Optional[str] = Field(None, json_schema_extra={"example": "1805 Geary Blvd"})
    latitude: float = 0.0
    longitude: float = 0.0

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_coordinates(cls, v):
        return coerce_coordinate(v)


class VenueCreate(VenueBase):
    pass


class VenueUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[RequiredText] = None
    city: Optional[RequiredText] = None
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_coordinates(cls, v):
        # Omitted stays omitted; anything sent but unparsable is 0.0
        if v is None or v == "":
            return None
        return coerce_coordinate(v)


class Venue(VenueBase):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    slug: str

