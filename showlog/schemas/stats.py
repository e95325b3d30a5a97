from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from showlog.schemas.concert import Concert


class ArtistCount(BaseModel):
    name: str
    slug: str
    count: int


class VenueCount(BaseModel):
    name: str
    city: str
    slug: str
    count: int


class YearCount(BaseModel):
    year: int
    count: int


class CityCount(BaseModel):
    city: str
    count: int


class Stats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_concerts: int
    first_show: Optional[Concert] = None
    latest_show: Optional[Concert] = None
    top_artists: List[ArtistCount]
    top_venues: List[VenueCount]
    shows_by_year: List[YearCount]
    shows_by_city: List[CityCount]
