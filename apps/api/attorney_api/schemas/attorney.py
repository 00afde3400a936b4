from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Literal, Optional
from datetime import datetime


LOCATION_NOT_AVAILABLE = "Location not available"
ADDRESS_NOT_AVAILABLE = "Address not available"
GENERAL_PRACTICE = "General Practice"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Review(_CamelModel):
    rating: float
    comment: str
    source: str
    date: Optional[datetime] = None


class SocialMedia(_CamelModel):
    linkedin: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None


class AttorneyRecord(_CamelModel):
    id: str
    name: str
    specialization: list[str] = Field(default_factory=list)
    location: str = LOCATION_NOT_AVAILABLE
    detailed_location: str = ADDRESS_NOT_AVAILABLE
    rating: float = 0.0
    cases: int = 0
    languages: list[str] = Field(default_factory=list)
    featured: bool = False
    phone: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    practice_areas: list[str] = Field(default_factory=list)
    civil_rights_focus: list[str] = Field(default_factory=list)
    immigration_services: list[str] = Field(default_factory=list)
    pro_bono_work: bool = False
    community_involvement: list[str] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    social_media: Optional[SocialMedia] = None
    verified: bool = False
    last_updated: Optional[datetime] = None
    source: Literal["osm", "google", "mock"] = "osm"
    description: Optional[str] = Field(default=None, exclude=True)
    distance_from_user: Optional[float] = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def approximate_distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Flat-earth distance in km (1 degree ~ 111 km). Not geodesic."""
    lat_diff = abs(lat1 - lat2)
    lng_diff = abs(lng1 - lng2)
    return ((lat_diff ** 2 + lng_diff ** 2) ** 0.5) * 111
