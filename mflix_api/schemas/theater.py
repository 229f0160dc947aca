"""
Mflix API: Theater Request Schemas
==================================

What:  Request bodies for creating and updating theaters.
Why:   Mirrors the `sample_mflix.theaters` document layout (theaterId plus a
       location with a postal address and a GeoJSON point), so new documents
       look like the existing ones and stay usable by 2dsphere queries.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class Address(BaseModel):
    street1: str = Field(min_length=1)
    street2: Optional[str] = None
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zipcode: str = Field(min_length=1)


class Geo(BaseModel):
    """GeoJSON point; coordinates are [longitude, latitude]."""

    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(min_length=2, max_length=2)

    @field_validator("coordinates")
    @classmethod
    def validate_coordinates(cls, v: List[float]) -> List[float]:
        longitude, latitude = v
        if not -180 <= longitude <= 180:
            raise ValueError("longitude must be between -180 and 180")
        if not -90 <= latitude <= 90:
            raise ValueError("latitude must be between -90 and 90")
        return v


class Location(BaseModel):
    address: Address
    geo: Geo


class TheaterCreate(BaseModel):
    """Body of POST /api/theaters."""

    theaterId: int = Field(ge=1, description="Public theater number")
    location: Location

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class TheaterUpdate(BaseModel):
    """Body of PUT /api/theaters/{theater_id}; only supplied fields are `$set`."""

    theaterId: Optional[int] = Field(default=None, ge=1)
    location: Optional[Location] = None

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
