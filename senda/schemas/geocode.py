from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class AddressQuery(BaseModel):
    """Structured postal address as typed in the registration forms."""

    model_config = ConfigDict(frozen=True)

    street_name: str
    street_number: Optional[str] = None
    city: str
    province: str
    postal_code: Optional[str] = None


class LookupCandidate(BaseModel):
    lat: float
    lon: float
    display_name: Optional[str] = None

    def to_coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.lat, longitude=self.lon)


class AddressResolveRequest(BaseModel):
    street_name: str = Field(..., min_length=1, max_length=200)
    street_number: str = Field(default="", max_length=20)
    city: str = Field(..., min_length=1, max_length=100)
    province: str = Field(default="Santa Fe", max_length=100)
    postal_code: Optional[str] = Field(default=None, max_length=10)

    def to_query(self) -> AddressQuery:
        return AddressQuery(
            street_name=self.street_name,
            street_number=self.street_number,
            city=self.city,
            province=self.province,
            postal_code=self.postal_code,
        )


class AddressResolveResponse(BaseModel):
    found: bool
    coordinates: Optional[Coordinates] = None
    message: Optional[str] = None


class AddressParts(BaseModel):
    street: str
    number: str
