"""Pydantic schemas for Locations."""
from typing import Optional
from pydantic import BaseModel, Field


class LocationIn(BaseModel):
    street: Optional[str] = None
    number: Optional[str] = None
    locality: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


class LocationOut(BaseModel):
    location_id: str
    street: Optional[str] = None
    number: Optional[str] = None
    locality: str
    postal_code: str
    country: str

    model_config = {"from_attributes": True}
