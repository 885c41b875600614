"""Pydantic schemas for Activities."""
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from holiday_api.schemas.location import LocationIn, LocationOut
from holiday_api.schemas.common import UtcDatetime


class ActivityCreate(BaseModel):
    holiday_id: str
    name: str = Field(min_length=1, max_length=150)
    description: Optional[str] = None
    price: float = Field(default=0.0, ge=0)
    start_date: UtcDatetime
    end_date: UtcDatetime
    location: LocationIn

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date >= self.end_date:
            raise ValueError("start_date must be before end_date")
        return self


class ActivityUpdate(BaseModel):
    """Full replacement of the mutable fields."""

    name: str = Field(min_length=1, max_length=150)
    description: Optional[str] = None
    price: float = Field(default=0.0, ge=0)
    start_date: UtcDatetime
    end_date: UtcDatetime
    location: Optional[LocationIn] = None

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date >= self.end_date:
            raise ValueError("start_date must be before end_date")
        return self


class ActivityOut(BaseModel):
    activity_id: str
    holiday_id: str
    name: str
    description: Optional[str] = None
    picture_path: str
    price: float
    start_date: UtcDatetime
    end_date: UtcDatetime
    location: LocationOut

    model_config = {"from_attributes": True}
