"""Pydantic schemas for Holidays."""
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from holiday_api.schemas.activity import ActivityOut
from holiday_api.schemas.location import LocationIn, LocationOut
from holiday_api.schemas.participant import ParticipantOut
from holiday_api.schemas.common import UtcDatetime


class HolidayCreate(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    description: Optional[str] = None
    start_date: UtcDatetime
    end_date: UtcDatetime
    is_published: bool = False
    creator_id: str
    location: LocationIn

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date >= self.end_date:
            raise ValueError("start_date must be before end_date")
        return self


class HolidayUpdate(BaseModel):
    """Full replacement of the mutable fields."""

    name: str = Field(min_length=1, max_length=150)
    description: Optional[str] = None
    start_date: UtcDatetime
    end_date: UtcDatetime
    is_published: bool = False
    location: Optional[LocationIn] = None

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date >= self.end_date:
            raise ValueError("start_date must be before end_date")
        return self


class HolidayOut(BaseModel):
    holiday_id: str
    name: str
    description: Optional[str] = None
    picture_path: str
    start_date: UtcDatetime
    end_date: UtcDatetime
    is_published: bool
    creator_id: str
    location: LocationOut

    model_config = {"from_attributes": True}


class HolidayDetailOut(HolidayOut):
    activities: list[ActivityOut] = []
    participants: list[ParticipantOut] = []
