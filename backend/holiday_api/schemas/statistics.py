"""Pydantic schemas for Statistics."""
from pydantic import BaseModel


class GlobalStatisticsOut(BaseModel):
    active_participants: int


class CountryStatisticsOut(BaseModel):
    country: str
    participants: int
