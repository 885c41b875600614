"""Pydantic schemas for Participants."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ParticipantCreate(BaseModel):
    first_name: str
    last_name: str = ""
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ParticipantOut(BaseModel):
    participant_id: str
    first_name: str
    last_name: str
    email: str
    external_provider: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
