"""Pydantic schemas for chat Messages."""
from datetime import datetime
from pydantic import BaseModel, field_validator

from holiday_api.schemas.participant import ParticipantOut


class MessageCreate(BaseModel):
    participant_id: str
    content: str

    @field_validator("content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must not be blank")
        return value


class MessageOut(BaseModel):
    message_id: str
    holiday_id: str
    send_at: datetime
    content: str
    participant: ParticipantOut

    model_config = {"from_attributes": True}
