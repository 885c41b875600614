"""Pydantic schemas for Invitations."""
from pydantic import BaseModel

from holiday_api.schemas.holiday import HolidayOut
from holiday_api.schemas.participant import ParticipantOut


class InvitationCreate(BaseModel):
    holiday_id: str
    participant_id: str


class InvitationOut(BaseModel):
    invitation_id: str
    holiday_id: str
    participant_id: str
    is_accepted: bool

    model_config = {"from_attributes": True}


class PendingInvitationOut(InvitationOut):
    holiday: HolidayOut
    participant: ParticipantOut
