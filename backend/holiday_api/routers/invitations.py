"""Invitation API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from holiday_api.database import get_db
from holiday_api.models.invitation import Invitation
from holiday_api.schemas.invitation import InvitationCreate, InvitationOut, PendingInvitationOut
from holiday_api.services import invitation_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=list[InvitationOut], status_code=status.HTTP_201_CREATED)
def create_invitations(payload: list[InvitationCreate], db: Session = Depends(get_db)):
    """Invite several participants at once; one conflict rejects the whole batch."""
    invitations = [
        Invitation(holiday_id=item.holiday_id, participant_id=item.participant_id, is_accepted=False)
        for item in payload
    ]
    if not invitation_service.add_invitations(db, invitations):
        raise HTTPException(status_code=400, detail="Your invitations could not be sent.")
    return invitations


@router.get("/", response_model=list[PendingInvitationOut])
def list_pending_invitations(
    participant_id: str = Query(..., description="Participant whose pending invitations are listed"),
    db: Session = Depends(get_db),
):
    return invitation_service.get_invitations_by_participant(db, participant_id)


@router.put("/{invitation_id}", response_model=InvitationOut)
def accept_invitation(invitation_id: str, db: Session = Depends(get_db)):
    invitation_service.get_invitation_by_id(db, invitation_id)
    if not invitation_service.accept_invitation(db, invitation_id):
        raise HTTPException(status_code=400, detail="Error while accepting the invitation.")
    return invitation_service.get_invitation_by_id(db, invitation_id)


@router.delete("/{invitation_id}", status_code=status.HTTP_204_NO_CONTENT)
def refuse_invitation(invitation_id: str, db: Session = Depends(get_db)):
    invitation_service.get_invitation_by_id(db, invitation_id)
    if not invitation_service.refuse_invitation(db, invitation_id):
        raise HTTPException(status_code=400, detail="Error while refusing the invitation.")
