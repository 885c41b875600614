"""Participant API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from holiday_api.database import get_db
from holiday_api.models.participant import Participant
from holiday_api.schemas.participant import ParticipantCreate, ParticipantOut
from holiday_api.services import participant_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=ParticipantOut, status_code=status.HTTP_201_CREATED)
def create_participant(payload: ParticipantCreate, db: Session = Depends(get_db)):
    participant = Participant(**payload.model_dump())
    if not participant_service.create_participant(db, participant):
        raise HTTPException(status_code=409, detail="A participant with this email already exists")
    return participant


@router.get("/", response_model=list[ParticipantOut])
def list_participants(db: Session = Depends(get_db)):
    return participant_service.list_participants(db)


@router.get("/{participant_id}", response_model=ParticipantOut)
def get_participant(participant_id: str, db: Session = Depends(get_db)):
    return participant_service.get_participant_by_id(db, participant_id)
