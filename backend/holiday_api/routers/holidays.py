"""Holiday API routes — delegates to holiday_service for consistency rules."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from holiday_api.database import get_db
from holiday_api.models.holiday import Holiday
from holiday_api.models.location import Location
from holiday_api.schemas.holiday import HolidayCreate, HolidayDetailOut, HolidayOut, HolidayUpdate
from holiday_api.schemas.message import MessageCreate, MessageOut
from holiday_api.schemas.participant import ParticipantOut
from holiday_api.services import holiday_service, message_service, participant_service
from holiday_api.services.location_service import AddressValidator, get_address_validator
from holiday_api.services.picture_storage import PictureStorage, get_picture_storage

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=HolidayOut, status_code=status.HTTP_201_CREATED)
def create_holiday(
    payload: HolidayCreate,
    db: Session = Depends(get_db),
    validator: Optional[AddressValidator] = Depends(get_address_validator),
    pictures: PictureStorage = Depends(get_picture_storage),
):
    """Create a holiday. The creator is invited and accepted automatically."""
    holiday = Holiday(
        name=payload.name,
        description=payload.description,
        start_date=payload.start_date,
        end_date=payload.end_date,
        is_published=payload.is_published,
        creator_id=payload.creator_id,
        picture_path=pictures.default_holiday_picture,
        location=Location(**payload.location.model_dump()),
    )
    if not holiday_service.create_holiday(db, holiday, validator=validator):
        raise HTTPException(status_code=400, detail="Your holiday could not be created.")
    return holiday


@router.get("/", response_model=list[HolidayOut])
def list_holidays(
    participant_id: Optional[str] = Query(None, description="Member whose holidays are listed"),
    published: bool = Query(False),
    db: Session = Depends(get_db),
):
    """List published holidays, or the holidays a participant is a member of."""
    if published:
        return holiday_service.list_published_holidays(db)
    if not participant_id:
        raise HTTPException(status_code=400, detail="participant_id is required unless published=true")
    return holiday_service.list_holidays_for_participant(db, participant_id)


@router.get("/{holiday_id}", response_model=HolidayDetailOut)
def get_holiday(holiday_id: str, db: Session = Depends(get_db)):
    """Fetch a holiday with its activities and accepted participants."""
    return holiday_service.get_holiday_by_id(db, holiday_id)


@router.put("/{holiday_id}", response_model=HolidayDetailOut)
def update_holiday(
    holiday_id: str,
    payload: HolidayUpdate,
    db: Session = Depends(get_db),
    validator: Optional[AddressValidator] = Depends(get_address_validator),
):
    holiday_service.get_holiday_by_id(db, holiday_id)
    location = payload.location.model_dump() if payload.location else None
    if not holiday_service.update_holiday(
        db,
        holiday_id,
        updates=payload.model_dump(exclude={"location"}),
        location_updates=location,
        validator=validator,
    ):
        raise HTTPException(status_code=400, detail="Your holiday could not be updated.")
    return holiday_service.get_holiday_by_id(db, holiday_id)


@router.delete("/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_holiday(
    holiday_id: str,
    db: Session = Depends(get_db),
    pictures: PictureStorage = Depends(get_picture_storage),
):
    """Delete a holiday with its activities, signups, invitations and messages."""
    picture_path = holiday_service.get_holiday_by_id(db, holiday_id).picture_path
    if not holiday_service.delete_holiday(db, holiday_id):
        raise HTTPException(status_code=400, detail="Error while deleting your holiday.")
    pictures.discard(picture_path)


@router.delete("/{holiday_id}/leave", status_code=status.HTTP_204_NO_CONTENT)
def leave_holiday(
    holiday_id: str,
    participant_id: str = Query(..., description="ID of the participant leaving"),
    db: Session = Depends(get_db),
):
    """Leave a holiday; the last member leaving deletes it."""
    if not holiday_service.leave_holiday(db, holiday_id, participant_id):
        raise HTTPException(status_code=400, detail="An error occurred while leaving the holiday.")


@router.get("/{holiday_id}/participants", response_model=list[ParticipantOut])
def list_holiday_participants(
    holiday_id: str,
    accepted: bool = Query(True, description="Members when true, participants not yet invited when false"),
    db: Session = Depends(get_db),
):
    holiday_service.get_holiday_by_id(db, holiday_id)
    if accepted:
        return participant_service.list_participants_in_holiday(db, holiday_id)
    return participant_service.list_participants_not_in_holiday(db, holiday_id)


@router.put("/{holiday_id}/picture", response_model=HolidayOut)
def replace_holiday_picture(
    holiday_id: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    pictures: PictureStorage = Depends(get_picture_storage),
):
    """Upload a new picture; the previous one is deleted unless it is a stock image."""
    previous_path = holiday_service.get_holiday_by_id(db, holiday_id).picture_path
    new_path = pictures.store(file.filename, file.file.read())
    if not holiday_service.update_holiday(db, holiday_id, {"picture_path": new_path}):
        pictures.discard(new_path)
        raise HTTPException(status_code=400, detail="Your holiday could not be updated.")
    pictures.discard(previous_path)
    return holiday_service.get_holiday_by_id(db, holiday_id)


@router.post("/{holiday_id}/messages", status_code=status.HTTP_201_CREATED)
def post_message(holiday_id: str, payload: MessageCreate, db: Session = Depends(get_db)):
    """Persist a chat message; broadcasting is left to the real-time transport."""
    if not message_service.add_message(db, payload.participant_id, holiday_id, payload.content):
        raise HTTPException(status_code=400, detail="Your message could not be saved.")
    return {"status": "ok"}


@router.get("/{holiday_id}/messages", response_model=list[MessageOut])
def get_recent_messages(holiday_id: str, db: Session = Depends(get_db)):
    """Chat history of the holiday, oldest first."""
    return message_service.get_recent_messages(db, holiday_id)
