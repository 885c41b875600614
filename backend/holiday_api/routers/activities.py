"""Activity and participation API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from holiday_api.database import get_db
from holiday_api.models.activity import Activity
from holiday_api.models.location import Location
from holiday_api.models.participate import Participate
from holiday_api.schemas.activity import ActivityCreate, ActivityOut, ActivityUpdate
from holiday_api.schemas.participant import ParticipantOut
from holiday_api.services import activity_service, participation_service
from holiday_api.services.location_service import AddressValidator, get_address_validator
from holiday_api.services.picture_storage import PictureStorage, get_picture_storage

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
def create_activity(
    payload: ActivityCreate,
    db: Session = Depends(get_db),
    validator: Optional[AddressValidator] = Depends(get_address_validator),
    pictures: PictureStorage = Depends(get_picture_storage),
):
    activity = Activity(
        holiday_id=payload.holiday_id,
        name=payload.name,
        description=payload.description,
        price=payload.price,
        start_date=payload.start_date,
        end_date=payload.end_date,
        picture_path=pictures.default_activity_picture,
        location=Location(**payload.location.model_dump()),
    )
    if not activity_service.add_activity(db, activity, validator=validator):
        raise HTTPException(status_code=400, detail="The activity could not be added.")
    return activity


@router.get("/{activity_id}", response_model=ActivityOut)
def get_activity(activity_id: str, db: Session = Depends(get_db)):
    return activity_service.get_activity_by_id(db, activity_id)


@router.put("/{activity_id}", response_model=ActivityOut)
def update_activity(
    activity_id: str,
    payload: ActivityUpdate,
    db: Session = Depends(get_db),
    validator: Optional[AddressValidator] = Depends(get_address_validator),
):
    activity_service.get_activity_by_id(db, activity_id)
    location = payload.location.model_dump() if payload.location else None
    if not activity_service.update_activity(
        db,
        activity_id,
        updates=payload.model_dump(exclude={"location"}),
        location_updates=location,
        validator=validator,
    ):
        raise HTTPException(status_code=400, detail="Your activity could not be updated.")
    return activity_service.get_activity_by_id(db, activity_id)


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_activity(
    activity_id: str,
    db: Session = Depends(get_db),
    pictures: PictureStorage = Depends(get_picture_storage),
):
    """Delete an activity and every signup to it."""
    picture_path = activity_service.get_activity_by_id(db, activity_id).picture_path
    if not activity_service.delete_activity(db, activity_id):
        raise HTTPException(status_code=400, detail="The activity could not be deleted.")
    pictures.discard(picture_path)


@router.put("/{activity_id}/picture", response_model=ActivityOut)
def replace_activity_picture(
    activity_id: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    pictures: PictureStorage = Depends(get_picture_storage),
):
    previous_path = activity_service.get_activity_by_id(db, activity_id).picture_path
    new_path = pictures.store(file.filename, file.file.read())
    if not activity_service.update_activity(db, activity_id, {"picture_path": new_path}):
        pictures.discard(new_path)
        raise HTTPException(status_code=400, detail="Your activity could not be updated.")
    pictures.discard(previous_path)
    return activity_service.get_activity_by_id(db, activity_id)


@router.get("/{activity_id}/participants", response_model=list[ParticipantOut])
def list_activity_participants(
    activity_id: str,
    joined: bool = Query(True, description="Signed-up participants when true, holiday members not yet signed up when false"),
    db: Session = Depends(get_db),
):
    if joined:
        activity_service.get_activity_by_id(db, activity_id)
        return participation_service.get_participants_by_activity(db, activity_id)
    return participation_service.list_participants_not_in_activity(db, activity_id)


@router.post("/{activity_id}/participants/{participant_id}", status_code=status.HTTP_201_CREATED)
def join_activity(activity_id: str, participant_id: str, db: Session = Depends(get_db)):
    """Sign a holiday member up for an activity."""
    participate = Participate(activity_id=activity_id, participant_id=participant_id)
    if not participation_service.add_participate(db, participate):
        raise HTTPException(status_code=400, detail="Your participation could not be saved.")
    return {"status": "ok", "participate_id": participate.participate_id}


@router.delete("/{activity_id}/participants/{participant_id}", status_code=status.HTTP_204_NO_CONTENT)
def leave_activity(activity_id: str, participant_id: str, db: Session = Depends(get_db)):
    if not participation_service.remove_participate(db, activity_id, participant_id):
        raise HTTPException(status_code=400, detail="Your participation could not be removed.")
