"""Activity manager.

Deleting an activity always clears its participations first, through
participation_service, inside the same unit of work: either the activity
and all its signups are gone, or nothing changed.
"""
import logging
import threading
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from holiday_api.database import atomic, ensure_not_cancelled
from holiday_api.errors import CascadeStepFailed, LoadDataError, OperationCancelled, ResourceNotFoundError
from holiday_api.models.activity import Activity
from holiday_api.models.holiday import Holiday
from holiday_api.services import participation_service
from holiday_api.services.location_service import AddressValidator, ensure_address_valid

logger = logging.getLogger(__name__)

ACTIVITY_FIELDS = ("name", "description", "picture_path", "price", "start_date", "end_date")
LOCATION_FIELDS = ("street", "number", "locality", "postal_code", "country")


def add_activity(
    db: Session,
    activity: Activity,
    validator: Optional[AddressValidator] = None,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Create an activity under an existing holiday.

    Raises LocationValidationError when the validator rejects the address.
    """
    ensure_address_valid(validator, activity.location)
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            if db.get(Holiday, activity.holiday_id) is None:
                logger.warning("Activity refused: holiday %s not found", activity.holiday_id)
                return False
            db.add(activity)
            db.flush()
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not add activity '%s' to holiday %s", activity.name, activity.holiday_id)
        return False
    logger.info("Created activity '%s' (%s) in holiday %s", activity.name, activity.activity_id, activity.holiday_id)
    return True


def get_activity_by_id(db: Session, activity_id: str) -> Activity:
    try:
        activity = db.get(Activity, activity_id)
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the activity.") from exc
    if activity is None:
        raise ResourceNotFoundError(f"Activity {activity_id} not found.")
    return activity


def update_activity(
    db: Session,
    activity_id: str,
    updates: dict[str, Any],
    location_updates: Optional[dict[str, Any]] = None,
    validator: Optional[AddressValidator] = None,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Replace the mutable fields of an activity and, if given, of its location."""
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            activity = db.get(Activity, activity_id)
            if activity is None:
                return False
            for field, value in updates.items():
                if field in ACTIVITY_FIELDS:
                    setattr(activity, field, value)
            if location_updates:
                for field, value in location_updates.items():
                    if field in LOCATION_FIELDS:
                        setattr(activity.location, field, value)
                ensure_address_valid(validator, activity.location)
            db.flush()
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not update activity %s", activity_id)
        return False
    logger.info("Updated activity %s", activity_id)
    return True


def delete_activity(
    db: Session,
    activity_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Delete an activity after removing its participations."""
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            activity = db.get(Activity, activity_id)
            if activity is None:
                return False
            if not participation_service.delete_participates_for_activity(db, activity_id, cancel=cancel):
                raise CascadeStepFailed(f"participations of activity {activity_id}")
            db.delete(activity)
            db.flush()
    except (SQLAlchemyError, OperationCancelled, CascadeStepFailed):
        logger.exception("Could not delete activity %s", activity_id)
        return False
    logger.info("Deleted activity %s", activity_id)
    return True


def delete_activities_for_holiday(
    db: Session,
    holiday_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Delete every activity of a holiday together with their participations.

    All or nothing: if clearing the participations of any activity fails, no
    activity is removed.
    """
    try:
        with atomic(db):
            activities = db.query(Activity).filter(Activity.holiday_id == holiday_id).all()
            for activity in activities:
                ensure_not_cancelled(cancel)
                if not participation_service.delete_participates_for_activity(
                    db, activity.activity_id, cancel=cancel
                ):
                    raise CascadeStepFailed(f"participations of activity {activity.activity_id}")
            ensure_not_cancelled(cancel)
            for activity in activities:
                db.delete(activity)
            db.flush()
    except (SQLAlchemyError, OperationCancelled, CascadeStepFailed):
        logger.exception("Could not delete activities of holiday %s", holiday_id)
        return False
    logger.info("Deleted %d activities of holiday %s", len(activities), holiday_id)
    return True
