"""Holiday orchestrator — keeps a holiday and everything hanging off it consistent.

Responsibilities:
- Creation: holiday row + accepted creator invitation in one unit of work
- Update of the holiday and its owned location
- Cascading delete, in this order, all inside one transaction:
  activities (and their participations) -> invitations -> messages -> holiday
- Leave workflow: drop the member's invitation and signups, and delete the
  holiday when no accepted member remains

Any sibling step reporting failure aborts and rolls back the whole unit.
"""
import logging
import threading
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from holiday_api.database import atomic, ensure_not_cancelled
from holiday_api.errors import (
    CascadeStepFailed,
    LoadDataError,
    OperationCancelled,
    ResourceNotFoundError,
)
from holiday_api.models.holiday import Holiday
from holiday_api.models.invitation import Invitation
from holiday_api.services import (
    activity_service,
    invitation_service,
    message_service,
    participant_service,
    participation_service,
)
from holiday_api.services.location_service import AddressValidator, ensure_address_valid

logger = logging.getLogger(__name__)

HOLIDAY_FIELDS = ("name", "description", "picture_path", "start_date", "end_date", "is_published")
LOCATION_FIELDS = ("street", "number", "locality", "postal_code", "country")


def create_holiday(
    db: Session,
    holiday: Holiday,
    validator: Optional[AddressValidator] = None,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Persist a holiday and invite its creator, already accepted.

    Raises LocationValidationError when the validator rejects the address.
    """
    ensure_address_valid(validator, holiday.location)
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            db.add(holiday)
            db.flush()

            creator_invitation = Invitation(
                holiday_id=holiday.holiday_id,
                participant_id=holiday.creator_id,
                is_accepted=True,
            )
            if not invitation_service.add_invitation(db, creator_invitation, cancel=cancel):
                raise CascadeStepFailed("creator invitation")
    except (OperationCancelled, CascadeStepFailed) as exc:
        logger.warning("Creating holiday '%s' aborted at %s, rolled back", holiday.name, exc)
        return False
    except SQLAlchemyError:
        logger.exception("Could not create holiday '%s'", holiday.name)
        return False
    logger.info("Created holiday '%s' (%s) by participant %s", holiday.name, holiday.holiday_id, holiday.creator_id)
    return True


def update_holiday(
    db: Session,
    holiday_id: str,
    updates: dict[str, Any],
    location_updates: Optional[dict[str, Any]] = None,
    validator: Optional[AddressValidator] = None,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Replace the mutable fields of a holiday and, if given, of its location."""
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            holiday = db.get(Holiday, holiday_id)
            if holiday is None:
                return False
            for field, value in updates.items():
                if field in HOLIDAY_FIELDS:
                    setattr(holiday, field, value)
            if location_updates:
                for field, value in location_updates.items():
                    if field in LOCATION_FIELDS:
                        setattr(holiday.location, field, value)
                ensure_address_valid(validator, holiday.location)
            db.flush()
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not update holiday %s", holiday_id)
        return False
    logger.info("Updated holiday %s", holiday_id)
    return True


def get_holiday_by_id(db: Session, holiday_id: str) -> Holiday:
    """Load a holiday with its location, activities and accepted participants."""
    try:
        holiday = (
            db.query(Holiday)
            .options(selectinload(Holiday.activities))
            .filter(Holiday.holiday_id == holiday_id)
            .first()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the holiday.") from exc
    if holiday is None:
        raise ResourceNotFoundError(f"Holiday {holiday_id} not found.")
    # Computed view, never persisted
    holiday.participants = participant_service.list_participants_in_holiday(db, holiday_id)
    return holiday


def list_holidays_for_participant(db: Session, participant_id: str) -> list[Holiday]:
    """Holidays the participant is an accepted member of."""
    try:
        return (
            db.query(Holiday)
            .join(Invitation, Invitation.holiday_id == Holiday.holiday_id)
            .filter(Invitation.participant_id == participant_id, Invitation.is_accepted.is_(True))
            .order_by(Holiday.start_date)
            .all()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the holidays of the participant.") from exc


def list_published_holidays(db: Session) -> list[Holiday]:
    try:
        return (
            db.query(Holiday)
            .filter(Holiday.is_published.is_(True))
            .order_by(Holiday.start_date)
            .all()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the published holidays.") from exc


def delete_holiday(
    db: Session,
    holiday_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Delete a holiday and everything that depends on it, atomically.

    Returns False without side effects when the holiday does not exist, and
    False with every change rolled back when any step fails.
    """
    try:
        with atomic(db):
            holiday = (
                db.query(Holiday)
                .filter(Holiday.holiday_id == holiday_id)
                .with_for_update(of=Holiday)
                .first()
            )
            if holiday is None:
                logger.info("Holiday %s not found, nothing to delete", holiday_id)
                return False

            ensure_not_cancelled(cancel)
            if not activity_service.delete_activities_for_holiday(db, holiday_id, cancel=cancel):
                raise CascadeStepFailed("activities")
            if not invitation_service.delete_invitations(db, holiday_id, cancel=cancel):
                raise CascadeStepFailed("invitations")
            if not message_service.delete_messages(db, holiday_id, cancel=cancel):
                raise CascadeStepFailed("messages")

            ensure_not_cancelled(cancel)
            db.delete(holiday)
            db.flush()
    except (OperationCancelled, CascadeStepFailed) as exc:
        logger.warning("Deleting holiday %s aborted at %s, rolled back", holiday_id, exc)
        return False
    except SQLAlchemyError:
        logger.exception("Could not delete holiday %s, rolled back", holiday_id)
        return False
    logger.info("Deleted holiday %s", holiday_id)
    return True


def leave_holiday(
    db: Session,
    holiday_id: str,
    participant_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Remove a participant from a holiday.

    The participant's invitation and activity signups are dropped; when no
    accepted member remains the holiday is deleted through delete_holiday.
    Every step runs in one transaction, so a failure anywhere leaves the
    membership untouched.
    """
    try:
        with atomic(db):
            if not invitation_service.delete_invitation_by_participant(
                db, holiday_id, participant_id, cancel=cancel
            ):
                raise CascadeStepFailed("invitation")
            if not participation_service.delete_participates_for_participant_in_holiday(
                db, participant_id, holiday_id, cancel=cancel
            ):
                raise CascadeStepFailed("participations")
            if not invitation_service.has_remaining_accepted_participants(db, holiday_id):
                logger.info("Holiday %s has no member left, deleting it", holiday_id)
                if not delete_holiday(db, holiday_id, cancel=cancel):
                    raise CascadeStepFailed("empty holiday deletion")
    except (OperationCancelled, CascadeStepFailed, LoadDataError) as exc:
        logger.warning("Participant %s could not leave holiday %s (%s), rolled back", participant_id, holiday_id, exc)
        return False
    except SQLAlchemyError:
        logger.exception("Participant %s could not leave holiday %s, rolled back", participant_id, holiday_id)
        return False
    logger.info("Participant %s left holiday %s", participant_id, holiday_id)
    return True
