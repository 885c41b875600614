"""Participation manager."""
import logging
import threading
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from holiday_api.database import atomic, ensure_not_cancelled
from holiday_api.errors import LoadDataError, OperationCancelled, ResourceNotFoundError
from holiday_api.models.activity import Activity
from holiday_api.models.invitation import Invitation
from holiday_api.models.participant import Participant
from holiday_api.models.participate import Participate

logger = logging.getLogger(__name__)


def _holds_accepted_invitation(db: Session, participant_id: str, holiday_id: str) -> bool:
    return (
        db.query(Invitation.invitation_id)
        .filter(
            Invitation.holiday_id == holiday_id,
            Invitation.participant_id == participant_id,
            Invitation.is_accepted.is_(True),
        )
        .first()
        is not None
    )


def add_participate(
    db: Session,
    participate: Participate,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Sign a participant up for an activity.

    Refused when the activity is unknown or the participant holds no accepted
    invitation for the activity's holiday.
    """
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            activity = db.get(Activity, participate.activity_id)
            if activity is None:
                logger.warning("Participation refused: activity %s not found", participate.activity_id)
                return False
            if not _holds_accepted_invitation(db, participate.participant_id, activity.holiday_id):
                logger.warning(
                    "Participation refused: participant %s has no accepted invitation for holiday %s",
                    participate.participant_id, activity.holiday_id,
                )
                return False
            db.add(participate)
            db.flush()
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not add participant %s to activity %s", participate.participant_id, participate.activity_id)
        return False
    logger.info("Participant %s joined activity %s", participate.participant_id, participate.activity_id)
    return True


def remove_participate(
    db: Session,
    activity_id: str,
    participant_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            participate = (
                db.query(Participate)
                .filter(Participate.activity_id == activity_id, Participate.participant_id == participant_id)
                .first()
            )
            if participate is None:
                return False
            db.delete(participate)
            db.flush()
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not remove participant %s from activity %s", participant_id, activity_id)
        return False
    logger.info("Participant %s left activity %s", participant_id, activity_id)
    return True


def get_participants_by_activity(db: Session, activity_id: str) -> list[Participant]:
    """Participants signed up for the activity."""
    try:
        return (
            db.query(Participant)
            .join(Participate, Participate.participant_id == Participant.participant_id)
            .filter(Participate.activity_id == activity_id)
            .order_by(Participant.last_name, Participant.first_name)
            .all()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the participants of the activity.") from exc


def list_participants_not_in_activity(db: Session, activity_id: str) -> list[Participant]:
    """Members of the activity's holiday (accepted invitation) not yet signed up for it."""
    try:
        activity = db.get(Activity, activity_id)
        if activity is None:
            raise ResourceNotFoundError(f"Activity {activity_id} not found.")

        joined = select(Participate.participant_id).where(Participate.activity_id == activity_id)
        return (
            db.query(Participant)
            .join(Invitation, Invitation.participant_id == Participant.participant_id)
            .filter(
                Invitation.holiday_id == activity.holiday_id,
                Invitation.is_accepted.is_(True),
                Participant.participant_id.not_in(joined),
            )
            .order_by(Participant.last_name, Participant.first_name)
            .all()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the participants of the activity.") from exc


def delete_participates_for_activity(
    db: Session,
    activity_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            deleted = (
                db.query(Participate)
                .filter(Participate.activity_id == activity_id)
                .delete(synchronize_session="fetch")
            )
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not delete participations of activity %s", activity_id)
        return False
    logger.info("Deleted %d participations of activity %s", deleted, activity_id)
    return True


def delete_participates_for_participant_in_holiday(
    db: Session,
    participant_id: str,
    holiday_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Drop every signup of the participant to activities of the holiday."""
    holiday_activities = select(Activity.activity_id).where(Activity.holiday_id == holiday_id)
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            deleted = (
                db.query(Participate)
                .filter(
                    Participate.participant_id == participant_id,
                    Participate.activity_id.in_(holiday_activities),
                )
                .delete(synchronize_session="fetch")
            )
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not delete participations of %s in holiday %s", participant_id, holiday_id)
        return False
    logger.info("Deleted %d participations of %s in holiday %s", deleted, participant_id, holiday_id)
    return True
