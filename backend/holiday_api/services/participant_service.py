"""Participant manager — registration, federated sign-in sync and membership views."""
import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from holiday_api.database import atomic
from holiday_api.errors import LoadDataError, ResourceNotFoundError
from holiday_api.models.invitation import Invitation
from holiday_api.models.participant import Participant

logger = logging.getLogger(__name__)


def create_participant(db: Session, participant: Participant) -> bool:
    try:
        with atomic(db):
            db.add(participant)
            db.flush()
    except SQLAlchemyError:
        logger.exception("Could not register participant %s", participant.email)
        return False
    logger.info("Registered participant %s (%s)", participant.participant_id, participant.email)
    return True


def get_participant_by_id(db: Session, participant_id: str) -> Participant:
    try:
        participant = db.get(Participant, participant_id)
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the participant.") from exc
    if participant is None:
        raise ResourceNotFoundError(f"Participant {participant_id} not found.")
    return participant


def list_participants(db: Session) -> list[Participant]:
    try:
        return db.query(Participant).order_by(Participant.last_name, Participant.first_name).all()
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the participants.") from exc


def sync_external_participant(
    db: Session,
    email: str,
    first_name: str,
    last_name: Optional[str] = None,
    provider: str = "google",
) -> Optional[Participant]:
    """Create the participant on first federated sign-in, refresh names afterwards.

    The email is the identity and is never changed. Returns None on store failure.
    """
    try:
        with atomic(db):
            participant = db.query(Participant).filter(Participant.email == email).first()
            if participant is None:
                participant = Participant(email=email, external_provider=provider)
                db.add(participant)
            participant.first_name = first_name
            participant.last_name = last_name or ""
            db.flush()
    except SQLAlchemyError:
        logger.exception("Could not sync federated participant %s", email)
        return None
    return participant


def list_participants_in_holiday(db: Session, holiday_id: str) -> list[Participant]:
    """Participants holding an accepted invitation to the holiday."""
    try:
        return (
            db.query(Participant)
            .join(Invitation, Invitation.participant_id == Participant.participant_id)
            .filter(Invitation.holiday_id == holiday_id, Invitation.is_accepted.is_(True))
            .order_by(Participant.last_name, Participant.first_name)
            .all()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the participants of the holiday.") from exc


def list_participants_not_in_holiday(db: Session, holiday_id: str) -> list[Participant]:
    """Participants with no invitation at all (pending or accepted) to the holiday."""
    invited = select(Invitation.participant_id).where(Invitation.holiday_id == holiday_id)
    try:
        return (
            db.query(Participant)
            .filter(Participant.participant_id.not_in(invited))
            .order_by(Participant.last_name, Participant.first_name)
            .all()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the participants.") from exc


def count_participants(db: Session) -> int:
    try:
        return db.query(func.count(Participant.participant_id)).scalar()
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not count the participants.") from exc
