"""Invitation manager — membership records linking participants to holidays."""
import logging
import threading
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from holiday_api.database import atomic, ensure_not_cancelled
from holiday_api.errors import CascadeStepFailed, LoadDataError, OperationCancelled, ResourceNotFoundError
from holiday_api.models.holiday import Holiday
from holiday_api.models.invitation import Invitation

logger = logging.getLogger(__name__)


def add_invitation(
    db: Session,
    invitation: Invitation,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Insert a pending (or pre-accepted) invitation."""
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            db.add(invitation)
            db.flush()
    except (SQLAlchemyError, OperationCancelled):
        logger.exception(
            "Could not invite participant %s to holiday %s", invitation.participant_id, invitation.holiday_id
        )
        return False
    logger.info(
        "Invited participant %s to holiday %s (accepted=%s)",
        invitation.participant_id, invitation.holiday_id, invitation.is_accepted,
    )
    return True


def add_invitations(
    db: Session,
    invitations: Iterable[Invitation],
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Insert a batch of invitations; any conflict rejects the whole batch."""
    invitations = list(invitations)
    try:
        with atomic(db):
            for invitation in invitations:
                if not add_invitation(db, invitation, cancel=cancel):
                    raise CascadeStepFailed("invitation batch")
    except CascadeStepFailed:
        logger.warning("Invitation batch of %d rejected", len(invitations))
        return False
    return True


def accept_invitation(
    db: Session,
    invitation_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            invitation = db.get(Invitation, invitation_id)
            if invitation is None:
                return False
            invitation.is_accepted = True
            db.flush()
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not accept invitation %s", invitation_id)
        return False
    logger.info("Invitation %s accepted", invitation_id)
    return True


def refuse_invitation(
    db: Session,
    invitation_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            invitation = db.get(Invitation, invitation_id)
            if invitation is None:
                return False
            db.delete(invitation)
            db.flush()
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not refuse invitation %s", invitation_id)
        return False
    logger.info("Invitation %s refused", invitation_id)
    return True


def get_invitation_by_id(db: Session, invitation_id: str) -> Invitation:
    try:
        invitation = db.get(Invitation, invitation_id)
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the invitation.") from exc
    if invitation is None:
        raise ResourceNotFoundError(f"Invitation {invitation_id} not found.")
    return invitation


def get_invitations_by_participant(db: Session, participant_id: str) -> list[Invitation]:
    """Pending invitations of a participant, with holiday, location and participant loaded."""
    try:
        return (
            db.query(Invitation)
            .options(
                joinedload(Invitation.holiday).joinedload(Holiday.location),
                joinedload(Invitation.participant),
            )
            .filter(Invitation.participant_id == participant_id, Invitation.is_accepted.is_(False))
            .order_by(Invitation.created_at)
            .all()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the invitations of the participant.") from exc


def delete_invitations(
    db: Session,
    holiday_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Bulk delete every invitation of a holiday, pending or accepted."""
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            deleted = (
                db.query(Invitation)
                .filter(Invitation.holiday_id == holiday_id)
                .delete(synchronize_session="fetch")
            )
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not delete invitations of holiday %s", holiday_id)
        return False
    logger.info("Deleted %d invitations of holiday %s", deleted, holiday_id)
    return True


def delete_invitation_by_participant(
    db: Session,
    holiday_id: str,
    participant_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Delete the one invitation of the pair; False when there is none."""
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            invitation = (
                db.query(Invitation)
                .filter(Invitation.holiday_id == holiday_id, Invitation.participant_id == participant_id)
                .first()
            )
            if invitation is None:
                logger.warning("No invitation of participant %s for holiday %s", participant_id, holiday_id)
                return False
            db.delete(invitation)
            db.flush()
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not delete invitation of %s for holiday %s", participant_id, holiday_id)
        return False
    return True


def has_remaining_accepted_participants(db: Session, holiday_id: str) -> bool:
    """True iff at least one accepted invitation remains for the holiday."""
    try:
        remaining = (
            db.query(Invitation.invitation_id)
            .filter(Invitation.holiday_id == holiday_id, Invitation.is_accepted.is_(True))
            .first()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not count the remaining participants of the holiday.") from exc
    return remaining is not None
