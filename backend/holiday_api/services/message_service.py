"""Message manager — per-holiday chat history."""
import logging
import threading
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from holiday_api.config import settings
from holiday_api.database import atomic, ensure_not_cancelled
from holiday_api.errors import LoadDataError, OperationCancelled
from holiday_api.models.holiday import Holiday
from holiday_api.models.message import Message
from holiday_api.models.participant import Participant
from holiday_api.timeutils import to_utc, utc_now

logger = logging.getLogger(__name__)


def add_message(
    db: Session,
    participant_id: str,
    holiday_id: str,
    content: str,
    sent_at: Optional[datetime] = None,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """Append a chat message; False if the participant or holiday is unknown."""
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            if db.get(Participant, participant_id) is None:
                logger.warning("Message dropped: participant %s not found", participant_id)
                return False
            if db.get(Holiday, holiday_id) is None:
                logger.warning("Message dropped: holiday %s not found", holiday_id)
                return False
            db.add(Message(
                participant_id=participant_id,
                holiday_id=holiday_id,
                content=content,
                send_at=to_utc(sent_at) if sent_at else utc_now(),
            ))
            db.flush()
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not store message of %s in holiday %s", participant_id, holiday_id)
        return False
    return True


def get_recent_messages(db: Session, holiday_id: str, limit: Optional[int] = None) -> list[Message]:
    """Return the most recent messages of a holiday, oldest first."""
    if limit is None:
        limit = settings.CHAT_HISTORY_SIZE
    try:
        newest = (
            db.query(Message)
            .filter(Message.holiday_id == holiday_id)
            .order_by(Message.send_at.desc(), Message.message_id.desc())
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not load the messages of the holiday.") from exc
    return sorted(newest, key=lambda message: (message.send_at, message.message_id))


def delete_messages(
    db: Session,
    holiday_id: str,
    cancel: Optional[threading.Event] = None,
) -> bool:
    try:
        with atomic(db):
            ensure_not_cancelled(cancel)
            deleted = (
                db.query(Message)
                .filter(Message.holiday_id == holiday_id)
                .delete(synchronize_session="fetch")
            )
    except (SQLAlchemyError, OperationCancelled):
        logger.exception("Could not delete messages of holiday %s", holiday_id)
        return False
    logger.info("Deleted %d messages of holiday %s", deleted, holiday_id)
    return True
