"""Statistics over participants and holidays."""
import logging
from datetime import datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from holiday_api.errors import LoadDataError
from holiday_api.models.holiday import Holiday
from holiday_api.models.invitation import Invitation
from holiday_api.models.location import Location
from holiday_api.services import participant_service
from holiday_api.timeutils import to_utc

logger = logging.getLogger(__name__)


def get_global_statistics(db: Session) -> dict[str, Any]:
    return {"active_participants": participant_service.count_participants(db)}


def count_holidaymakers_by_country(db: Session, date: datetime) -> list[dict[str, Any]]:
    """Accepted members of holidays running on ``date``, grouped by holiday country."""
    date = to_utc(date)
    try:
        rows = (
            db.query(Location.country, func.count(Invitation.invitation_id))
            .select_from(Invitation)
            .join(Holiday, Holiday.holiday_id == Invitation.holiday_id)
            .join(Location, Location.location_id == Holiday.location_id)
            .filter(
                Invitation.is_accepted.is_(True),
                Holiday.start_date <= date,
                Holiday.end_date >= date,
            )
            .group_by(Location.country)
            .order_by(Location.country)
            .all()
        )
    except SQLAlchemyError as exc:
        raise LoadDataError("Could not compute the holiday statistics for the date.") from exc
    logger.info("Computed holidaymaker statistics for %s", date.date())
    return [{"country": country, "participants": count} for country, count in rows]
