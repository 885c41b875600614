"""Invitation ORM model — one participant's membership of one holiday."""
import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from holiday_api.database import Base


class Invitation(Base):
    __tablename__ = "invitations"
    __table_args__ = (
        UniqueConstraint("holiday_id", "participant_id", name="uq_invitations_holiday_participant"),
    )

    invitation_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    holiday_id = Column(String(36), ForeignKey("holidays.holiday_id"), nullable=False, index=True)
    participant_id = Column(String(36), ForeignKey("participants.participant_id"), nullable=False, index=True)
    is_accepted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    holiday = relationship("Holiday")
    participant = relationship("Participant")
