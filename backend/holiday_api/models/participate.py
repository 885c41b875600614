"""Participate ORM model: one participant signed up for one activity."""
import uuid
from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from holiday_api.database import Base


class Participate(Base):
    __tablename__ = "participates"
    __table_args__ = (
        UniqueConstraint("activity_id", "participant_id", name="uq_participates_activity_participant"),
    )

    participate_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    activity_id = Column(String(36), ForeignKey("activities.activity_id"), nullable=False, index=True)
    participant_id = Column(String(36), ForeignKey("participants.participant_id"), nullable=False, index=True)

    participant = relationship("Participant")
