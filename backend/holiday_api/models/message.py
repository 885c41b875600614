"""Message ORM model. Messages are append-only."""
import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from holiday_api.database import Base


class Message(Base):
    __tablename__ = "messages"

    message_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    send_at = Column(DateTime(timezone=True), nullable=False, index=True)
    content = Column(Text, nullable=False)
    holiday_id = Column(String(36), ForeignKey("holidays.holiday_id"), nullable=False, index=True)
    participant_id = Column(String(36), ForeignKey("participants.participant_id"), nullable=False)

    participant = relationship("Participant", lazy="joined", innerjoin=True)
