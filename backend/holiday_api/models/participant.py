"""Participant ORM model."""
import uuid
from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from holiday_api.database import Base


class Participant(Base):
    __tablename__ = "participants"

    participant_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, default="")
    email = Column(String(255), nullable=False, unique=True)
    external_provider = Column(String(50), nullable=True)  # e.g. "google" for federated sign-in
    created_at = Column(DateTime(timezone=True), server_default=func.now())
