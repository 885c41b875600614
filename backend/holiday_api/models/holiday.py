"""Holiday ORM model."""
import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from holiday_api.config import settings
from holiday_api.database import Base


class Holiday(Base):
    __tablename__ = "holidays"
    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_holidays_date_order"),
    )

    holiday_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    picture_path = Column(String(255), nullable=False, default=settings.DEFAULT_HOLIDAY_PICTURE)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    is_published = Column(Boolean, nullable=False, default=False)
    creator_id = Column(String(36), ForeignKey("participants.participant_id"), nullable=False)
    location_id = Column(String(36), ForeignKey("locations.location_id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    location = relationship("Location", cascade="all, delete-orphan", single_parent=True, lazy="joined", innerjoin=True)
    # Activities are only removed through holiday_service.delete_holiday's ordered cascade
    activities = relationship("Activity", viewonly=True, order_by="Activity.start_date")
