"""Activity ORM model."""
import uuid
from sqlalchemy import Column, String, Text, Float, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from holiday_api.config import settings
from holiday_api.database import Base


class Activity(Base):
    __tablename__ = "activities"
    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_activities_date_order"),
        CheckConstraint("price >= 0", name="ck_activities_price_positive"),
    )

    activity_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    picture_path = Column(String(255), nullable=False, default=settings.DEFAULT_ACTIVITY_PICTURE)
    price = Column(Float, nullable=False, default=0.0)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    holiday_id = Column(String(36), ForeignKey("holidays.holiday_id"), nullable=False, index=True)
    location_id = Column(String(36), ForeignKey("locations.location_id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    location = relationship("Location", cascade="all, delete-orphan", single_parent=True, lazy="joined", innerjoin=True)
