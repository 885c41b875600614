"""Location ORM model — owned one-to-one by a Holiday or an Activity."""
import uuid
from sqlalchemy import Column, String
from holiday_api.database import Base


class Location(Base):
    __tablename__ = "locations"

    location_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    street = Column(String(200), nullable=True)
    number = Column(String(20), nullable=True)
    locality = Column(String(100), nullable=False)
    postal_code = Column(String(20), nullable=False)
    country = Column(String(100), nullable=False)

    def formatted_address(self) -> str:
        """Single-line address as sent to the geocoding service."""
        street = " ".join(part for part in (self.street, self.number) if part)
        locality = f"{self.postal_code} {self.locality}"
        return ", ".join(part for part in (street, locality, self.country) if part)
