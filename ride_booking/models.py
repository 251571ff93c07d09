from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Text

from .database import Base


def utcnow():
    return datetime.now(timezone.utc)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    ride_type = Column(String)
    pickup_city = Column(String, nullable=False)
    drop_city = Column(String, nullable=False)
    pickup_address = Column(Text, nullable=True)
    date = Column(String)
    time = Column(String)
    vehicle = Column(String)
    name = Column(String, nullable=False)
    mobile = Column(String, nullable=False)
    instructions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
