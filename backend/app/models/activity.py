"""
Activity model for itinerary items.
"""
from sqlalchemy import (
    Column, String, DateTime, Float, Numeric, Text, Enum as SQLEnum, ForeignKey, Integer
)
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class ActivityCategory(str, enum.Enum):
    ACCOMMODATION = "ACCOMMODATION"
    TRANSPORTATION = "TRANSPORTATION"
    DINING = "DINING"
    ATTRACTION = "ATTRACTION"
    ENTERTAINMENT = "ENTERTAINMENT"
    SHOPPING = "SHOPPING"
    OTHER = "OTHER"


class ActivityPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ActivityStatus(str, enum.Enum):
    PLANNED = "PLANNED"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Activity(BaseModel):
    """A single itinerary item belonging to one trip."""
    __tablename__ = "activities"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(300), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=True)
    category = Column(SQLEnum(ActivityCategory), default=ActivityCategory.OTHER, nullable=False)
    priority = Column(SQLEnum(ActivityPriority), default=ActivityPriority.MEDIUM, nullable=False)
    status = Column(SQLEnum(ActivityStatus), default=ActivityStatus.PLANNED, nullable=False)
    notes = Column(Text, nullable=True)
    cost = Column(Numeric(15, 2), nullable=True)
    booking_url = Column(String(500), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False, index=True)  # Smaller = earlier in the list
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    trip = relationship("Trip", back_populates="activities")
    created_by = relationship("User")

    @property
    def coordinates(self):
        if self.latitude is None or self.longitude is None:
            return None
        return {"latitude": self.latitude, "longitude": self.longitude}
