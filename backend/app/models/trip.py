"""
Trip model for group travel planning.
"""
from datetime import datetime
from sqlalchemy import (
    Column, String, Date, DateTime, Numeric, Text, Enum as SQLEnum,
    ForeignKey, Integer, UniqueConstraint
)
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class TripStatus(str, enum.Enum):
    """Trip status enumeration."""
    PLANNING = "PLANNING"
    CONFIRMED = "CONFIRMED"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class MemberRole(str, enum.Enum):
    """Role a user holds within a trip."""
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    MEMBER = "MEMBER"
    VIEWER = "VIEWER"


class MemberStatus(str, enum.Enum):
    """Invitation state of a trip member."""
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class Trip(BaseModel):
    """Trip model; the aggregation root for activities, expenses and polls."""
    __tablename__ = "trips"

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    destination = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    cover_image = Column(String(500), nullable=True)
    budget = Column(Numeric(15, 2), nullable=True)
    currency = Column(String(3), nullable=False, default="USD")
    status = Column(SQLEnum(TripStatus), default=TripStatus.PLANNING, nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="owned_trips")
    members = relationship(
        "TripMember", back_populates="trip", cascade="all, delete-orphan",
        order_by="TripMember.id"
    )
    activities = relationship("Activity", back_populates="trip", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")
    polls = relationship("Poll", back_populates="trip", cascade="all, delete-orphan")


class TripMember(BaseModel):
    """Junction table for Trip and User with role and invitation status."""
    __tablename__ = "trip_members"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(SQLEnum(MemberRole), default=MemberRole.MEMBER, nullable=False)
    status = Column(SQLEnum(MemberStatus), default=MemberStatus.PENDING, nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="members")
    user = relationship("User", back_populates="memberships")

    __table_args__ = (
        UniqueConstraint('trip_id', 'user_id', name='uq_trip_member'),
    )
