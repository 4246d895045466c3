"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import List, Literal, Optional
from datetime import date, datetime
from decimal import Decimal
from app.models.trip import TripStatus, MemberRole, MemberStatus
from app.schemas.user import UserSummary, normalize_email


def _upper(value):
    if isinstance(value, str):
        return value.strip().upper()
    return value


class TripBase(BaseModel):
    """Base trip schema."""
    title: str = Field(min_length=1)
    description: Optional[str] = None
    destination: str = Field(min_length=1)
    start_date: date
    end_date: date
    cover_image: Optional[str] = None
    budget: Optional[Decimal] = Field(default=None, ge=0)
    currency: str = "USD"

    @field_validator("currency", mode="before")
    @classmethod
    def upper_currency(cls, v):
        return _upper(v)


class TripCreate(TripBase):
    """Schema for trip creation."""

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class TripUpdate(BaseModel):
    """Schema for trip update; owner and members cannot be changed here."""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    destination: Optional[str] = Field(default=None, min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cover_image: Optional[str] = None
    budget: Optional[Decimal] = Field(default=None, ge=0)
    currency: Optional[str] = None
    status: Optional[TripStatus] = None

    @field_validator("currency", mode="before")
    @classmethod
    def upper_currency(cls, v):
        return _upper(v)

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class TripMemberResponse(BaseModel):
    """Schema for one roster entry."""
    user: UserSummary
    role: MemberRole
    status: MemberStatus
    joined_at: datetime

    class Config:
        from_attributes = True


class TripResponse(TripBase):
    """Schema for trip response with owner and members expanded."""
    id: int
    status: TripStatus
    owner: UserSummary
    members: List[TripMemberResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MemberAdd(BaseModel):
    """Schema for adding a member by user id or by email."""
    user_id: Optional[int] = None
    email: Optional[EmailStr] = None
    role: MemberRole = MemberRole.MEMBER

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)


class InvitationReply(BaseModel):
    """Schema for accepting or declining a trip invitation."""
    status: Literal[MemberStatus.ACCEPTED, MemberStatus.DECLINED]


class TripData(BaseModel):
    trip: TripResponse


class TripListData(BaseModel):
    trips: List[TripResponse]
    count: int
