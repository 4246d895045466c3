"""
Pydantic schemas for Activity entity.
"""
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from app.models.activity import ActivityCategory, ActivityPriority, ActivityStatus
from app.schemas.user import UserSummary


class Coordinates(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class ActivityCreate(BaseModel):
    """Schema for activity creation."""
    title: str = Field(min_length=1)
    description: Optional[str] = None
    location: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    category: ActivityCategory = ActivityCategory.OTHER
    priority: ActivityPriority = ActivityPriority.MEDIUM
    status: ActivityStatus = ActivityStatus.PLANNED
    notes: Optional[str] = None
    cost: Optional[Decimal] = Field(default=None, ge=0)
    booking_url: Optional[str] = None
    sort_order: int = 0

    @model_validator(mode="after")
    def check_times(self):
        if self.end_time and self.end_time < self.start_time:
            raise ValueError("End time cannot be before start time")
        return self


class ActivityUpdate(BaseModel):
    """Schema for activity update."""
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    location: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    category: Optional[ActivityCategory] = None
    priority: Optional[ActivityPriority] = None
    status: Optional[ActivityStatus] = None
    notes: Optional[str] = None
    cost: Optional[Decimal] = Field(default=None, ge=0)
    booking_url: Optional[str] = None
    sort_order: Optional[int] = None


class ActivityResponse(BaseModel):
    """Schema for activity response."""
    id: int
    trip_id: int
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    category: ActivityCategory
    priority: ActivityPriority
    status: ActivityStatus
    notes: Optional[str] = None
    cost: Optional[Decimal] = None
    booking_url: Optional[str] = None
    sort_order: int
    created_by: UserSummary
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ActivityData(BaseModel):
    activity: ActivityResponse


class ActivityListData(BaseModel):
    activities: List[ActivityResponse]
    count: int
