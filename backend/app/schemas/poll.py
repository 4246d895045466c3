"""
Pydantic schemas for Poll entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from app.models.poll import PollType, VoteType
from app.schemas.user import UserSummary


class PollCreate(BaseModel):
    """Schema for poll creation."""
    question: str = Field(min_length=1)
    description: Optional[str] = None
    type: PollType = PollType.YES_NO
    deadline: Optional[datetime] = None


class VoteRequest(BaseModel):
    """Vote payload; the value is checked against VoteType by the poll service."""
    vote_type: Optional[str] = None


class PollVoteResponse(BaseModel):
    user: UserSummary
    vote_type: VoteType
    voted_at: datetime

    class Config:
        from_attributes = True


class PollResponse(BaseModel):
    """Schema for poll response with vote tallies."""
    id: int
    trip_id: int
    question: str
    description: Optional[str] = None
    type: PollType
    deadline: Optional[datetime] = None
    is_active: bool
    created_by: UserSummary
    votes: List[PollVoteResponse] = []
    upvotes: int = 0
    downvotes: int = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PollData(BaseModel):
    poll: PollResponse


class PollListData(BaseModel):
    polls: List[PollResponse]
    count: int
