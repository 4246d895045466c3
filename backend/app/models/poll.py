"""
Poll model for group upvote/downvote proposals.
"""
from datetime import datetime
from sqlalchemy import (
    Column, String, DateTime, Boolean, Text, Enum as SQLEnum, ForeignKey, Integer,
    UniqueConstraint
)
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class PollType(str, enum.Enum):
    YES_NO = "YES_NO"
    RATING = "RATING"


class VoteType(str, enum.Enum):
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


class Poll(BaseModel):
    """A proposal trip members vote on."""
    __tablename__ = "polls"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    question = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(SQLEnum(PollType), default=PollType.YES_NO, nullable=False)
    deadline = Column(DateTime, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    trip = relationship("Trip", back_populates="polls")
    created_by = relationship("User")
    votes = relationship(
        "PollVote", back_populates="poll", cascade="all, delete-orphan",
        order_by="PollVote.id"
    )

    @property
    def upvotes(self) -> int:
        return sum(1 for v in self.votes if v.vote_type == VoteType.UPVOTE)

    @property
    def downvotes(self) -> int:
        return sum(1 for v in self.votes if v.vote_type == VoteType.DOWNVOTE)


class PollVote(BaseModel):
    """One user's vote on a poll."""
    __tablename__ = "poll_votes"

    poll_id = Column(Integer, ForeignKey("polls.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    vote_type = Column(SQLEnum(VoteType), nullable=False)
    voted_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    poll = relationship("Poll", back_populates="votes")
    user = relationship("User")

    # One vote per user per poll
    __table_args__ = (
        UniqueConstraint('poll_id', 'user_id', name='uq_poll_vote_user'),
    )
