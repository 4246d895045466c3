"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.trip import Trip, TripMember, TripStatus, MemberRole, MemberStatus
from app.models.activity import Activity, ActivityCategory, ActivityPriority, ActivityStatus
from app.models.expense import Expense, ExpenseParticipant, ExpenseCategory
from app.models.poll import Poll, PollVote, PollType, VoteType

__all__ = [
    "User",
    "Trip",
    "TripMember",
    "TripStatus",
    "MemberRole",
    "MemberStatus",
    "Activity",
    "ActivityCategory",
    "ActivityPriority",
    "ActivityStatus",
    "Expense",
    "ExpenseParticipant",
    "ExpenseCategory",
    "Poll",
    "PollVote",
    "PollType",
    "VoteType",
]
