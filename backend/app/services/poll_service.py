"""
Poll service for vote recording and closing.
"""
import logging
from datetime import datetime
from typing import Optional
from fastapi import HTTPException, status
from app.models.poll import Poll, PollVote, VoteType

logger = logging.getLogger(__name__)


def parse_vote_type(value: Optional[str]) -> VoteType:
    """Map a raw vote value onto VoteType, rejecting anything else with 400."""
    try:
        return VoteType(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid vote type"
        )


def record_vote(poll: Poll, user_id: int, vote_type: VoteType,
                voted_at: Optional[datetime] = None) -> PollVote:
    """
    Upsert the user's vote: overwrite an existing entry, otherwise append one.
    A user never holds more than one vote on a poll.
    """
    if not poll.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Poll is closed"
        )

    voted_at = voted_at or datetime.utcnow()

    for vote in poll.votes:
        if vote.user_id == user_id:
            vote.vote_type = vote_type
            vote.voted_at = voted_at
            logger.debug(f"User {user_id} changed vote on poll {poll.id} to {vote_type.value}")
            return vote

    vote = PollVote(user_id=user_id, vote_type=vote_type, voted_at=voted_at)
    poll.votes.append(vote)
    logger.debug(f"User {user_id} voted {vote_type.value} on poll {poll.id}")
    return vote


def close_poll(poll: Poll, user_id: int) -> Poll:
    """Deactivate the poll; only its creator may do so."""
    if poll.created_by_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only poll creator can close the poll"
        )
    poll.is_active = False
    return poll
