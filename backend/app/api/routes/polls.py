"""
Group poll routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.user import User
from app.models.poll import Poll
from app.schemas.common import ApiResponse
from app.schemas.poll import PollCreate, PollResponse, PollData, PollListData, VoteRequest
from app.services import poll_service
from app.services.access_service import check_trip_access
from app.api.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["polls"])


def get_poll_or_404(poll_id: int, db: Session) -> Poll:
    poll = db.query(Poll).filter(Poll.id == poll_id).first()
    if not poll:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Poll not found"
        )
    return poll


def _poll_data(poll: Poll) -> PollData:
    return PollData(poll=PollResponse.model_validate(poll))


@router.post("/trips/{trip_id}/polls", response_model=ApiResponse[PollData],
             status_code=status.HTTP_201_CREATED)
async def create_poll(
    trip_id: int,
    poll_data: PollCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Propose a poll to the trip."""
    check_trip_access(trip_id, current_user.id, db)

    poll = Poll(
        **poll_data.model_dump(),
        trip_id=trip_id,
        created_by_id=current_user.id,
        is_active=True
    )
    db.add(poll)
    db.commit()
    db.refresh(poll)

    return ApiResponse(message="Poll created successfully", data=_poll_data(poll))


@router.get("/trips/{trip_id}/polls", response_model=ApiResponse[PollListData])
async def list_polls(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List a trip's polls, newest first."""
    check_trip_access(trip_id, current_user.id, db)

    polls = db.query(Poll).filter(Poll.trip_id == trip_id).order_by(
        Poll.created_at.desc(), Poll.id.desc()
    ).all()

    return ApiResponse(data=PollListData(
        polls=[PollResponse.model_validate(p) for p in polls],
        count=len(polls)
    ))


@router.post("/polls/{poll_id}/vote", response_model=ApiResponse[PollData])
async def vote_poll(
    poll_id: int,
    vote: VoteRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Cast or change the current user's vote."""
    vote_type = poll_service.parse_vote_type(vote.vote_type)
    poll = get_poll_or_404(poll_id, db)
    check_trip_access(poll.trip_id, current_user.id, db)

    poll_service.record_vote(poll, current_user.id, vote_type)
    db.commit()
    db.refresh(poll)

    logger.info(f"User {current_user.id} voted {vote_type.value} on poll {poll.id}")
    return ApiResponse(message="Vote recorded successfully", data=_poll_data(poll))


@router.put("/polls/{poll_id}/close", response_model=ApiResponse[PollData])
async def close_poll(
    poll_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Close a poll (creator only)."""
    poll = get_poll_or_404(poll_id, db)
    poll_service.close_poll(poll, current_user.id)
    db.commit()
    db.refresh(poll)

    logger.info(f"Poll {poll.id} closed by user {current_user.id}")
    return ApiResponse(message="Poll closed successfully", data=_poll_data(poll))
