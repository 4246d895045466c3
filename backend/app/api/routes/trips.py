"""
Trip management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.user import User
from app.models.trip import Trip
from app.schemas.common import ApiResponse
from app.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, TripData, TripListData,
    MemberAdd, InvitationReply
)
from app.schemas.expense import BalanceSummary
from app.services import trip_service
from app.services.access_service import check_trip_access, get_trip_or_404
from app.services.balance_service import summarize_trip_balances
from app.api.dependencies import get_current_user

router = APIRouter(prefix="/trips", tags=["trips"])


def _trip_data(trip: Trip) -> TripData:
    return TripData(trip=TripResponse.model_validate(trip))


@router.post("", response_model=ApiResponse[TripData], status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip owned by the current user."""
    trip = trip_service.create_trip(current_user.id, trip_data, db)
    return ApiResponse(message="Trip created successfully", data=_trip_data(trip))


@router.get("", response_model=ApiResponse[TripListData])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all trips the current user owns or belongs to, newest first."""
    trips = trip_service.list_trips_for_user(current_user.id, db)
    return ApiResponse(data=TripListData(
        trips=[TripResponse.model_validate(t) for t in trips],
        count=len(trips)
    ))


@router.get("/{trip_id}", response_model=ApiResponse[TripData])
async def get_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details with owner and members expanded."""
    trip = check_trip_access(trip_id, current_user.id, db)
    return ApiResponse(data=_trip_data(trip))


@router.put("/{trip_id}", response_model=ApiResponse[TripData])
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update trip fields (owner or admin only)."""
    trip = check_trip_access(trip_id, current_user.id, db, require_admin=True)
    trip = trip_service.update_trip(trip, trip_data, db)
    return ApiResponse(message="Trip updated successfully", data=_trip_data(trip))


@router.delete("/{trip_id}", response_model=ApiResponse[None])
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip and everything planned under it (owner only)."""
    trip = get_trip_or_404(trip_id, db)
    trip_service.delete_trip(trip, current_user.id, db)
    return ApiResponse(message="Trip deleted successfully")


@router.post("/{trip_id}/members", response_model=ApiResponse[TripData])
async def add_member(
    trip_id: int,
    invite: MemberAdd,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Invite a user to the trip by id or email."""
    trip = get_trip_or_404(trip_id, db)
    trip_service.add_member(trip, current_user.id, invite, db)
    return ApiResponse(message="Member added successfully", data=_trip_data(trip))


@router.post("/{trip_id}/members/respond", response_model=ApiResponse[TripData])
async def respond_to_invitation(
    trip_id: int,
    reply: InvitationReply,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Accept or decline the current user's invitation."""
    trip = get_trip_or_404(trip_id, db)
    trip_service.respond_to_invitation(trip, current_user.id, reply.status, db)
    return ApiResponse(message=f"Invitation {reply.status.value.lower()}", data=_trip_data(trip))


@router.delete("/{trip_id}/members/{user_id}", response_model=ApiResponse[TripData])
async def remove_member(
    trip_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a member from the trip, or leave it."""
    trip = get_trip_or_404(trip_id, db)
    trip_service.remove_member(trip, current_user.id, user_id, db)
    db.refresh(trip)
    return ApiResponse(message="Member removed successfully", data=_trip_data(trip))


@router.get("/{trip_id}/balances", response_model=ApiResponse[BalanceSummary])
async def get_balances(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Net balance per member plus suggested settle-up transfers."""
    trip = check_trip_access(trip_id, current_user.id, db)
    summary = summarize_trip_balances(trip, db)
    return ApiResponse(data=BalanceSummary.model_validate(summary, from_attributes=True))
