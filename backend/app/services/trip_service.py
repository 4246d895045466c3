"""
Trip membership service: trip lifecycle and roster management.
"""
import logging
from datetime import datetime
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.models.user import User
from app.models.trip import Trip, TripMember, MemberRole, MemberStatus
from app.schemas.trip import TripCreate, TripUpdate, MemberAdd
from app.services.access_service import find_member, is_owner, is_owner_or_admin

logger = logging.getLogger(__name__)


def create_trip(owner_id: int, trip_data: TripCreate, db: Session) -> Trip:
    """Persist a trip whose roster holds only its owner (OWNER, ACCEPTED)."""
    trip = Trip(**trip_data.model_dump(), owner_id=owner_id)
    trip.members.append(TripMember(
        user_id=owner_id,
        role=MemberRole.OWNER,
        status=MemberStatus.ACCEPTED,
        joined_at=datetime.utcnow()
    ))
    db.add(trip)
    db.commit()
    db.refresh(trip)

    logger.info(f"User {owner_id} created trip {trip.id}")
    return trip


def list_trips_for_user(user_id: int, db: Session):
    """All trips the user owns or belongs to, newest first."""
    member_trip_ids = db.query(TripMember.trip_id).filter(TripMember.user_id == user_id)
    return db.query(Trip).filter(
        (Trip.owner_id == user_id) | (Trip.id.in_(member_trip_ids))
    ).order_by(Trip.created_at.desc(), Trip.id.desc()).all()


REQUIRED_TRIP_FIELDS = ("title", "destination", "start_date", "end_date", "currency", "status")


def update_trip(trip: Trip, trip_data: TripUpdate, db: Session) -> Trip:
    """Apply a partial update to trip fields; the owner and roster are untouched."""
    updates = trip_data.model_dump(exclude_unset=True)

    start_date = updates.get("start_date") or trip.start_date
    end_date = updates.get("end_date") or trip.end_date
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="End date cannot be before start date"
        )

    for field, value in updates.items():
        if value is None and field in REQUIRED_TRIP_FIELDS:
            continue
        setattr(trip, field, value)

    db.commit()
    db.refresh(trip)
    return trip


def resolve_member_user(invite: MemberAdd, db: Session) -> User:
    """Resolve an invitation to an existing user by id, falling back to email."""
    if invite.user_id is not None:
        user = db.query(User).filter(User.id == invite.user_id).first()
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )
        return user

    if invite.email:
        user = db.query(User).filter(User.email == invite.email).first()
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"User with email {invite.email} not found"
            )
        return user

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Either user_id or email is required"
    )


def add_member(trip: Trip, requester_id: int, invite: MemberAdd, db: Session) -> TripMember:
    """
    Append a PENDING roster entry for the invited user.

    Only the owner or an admin may invite. Inviting someone already on the
    roster fails with 409 and leaves the roster untouched.
    """
    if not is_owner_or_admin(trip, requester_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to add members"
        )

    if invite.role == MemberRole.OWNER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The OWNER role cannot be granted"
        )

    user = resolve_member_user(invite, db)

    if find_member(trip, user.id) is not None or is_owner(trip, user.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User is already a member"
        )

    member = TripMember(
        user_id=user.id,
        role=invite.role,
        status=MemberStatus.PENDING,
        joined_at=datetime.utcnow()
    )
    trip.members.append(member)
    db.commit()
    db.refresh(trip)

    logger.info(f"User {requester_id} invited user {user.id} to trip {trip.id} as {invite.role.value}")
    return member


def respond_to_invitation(trip: Trip, user_id: int, reply_status: MemberStatus, db: Session) -> TripMember:
    """Set the caller's own roster status to ACCEPTED or DECLINED."""
    if is_owner(trip, user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The trip owner cannot respond to an invitation"
        )

    member = find_member(trip, user_id)
    if member is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not invited to this trip"
        )

    member.status = reply_status
    db.commit()
    db.refresh(trip)
    return member


def remove_member(trip: Trip, requester_id: int, user_id: int, db: Session) -> None:
    """Remove a roster entry; admins may remove anyone but the owner, members may leave."""
    if requester_id != user_id and not is_owner_or_admin(trip, requester_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to remove members"
        )

    if is_owner(trip, user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The trip owner cannot be removed"
        )

    member = find_member(trip, user_id)
    if member is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )

    trip.members.remove(member)
    db.commit()
    logger.info(f"User {user_id} removed from trip {trip.id} by user {requester_id}")


def delete_trip(trip: Trip, requester_id: int, db: Session) -> None:
    """Delete a trip together with its activities, expenses and polls."""
    if not is_owner(trip, requester_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only trip owner can delete the trip"
        )

    logger.info(
        f"Deleting trip {trip.id}: {len(trip.activities)} activities, "
        f"{len(trip.expenses)} expenses, {len(trip.polls)} polls"
    )
    db.delete(trip)
    db.commit()
