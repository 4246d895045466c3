"""
Authorization helpers deriving a caller's relationship to a trip.
"""
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.models.trip import Trip, TripMember, MemberRole

ADMIN_ROLES = (MemberRole.OWNER, MemberRole.ADMIN)


def find_member(trip: Trip, user_id: int) -> Optional[TripMember]:
    """Return the roster entry for user_id, or None."""
    for member in trip.members:
        if member.user_id == user_id:
            return member
    return None


def is_owner(trip: Trip, user_id: int) -> bool:
    return trip.owner_id == user_id


def has_access(trip: Trip, user_id: int) -> bool:
    """True iff the user owns the trip or appears on its roster (any status)."""
    return is_owner(trip, user_id) or find_member(trip, user_id) is not None


def is_owner_or_admin(trip: Trip, user_id: int) -> bool:
    """True iff the user owns the trip or holds an OWNER/ADMIN roster entry."""
    if is_owner(trip, user_id):
        return True
    return any(
        m.user_id == user_id and m.role in ADMIN_ROLES
        for m in trip.members
    )


def get_trip_or_404(trip_id: int, db: Session) -> Trip:
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )
    return trip


def check_trip_access(trip_id: int, user_id: int, db: Session, require_admin: bool = False) -> Trip:
    """Load a trip and ensure the user may see it (or administer it)."""
    trip = get_trip_or_404(trip_id, db)

    allowed = is_owner_or_admin(trip, user_id) if require_admin else has_access(trip, user_id)
    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to manage this trip" if require_admin else "Access denied to this trip"
        )

    return trip
