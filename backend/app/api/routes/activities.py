"""
Itinerary activity routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.user import User
from app.models.activity import Activity
from app.schemas.common import ApiResponse
from app.schemas.activity import (
    ActivityCreate, ActivityUpdate, ActivityResponse, ActivityData, ActivityListData
)
from app.services.access_service import check_trip_access
from app.api.dependencies import get_current_user

router = APIRouter(tags=["activities"])


def get_activity_for_user(activity_id: int, user_id: int, db: Session) -> Activity:
    """Load an activity; only members of its trip may modify it."""
    activity = db.query(Activity).filter(Activity.id == activity_id).first()
    if not activity:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Activity not found"
        )
    check_trip_access(activity.trip_id, user_id, db)
    return activity


@router.post("/trips/{trip_id}/activities", response_model=ApiResponse[ActivityData],
             status_code=status.HTTP_201_CREATED)
async def create_activity(
    trip_id: int,
    activity_data: ActivityCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an itinerary item to a trip."""
    check_trip_access(trip_id, current_user.id, db)

    fields = activity_data.model_dump(exclude={"coordinates"})
    if activity_data.coordinates:
        fields["latitude"] = activity_data.coordinates.latitude
        fields["longitude"] = activity_data.coordinates.longitude

    activity = Activity(**fields, trip_id=trip_id, created_by_id=current_user.id)
    db.add(activity)
    db.commit()
    db.refresh(activity)

    return ApiResponse(
        message="Activity created successfully",
        data=ActivityData(activity=ActivityResponse.model_validate(activity))
    )


@router.get("/trips/{trip_id}/activities", response_model=ApiResponse[ActivityListData])
async def list_activities(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List a trip's itinerary ordered by sort order, then start time."""
    check_trip_access(trip_id, current_user.id, db)

    activities = db.query(Activity).filter(Activity.trip_id == trip_id).order_by(
        Activity.sort_order.asc(), Activity.start_time.asc(), Activity.id.asc()
    ).all()

    return ApiResponse(data=ActivityListData(
        activities=[ActivityResponse.model_validate(a) for a in activities],
        count=len(activities)
    ))


@router.put("/activities/{activity_id}", response_model=ApiResponse[ActivityData])
async def update_activity(
    activity_id: int,
    activity_data: ActivityUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update an activity."""
    activity = get_activity_for_user(activity_id, current_user.id, db)

    updates = activity_data.model_dump(exclude_unset=True)
    if "coordinates" in updates:
        coordinates = updates.pop("coordinates")
        activity.latitude = coordinates["latitude"] if coordinates else None
        activity.longitude = coordinates["longitude"] if coordinates else None

    start_time = updates.get("start_time") or activity.start_time
    end_time = updates["end_time"] if "end_time" in updates else activity.end_time
    if end_time and end_time < start_time:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="End time cannot be before start time"
        )

    for field, value in updates.items():
        if value is None and field in ("title", "start_time", "category", "priority", "status", "sort_order"):
            continue
        setattr(activity, field, value)

    db.commit()
    db.refresh(activity)

    return ApiResponse(
        message="Activity updated successfully",
        data=ActivityData(activity=ActivityResponse.model_validate(activity))
    )


@router.delete("/activities/{activity_id}", response_model=ApiResponse[None])
async def delete_activity(
    activity_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an activity."""
    activity = get_activity_for_user(activity_id, current_user.id, db)
    db.delete(activity)
    db.commit()
    return ApiResponse(message="Activity deleted successfully")
