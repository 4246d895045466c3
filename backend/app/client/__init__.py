"""Client data layer for the Tripboard API."""
from app.client.api import ApiClient, ApiError
from app.client.services import AuthService, TripService, ActivityService, ExpenseService, PollService
from app.client.state import TripState

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthService",
    "TripService",
    "ActivityService",
    "ExpenseService",
    "PollService",
    "TripState",
]
