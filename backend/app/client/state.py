"""
Local mirror of one trip's state, refreshed from the API on demand.
"""
import logging
from typing import List, Optional
from app.client.api import ApiClient
from app.client.services import ActivityService, ExpenseService, PollService, TripService
from app.schemas.activity import ActivityResponse
from app.schemas.expense import BalanceSummary, ExpenseResponse
from app.schemas.poll import PollResponse
from app.schemas.trip import TripResponse

logger = logging.getLogger(__name__)


class TripState:
    """Cached trip, itinerary, expenses, polls and balances for one trip."""

    def __init__(self, api: ApiClient, trip_id: int):
        self.trip_id = trip_id
        self.trips = TripService(api)
        self.activity_service = ActivityService(api)
        self.expense_service = ExpenseService(api)
        self.poll_service = PollService(api)

        self.trip: Optional[TripResponse] = None
        self.activities: List[ActivityResponse] = []
        self.expenses: List[ExpenseResponse] = []
        self.expense_total = None
        self.polls: List[PollResponse] = []
        self.balances: Optional[BalanceSummary] = None

    def refresh_trip(self) -> TripResponse:
        self.trip = self.trips.get_trip(self.trip_id)
        return self.trip

    def refresh_activities(self) -> List[ActivityResponse]:
        self.activities = self.activity_service.get_activities(self.trip_id)
        return self.activities

    def refresh_expenses(self) -> List[ExpenseResponse]:
        listing = self.expense_service.get_expenses(self.trip_id)
        self.expenses = listing.expenses
        self.expense_total = listing.total
        self.balances = self.expense_service.get_balances(self.trip_id)
        return self.expenses

    def refresh_polls(self) -> List[PollResponse]:
        self.polls = self.poll_service.get_polls(self.trip_id)
        return self.polls

    def refresh(self) -> "TripState":
        """Reload everything for the trip."""
        self.refresh_trip()
        self.refresh_activities()
        self.refresh_expenses()
        self.refresh_polls()
        logger.debug(
            f"Trip {self.trip_id} refreshed: {len(self.activities)} activities, "
            f"{len(self.expenses)} expenses, {len(self.polls)} polls"
        )
        return self

    def apply_update(self, **changes) -> Optional[TripResponse]:
        """Merge local changes into the cached trip without a round trip."""
        if self.trip is None:
            return None
        self.trip = self.trip.model_copy(update=changes)
        return self.trip

    def replace_poll(self, poll: PollResponse) -> None:
        """Swap a poll returned by vote/close into the cached list."""
        self.polls = [poll if p.id == poll.id else p for p in self.polls]
