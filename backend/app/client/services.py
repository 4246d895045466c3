"""
Request wrappers for each API resource.

Every wrapper returns the same Pydantic schemas the backend responds with.
"""
from typing import Any, Dict, List, Optional
from app.client.api import ApiClient
from app.schemas.activity import ActivityResponse
from app.schemas.expense import BalanceSummary, ExpenseListData, ExpenseResponse
from app.schemas.poll import PollResponse
from app.schemas.trip import TripResponse
from app.schemas.user import UserResponse


def _payload(model) -> Dict[str, Any]:
    """Serialize a request schema, or pass a plain dict through."""
    if isinstance(model, dict):
        return model
    return model.model_dump(mode="json", exclude_unset=True)


class AuthService:
    def __init__(self, api: ApiClient):
        self.api = api

    def register(self, user_data) -> UserResponse:
        data = self.api.post("/auth/register", _payload(user_data))
        self.api.set_tokens(data["access_token"], data["refresh_token"])
        return UserResponse.model_validate(data["user"])

    def login(self, email: str, password: str) -> UserResponse:
        data = self.api.post("/auth/login", {"email": email, "password": password})
        self.api.set_tokens(data["access_token"], data["refresh_token"])
        return UserResponse.model_validate(data["user"])

    def logout(self) -> None:
        self.api.clear_tokens()

    def get_profile(self) -> UserResponse:
        return UserResponse.model_validate(self.api.get("/auth/profile")["user"])

    def update_profile(self, profile) -> UserResponse:
        data = self.api.put("/auth/profile", _payload(profile))
        return UserResponse.model_validate(data["user"])


class TripService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_trips(self) -> List[TripResponse]:
        data = self.api.get("/trips")
        return [TripResponse.model_validate(t) for t in data["trips"]]

    def get_trip(self, trip_id: int) -> TripResponse:
        return TripResponse.model_validate(self.api.get(f"/trips/{trip_id}")["trip"])

    def create_trip(self, trip_data) -> TripResponse:
        return TripResponse.model_validate(self.api.post("/trips", _payload(trip_data))["trip"])

    def update_trip(self, trip_id: int, trip_data) -> TripResponse:
        data = self.api.put(f"/trips/{trip_id}", _payload(trip_data))
        return TripResponse.model_validate(data["trip"])

    def delete_trip(self, trip_id: int) -> None:
        self.api.delete(f"/trips/{trip_id}")

    def add_member(self, trip_id: int, email: Optional[str] = None, user_id: Optional[int] = None,
                   role: str = "MEMBER") -> TripResponse:
        body = {"role": role}
        if email is not None:
            body["email"] = email
        if user_id is not None:
            body["user_id"] = user_id
        return TripResponse.model_validate(self.api.post(f"/trips/{trip_id}/members", body)["trip"])

    def respond_to_invitation(self, trip_id: int, accept: bool) -> TripResponse:
        body = {"status": "ACCEPTED" if accept else "DECLINED"}
        return TripResponse.model_validate(self.api.post(f"/trips/{trip_id}/members/respond", body)["trip"])

    def remove_member(self, trip_id: int, user_id: int) -> TripResponse:
        return TripResponse.model_validate(self.api.delete(f"/trips/{trip_id}/members/{user_id}")["trip"])


class ActivityService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_activities(self, trip_id: int) -> List[ActivityResponse]:
        data = self.api.get(f"/trips/{trip_id}/activities")
        return [ActivityResponse.model_validate(a) for a in data["activities"]]

    def create_activity(self, trip_id: int, activity_data) -> ActivityResponse:
        data = self.api.post(f"/trips/{trip_id}/activities", _payload(activity_data))
        return ActivityResponse.model_validate(data["activity"])

    def update_activity(self, activity_id: int, activity_data) -> ActivityResponse:
        data = self.api.put(f"/activities/{activity_id}", _payload(activity_data))
        return ActivityResponse.model_validate(data["activity"])

    def delete_activity(self, activity_id: int) -> None:
        self.api.delete(f"/activities/{activity_id}")


class ExpenseService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_expenses(self, trip_id: int) -> ExpenseListData:
        return ExpenseListData.model_validate(self.api.get(f"/trips/{trip_id}/expenses"))

    def create_expense(self, trip_id: int, expense_data) -> ExpenseResponse:
        data = self.api.post(f"/trips/{trip_id}/expenses", _payload(expense_data))
        return ExpenseResponse.model_validate(data["expense"])

    def update_expense(self, expense_id: int, expense_data) -> ExpenseResponse:
        data = self.api.put(f"/expenses/{expense_id}", _payload(expense_data))
        return ExpenseResponse.model_validate(data["expense"])

    def delete_expense(self, expense_id: int) -> None:
        self.api.delete(f"/expenses/{expense_id}")

    def get_balances(self, trip_id: int) -> BalanceSummary:
        return BalanceSummary.model_validate(self.api.get(f"/trips/{trip_id}/balances"))


class PollService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_polls(self, trip_id: int) -> List[PollResponse]:
        data = self.api.get(f"/trips/{trip_id}/polls")
        return [PollResponse.model_validate(p) for p in data["polls"]]

    def create_poll(self, trip_id: int, poll_data) -> PollResponse:
        data = self.api.post(f"/trips/{trip_id}/polls", _payload(poll_data))
        return PollResponse.model_validate(data["poll"])

    def vote(self, poll_id: int, vote_type: str) -> PollResponse:
        data = self.api.post(f"/polls/{poll_id}/vote", {"vote_type": vote_type})
        return PollResponse.model_validate(data["poll"])

    def close_poll(self, poll_id: int) -> PollResponse:
        return PollResponse.model_validate(self.api.put(f"/polls/{poll_id}/close")["poll"])
