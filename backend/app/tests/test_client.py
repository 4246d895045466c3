"""
Tests for the client data layer driven against the application.
"""
from datetime import timedelta
from decimal import Decimal
import pytest
from app.api.dependencies import get_token_service
from app.client import ApiClient, ApiError, AuthService, ExpenseService, PollService, TripService, TripState
from app.schemas.expense import ExpenseCreate, ExpenseParticipantIn
from app.schemas.trip import TripCreate
from app.schemas.user import UserCreate


@pytest.fixture
def api(client):
    return ApiClient(http=client)


def sign_up(client, email):
    api = ApiClient(http=client)
    user = AuthService(api).register(UserCreate(email=email, password="secret123"))
    return api, user


def test_register_and_profile(api):
    auth = AuthService(api)
    user = auth.register(UserCreate(email="dana@example.com", password="secret123", first_name="Dana"))
    assert user.email == "dana@example.com"
    assert api.access_token and api.refresh_token

    assert auth.get_profile().first_name == "Dana"

    auth.logout()
    with pytest.raises(ApiError) as exc:
        auth.get_profile()
    assert exc.value.status_code == 401
    assert exc.value.message == "No token provided"


def test_expired_access_token_is_refreshed(client):
    api, user = sign_up(client, "eli@example.com")
    api.access_token = get_token_service().create_access_token(
        user.id, user.email, expires_delta=timedelta(seconds=-5)
    )

    trips = TripService(api).get_trips()
    assert trips == []
    assert get_token_service().verify_access_token(api.access_token)["sub"] == str(user.id)


def test_trip_state_mirrors_backend(client):
    owner_api, owner = sign_up(client, "fay@example.com")
    guest_api, guest = sign_up(client, "gus@example.com")

    trips = TripService(owner_api)
    trip = trips.create_trip(TripCreate(
        title="Porto", destination="Porto",
        start_date="2026-06-01", end_date="2026-06-03"
    ))
    trips.add_member(trip.id, email="GUS@example.com")
    TripService(guest_api).respond_to_invitation(trip.id, accept=True)

    ExpenseService(owner_api).create_expense(trip.id, ExpenseCreate(
        title="Port tasting", amount=Decimal("40"),
        participants=[
            ExpenseParticipantIn(user_id=owner.id, share=Decimal("20")),
            ExpenseParticipantIn(user_id=guest.id, share=Decimal("20")),
        ]
    ))
    poll = PollService(owner_api).create_poll(trip.id, {"question": "Boat or train?"})

    state = TripState(guest_api, trip.id).refresh()
    assert [m.status.value for m in state.trip.members] == ["ACCEPTED", "ACCEPTED"]
    assert state.activities == []
    assert state.expense_total == Decimal("40")
    balances = {b.user.id: b.balance for b in state.balances.balances}
    assert balances == {owner.id: Decimal("20"), guest.id: Decimal("-20")}

    voted = state.poll_service.vote(poll.id, "upvote")
    state.replace_poll(voted)
    assert state.polls[0].upvotes == 1

    state.apply_update(title="Porto & Douro")
    assert state.trip.title == "Porto & Douro"
    assert state.refresh_trip().title == "Porto"


def test_api_error_carries_status_and_message(client):
    api, _ = sign_up(client, "hal@example.com")
    with pytest.raises(ApiError) as exc:
        TripService(api).get_trip(4242)
    assert exc.value.status_code == 404
    assert exc.value.message == "Trip not found"
