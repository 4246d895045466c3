"""
Tests for expense endpoints and balance computation.
"""
from decimal import Decimal
from app.models.expense import Expense, ExpenseParticipant
from app.services.balance_service import compute_balances, minimize_transfers
from conftest import API, create_trip


def make_expense(amount, paid_by, shares):
    expense = Expense(amount=Decimal(amount), paid_by_id=paid_by)
    expense.participants = [
        ExpenseParticipant(user_id=uid, share=Decimal(share)) for uid, share in shares
    ]
    return expense


def test_compute_balances_empty():
    assert compute_balances([]) == {}
    assert compute_balances([], member_ids=[1, 2, 3]) == {1: 0, 2: 0, 3: 0}


def test_compute_balances_self_paid_expense_nets_zero():
    assert compute_balances([make_expense(45, 1, [(1, 45)])]) == {1: Decimal(0)}


def test_compute_balances_even_split():
    expense = make_expense(90, 1, [(1, 30), (2, 30), (3, 30)])
    assert compute_balances([expense]) == {1: Decimal(60), 2: Decimal(-30), 3: Decimal(-30)}


def test_compute_balances_sums_across_expenses():
    expenses = [
        make_expense(90, 1, [(1, 30), (2, 30), (3, 30)]),
        make_expense(40, 2, [(1, 20), (2, 20)]),
    ]
    balances = compute_balances(expenses, member_ids=[1, 2, 3, 4])
    assert balances == {1: Decimal(40), 2: Decimal(-10), 3: Decimal(-30), 4: Decimal(0)}
    assert sum(balances.values()) == 0


def test_minimize_transfers():
    transfers = minimize_transfers([(1, Decimal(60)), (2, Decimal(-30)), (3, Decimal(-30))])
    assert transfers == [(2, 1, Decimal(30)), (3, 1, Decimal(30))]
    assert minimize_transfers([(1, Decimal(0))]) == []


def test_minimize_transfers_largest_amounts_first():
    balances = {1: Decimal(50), 2: Decimal(10), 3: Decimal(-45), 4: Decimal(-15)}
    transfers = minimize_transfers(balances.items())
    assert transfers == [(3, 1, Decimal(45)), (4, 2, Decimal(10)), (4, 1, Decimal(5))]
    settled = dict(balances)
    for debtor, creditor, amount in transfers:
        settled[debtor] += amount
        settled[creditor] -= amount
    assert all(amount == 0 for amount in settled.values())


def post_expense(client, headers, trip_id, **fields):
    return client.post(f"{API}/trips/{trip_id}/expenses", json=fields, headers=headers)


def test_create_expense_defaults_to_payer_share(client, trip_with_members, users):
    (u1, h1), _, _ = users
    response = post_expense(client, h1, trip_with_members["id"], title="Taxi", amount=18.5, currency="eur")
    assert response.status_code == 201
    expense = response.json()["data"]["expense"]
    assert expense["paid_by"]["id"] == u1["id"]
    assert expense["currency"] == "EUR"
    assert expense["category"] == "OTHER"
    assert expense["date"]
    assert len(expense["participants"]) == 1
    assert Decimal(expense["participants"][0]["share"]) == Decimal("18.5")


def test_create_expense_validation(client, trip_with_members, users):
    (_, h1), _, _ = users
    trip_id = trip_with_members["id"]
    assert post_expense(client, h1, trip_id, title="Negative", amount=-1).status_code == 400
    assert post_expense(client, h1, trip_id, amount=10).status_code == 400
    assert post_expense(client, h1, trip_id, title="Ghost payer", amount=10, paid_by_id=9999).status_code == 400
    assert post_expense(client, h1, 9999, title="Lost", amount=10).status_code == 404


def test_create_expense_requires_membership(client, users):
    (_, h1), (_, h2), _ = users
    trip = create_trip(client, h1)
    assert post_expense(client, h2, trip["id"], title="Sneaky", amount=10).status_code == 403


def test_list_expenses_newest_first_with_total(client, trip_with_members, users):
    (_, h1), (_, h2), _ = users
    trip_id = trip_with_members["id"]
    post_expense(client, h1, trip_id, title="Old", amount=10, date="2026-05-01")
    post_expense(client, h2, trip_id, title="New", amount=25.25, date="2026-05-03")
    post_expense(client, h1, trip_id, title="Middle", amount=4.75, date="2026-05-02")

    data = client.get(f"{API}/trips/{trip_id}/expenses", headers=h1).json()["data"]
    assert data["count"] == 3
    assert [e["title"] for e in data["expenses"]] == ["New", "Middle", "Old"]
    assert Decimal(data["total"]) == Decimal("40")


def test_trip_balances_endpoint(client, trip_with_members, users):
    (u1, h1), (u2, h2), (u3, h3) = users
    trip_id = trip_with_members["id"]
    post_expense(
        client, h1, trip_id, title="Boat tour", amount=90,
        participants=[
            {"user_id": u1["id"], "share": 30},
            {"user_id": u2["id"], "share": 30},
            {"user_id": u3["id"], "share": 30},
        ]
    )

    data = client.get(f"{API}/trips/{trip_id}/balances", headers=h3).json()["data"]
    balances = {b["user"]["id"]: Decimal(b["balance"]) for b in data["balances"]}
    assert balances == {u1["id"]: Decimal(60), u2["id"]: Decimal(-30), u3["id"]: Decimal(-30)}

    transfers = {(t["from_user"]["id"], t["to_user"]["id"]): Decimal(t["amount"]) for t in data["transfers"]}
    assert transfers == {(u2["id"], u1["id"]): Decimal(30), (u3["id"], u1["id"]): Decimal(30)}


def test_trip_balances_without_expenses_are_zero(client, trip_with_members, users):
    (_, h1), _, _ = users
    data = client.get(f"{API}/trips/{trip_with_members['id']}/balances", headers=h1).json()["data"]
    assert len(data["balances"]) == 3
    assert all(Decimal(b["balance"]) == 0 for b in data["balances"])
    assert data["transfers"] == []


def test_update_expense_replaces_participants(client, trip_with_members, users):
    (u1, h1), (u2, h2), _ = users
    trip_id = trip_with_members["id"]
    expense = post_expense(client, h1, trip_id, title="Groceries", amount=50).json()["data"]["expense"]

    response = client.put(
        f"{API}/expenses/{expense['id']}",
        json={"amount": 60, "category": "FOOD", "participants": [
            {"user_id": u1["id"], "share": 30},
            {"user_id": u2["id"], "share": 30, "is_paid": True},
        ]},
        headers=h2
    )
    assert response.status_code == 200
    updated = response.json()["data"]["expense"]
    assert Decimal(updated["amount"]) == Decimal(60)
    assert updated["category"] == "FOOD"
    assert [(p["user"]["id"], p["is_paid"]) for p in updated["participants"]] == [
        (u1["id"], False), (u2["id"], True)
    ]

    data = client.get(f"{API}/trips/{trip_id}/balances", headers=h1).json()["data"]
    balances = {b["user"]["id"]: Decimal(b["balance"]) for b in data["balances"]}
    assert balances[u1["id"]] == Decimal(30)
    assert balances[u2["id"]] == Decimal(-30)


def test_update_and_delete_expense_access(client, users):
    (_, h1), (_, h2), _ = users
    trip = create_trip(client, h1)
    expense = post_expense(client, h1, trip["id"], title="Hotel", amount=300).json()["data"]["expense"]

    assert client.put(f"{API}/expenses/{expense['id']}", json={"amount": 1}, headers=h2).status_code == 403
    assert client.delete(f"{API}/expenses/{expense['id']}", headers=h2).status_code == 403

    assert client.delete(f"{API}/expenses/{expense['id']}", headers=h1).status_code == 200
    assert client.delete(f"{API}/expenses/{expense['id']}", headers=h1).status_code == 404
    assert client.put(f"{API}/expenses/{expense['id']}", json={"amount": 1}, headers=h1).status_code == 404


def test_expense_participants_must_be_trip_members(client, users):
    (u1, h1), (u2, _), _ = users
    trip = create_trip(client, h1)

    for user_id in (9999, u2["id"]):
        response = post_expense(
            client, h1, trip["id"], title="Dinner", amount=20,
            participants=[{"user_id": u1["id"], "share": 10}, {"user_id": user_id, "share": 10}]
        )
        assert response.status_code == 400
        assert response.json()["message"] == f"User {user_id} is not a member of this trip"

    expense = post_expense(client, h1, trip["id"], title="Lunch", amount=12).json()["data"]["expense"]
    for user_id in (9999, u2["id"]):
        response = client.put(
            f"{API}/expenses/{expense['id']}",
            json={"participants": [{"user_id": user_id, "share": 12}]},
            headers=h1
        )
        assert response.status_code == 400

    response = client.get(f"{API}/trips/{trip['id']}/expenses", headers=h1)
    assert response.status_code == 200
    data = response.json()["data"]
    assert [e["title"] for e in data["expenses"]] == ["Lunch"]
    assert [p["user"]["id"] for p in data["expenses"][0]["participants"]] == [u1["id"]]

    balances = client.get(f"{API}/trips/{trip['id']}/balances", headers=h1).json()["data"]["balances"]
    assert [b["user"]["id"] for b in balances] == [u1["id"]]


def test_update_expense_clears_optional_fields(client, trip_with_members, users):
    (_, h1), _, _ = users
    expense = post_expense(
        client, h1, trip_with_members["id"], title="Museum", amount=16,
        description="Tickets for two", receipt="receipts/museum.jpg"
    ).json()["data"]["expense"]

    response = client.put(
        f"{API}/expenses/{expense['id']}",
        json={"description": None, "receipt": None, "title": None},
        headers=h1
    )
    assert response.status_code == 200
    updated = response.json()["data"]["expense"]
    assert updated["description"] is None
    assert updated["receipt"] is None
    assert updated["title"] == "Museum"
