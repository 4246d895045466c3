"""
Tests for itinerary activity endpoints.
"""
from conftest import API, create_trip


def post_activity(client, headers, trip_id, **fields):
    return client.post(f"{API}/trips/{trip_id}/activities", json=fields, headers=headers)


def test_create_activity_defaults(client, trip_with_members, users):
    (u1, h1), _, _ = users
    response = post_activity(
        client, h1, trip_with_members["id"],
        title="Oceanarium", start_time="2026-05-02T14:00:00",
        coordinates={"latitude": 38.7635, "longitude": -9.0937}
    )
    assert response.status_code == 201
    activity = response.json()["data"]["activity"]
    assert activity["category"] == "OTHER"
    assert activity["priority"] == "MEDIUM"
    assert activity["status"] == "PLANNED"
    assert activity["sort_order"] == 0
    assert activity["created_by"]["id"] == u1["id"]
    assert activity["coordinates"] == {"latitude": 38.7635, "longitude": -9.0937}


def test_create_activity_requires_membership(client, users):
    (_, h1), (_, h2), _ = users
    trip = create_trip(client, h1)

    response = post_activity(client, h2, trip["id"], title="Sneaky", start_time="2026-05-02T14:00:00")
    assert response.status_code == 403
    assert post_activity(client, h1, 9999, title="Lost", start_time="2026-05-02T14:00:00").status_code == 404


def test_create_activity_validation(client, trip_with_members, users):
    (_, h1), _, _ = users
    trip_id = trip_with_members["id"]
    assert post_activity(client, h1, trip_id, title="No start").status_code == 400
    response = post_activity(
        client, h1, trip_id, title="Backwards",
        start_time="2026-05-02T14:00:00", end_time="2026-05-02T13:00:00"
    )
    assert response.status_code == 400
    assert post_activity(
        client, h1, trip_id, title="Bad", start_time="2026-05-02T14:00:00", priority="URGENT"
    ).status_code == 400


def test_list_activities_ordered_by_sort_order_then_start(client, trip_with_members, users):
    (_, h1), (_, h2), _ = users
    trip_id = trip_with_members["id"]
    post_activity(client, h1, trip_id, title="Late", start_time="2026-05-02T18:00:00")
    post_activity(client, h1, trip_id, title="Pinned", start_time="2026-05-03T09:00:00", sort_order=-1)
    post_activity(client, h2, trip_id, title="Early", start_time="2026-05-02T08:00:00")
    post_activity(client, h1, trip_id, title="Last", start_time="2026-05-01T08:00:00", sort_order=5)

    data = client.get(f"{API}/trips/{trip_id}/activities", headers=h2).json()["data"]
    assert data["count"] == 4
    assert [a["title"] for a in data["activities"]] == ["Pinned", "Early", "Late", "Last"]


def test_update_activity(client, trip_with_members, users):
    (_, h1), (_, h2), _ = users
    activity = post_activity(
        client, h1, trip_with_members["id"], title="Museum", start_time="2026-05-02T10:00:00"
    ).json()["data"]["activity"]

    response = client.put(
        f"{API}/activities/{activity['id']}",
        json={"status": "CONFIRMED", "priority": "HIGH", "cost": 12.5},
        headers=h2
    )
    assert response.status_code == 200
    updated = response.json()["data"]["activity"]
    assert updated["status"] == "CONFIRMED"
    assert updated["priority"] == "HIGH"
    assert updated["title"] == "Museum"

    response = client.put(
        f"{API}/activities/{activity['id']}", json={"end_time": "2026-05-02T09:00:00"}, headers=h1
    )
    assert response.status_code == 400


def test_update_and_delete_activity_require_trip_membership(client, users):
    (_, h1), (_, h2), _ = users
    trip = create_trip(client, h1)
    activity = post_activity(
        client, h1, trip["id"], title="Private", start_time="2026-05-02T10:00:00"
    ).json()["data"]["activity"]

    assert client.put(f"{API}/activities/{activity['id']}", json={"title": "Mine"}, headers=h2).status_code == 403
    assert client.delete(f"{API}/activities/{activity['id']}", headers=h2).status_code == 403

    activities = client.get(f"{API}/trips/{trip['id']}/activities", headers=h1).json()["data"]["activities"]
    assert activities[0]["title"] == "Private"


def test_delete_activity(client, trip_with_members, users):
    (_, h1), _, _ = users
    activity = post_activity(
        client, h1, trip_with_members["id"], title="Fado night", start_time="2026-05-02T21:00:00"
    ).json()["data"]["activity"]

    response = client.delete(f"{API}/activities/{activity['id']}", headers=h1)
    assert response.status_code == 200
    assert response.json()["message"] == "Activity deleted successfully"

    assert client.delete(f"{API}/activities/{activity['id']}", headers=h1).status_code == 404
    assert client.put(f"{API}/activities/{activity['id']}", json={"title": "x"}, headers=h1).status_code == 404
