# tests/api/test_reservations_api.py

from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.models.reservation import CinemaReservation
from app.models.user import Role

API = "/api/v1"
DAY = "2026-01-17"


def _book(client: TestClient, time_slots, people_num=3, date=DAY):
    return client.post(
        f"{API}/reservations/",
        json={"time_slots": time_slots, "people_num": people_num, "date": date},
    )


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


def test_requests_without_token_are_rejected(client):
    response = client.get(f"{API}/reservations/free-slots", params={"date": DAY})

    assert response.status_code == 401
    assert response.json()["status"] == "error"


def test_bearer_token_resolves_user(client, make_user):
    user = make_user()
    token = create_access_token(str(user.id))

    response = client.get(
        f"{API}/reservations/free-slots",
        params={"date": DAY},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 200


# ---------------------------------------------------------------------------
# POST /reservations
# ---------------------------------------------------------------------------


def test_create_reservation(client, act_as, make_user, db):
    user = make_user()
    act_as(user)

    response = _book(client, [1])

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["data"]["is_approved"] is False
    assert body["data"]["reservations_left"] == 5
    assert db.query(CinemaReservation).count() == 1


def test_second_booking_of_same_slot_conflicts(client, act_as, make_user):
    act_as(make_user())
    assert _book(client, [1], people_num=3).status_code == 201

    act_as(make_user())
    response = _book(client, [1], people_num=2)

    assert response.status_code == 409
    assert response.json() == {
        "status": "error",
        "error_message": "cinema is already booked for this time",
    }


def test_non_adjacent_slots_are_rejected(client, act_as, make_user):
    act_as(make_user())

    response = _book(client, [2, 4])

    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_adjacent_slots_are_accepted(client, act_as, make_user):
    act_as(make_user())

    assert _book(client, [2, 3]).status_code == 201


def test_slot_count_outside_one_or_two_is_invalid_input(client, act_as, make_user):
    act_as(make_user())

    for time_slots in ([], [1, 2, 3]):
        response = _book(client, time_slots)
        assert response.status_code == 400
        assert response.json() == {
            "status": "error",
            "error_message": "one or two time slots must be requested",
        }


def test_party_size_boundary(client, act_as, make_user):
    act_as(make_user())

    assert _book(client, [1], people_num=12).status_code == 201
    response = _book(client, [2], people_num=13)
    assert response.status_code == 400
    assert "12" in response.json()["error_message"]


def test_malformed_body_is_unprocessable(client, act_as, make_user):
    act_as(make_user())

    response = client.post(f"{API}/reservations/", json={"time_slots": [1], "date": "17.01.2026"})

    assert response.status_code == 422
    assert response.json()["status"] == "error"


# ---------------------------------------------------------------------------
# GET /reservations
# ---------------------------------------------------------------------------


def test_list_reservations_for_resident_and_admin(client, act_as, make_user):
    alice, bob, admin = make_user(), make_user(), make_user(role=Role.ADMIN)
    act_as(alice)
    _book(client, [1])
    act_as(bob)
    _book(client, [2])

    act_as(alice)
    own = client.get(f"{API}/reservations/", params={"date": DAY}).json()["data"]
    assert [r["user_id"] for r in own] == [str(alice.id)]
    assert own[0]["positions"] == [1]

    act_as(admin)
    everything = client.get(
        f"{API}/reservations/", params={"from": "2026-01-16", "to": "2026-01-18"}
    ).json()["data"]
    assert len(everything) == 2


def test_list_reservations_requires_a_range(client, act_as, make_user):
    act_as(make_user())

    response = client.get(f"{API}/reservations/", params={"from": DAY})

    assert response.status_code == 400


# ---------------------------------------------------------------------------
# PATCH /reservations/approve
# ---------------------------------------------------------------------------


def test_admin_approves_reservation_twice(client, act_as, make_user, db):
    act_as(make_user())
    _book(client, [1])
    reservation = db.query(CinemaReservation).one()

    act_as(make_user(role=Role.ADMIN))
    for _ in range(2):
        response = client.patch(
            f"{API}/reservations/approve", params={"reservation_id": str(reservation.id)}
        )
        assert response.status_code == 204

    db.refresh(reservation)
    assert reservation.is_approved is True


def test_resident_cannot_approve(client, act_as, make_user, db):
    act_as(make_user())
    _book(client, [1])
    reservation = db.query(CinemaReservation).one()

    response = client.patch(
        f"{API}/reservations/approve", params={"reservation_id": str(reservation.id)}
    )

    assert response.status_code == 403


def test_approve_unknown_reservation(client, act_as, make_user):
    act_as(make_user(role=Role.GOD))

    response = client.patch(
        f"{API}/reservations/approve",
        params={"reservation_id": "6f1c2f0e-8a1b-4c1e-9d2a-3b4c5d6e7f80"},
    )

    assert response.status_code == 404
    assert response.json()["error_message"] == "reservation not found"


# ---------------------------------------------------------------------------
# Free slots / free intervals
# ---------------------------------------------------------------------------


def test_free_slots_and_pairs(client, act_as, make_user):
    act_as(make_user())
    _book(client, [2])

    response = client.get(f"{API}/reservations/free-slots", params={"date": DAY})

    assert response.status_code == 200
    data = response.json()["data"]
    assert [s["position"] for s in data["free_slots"]] == [1, 3, 4]
    assert data["free_pairs"] == [[3, 4]]


def test_free_intervals(client, act_as, make_user):
    act_as(make_user())
    _book(client, [3])

    response = client.get(
        f"{API}/reservations/free-intervals",
        params={"from": "2026-01-17T12:00:00Z", "to": "2026-01-17T21:00:00Z"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["busy"]) == 1
    assert len(data["free"]) == 2


def test_free_intervals_window_too_long(client, act_as, make_user):
    act_as(make_user())

    response = client.get(
        f"{API}/reservations/free-intervals",
        params={"from": "2026-01-01T00:00:00Z", "to": "2026-03-01T00:00:00Z"},
    )

    assert response.status_code == 400
