# tests/api/test_admin_api.py

from app.models.user import Role

API = "/api/v1"
DAY = "2026-01-17"


def test_admin_routes_need_privileged_role(client, act_as, make_user):
    act_as(make_user(role=Role.USER))

    assert client.get(f"{API}/admin/slot-templates/").status_code == 403
    assert client.get(f"{API}/admin/reservations/").status_code == 403


def test_list_slot_templates(client, act_as, make_user):
    act_as(make_user(role=Role.ADMIN))

    response = client.get(f"{API}/admin/slot-templates/")

    assert response.status_code == 200
    templates = response.json()["data"]
    assert [t["position"] for t in templates] == [1, 2, 3, 4]
    assert templates[0]["start_time"] == "10:00:00"


def test_disable_daily_slot_hides_it_from_free_slots(client, act_as, make_user):
    act_as(make_user(role=Role.ADMIN))
    slots = client.get(f"{API}/admin/daily-slots/", params={"date": DAY}).json()["data"]
    assert len(slots) == 4
    fourth = next(s for s in slots if s["position"] == 4)

    response = client.patch(f"{API}/admin/daily-slots/{fourth['id']}", json={"is_enabled": False})
    assert response.status_code == 200
    assert response.json()["data"]["is_enabled"] is False

    free = client.get(f"{API}/reservations/free-slots", params={"date": DAY}).json()["data"]
    assert [s["position"] for s in free["free_slots"]] == [1, 2, 3]
    assert free["free_pairs"] == [[1, 2], [2, 3]]


def test_update_unknown_daily_slot(client, act_as, make_user):
    act_as(make_user(role=Role.ADMIN))

    response = client.patch(f"{API}/admin/daily-slots/4242", json={"is_enabled": False})

    assert response.status_code == 404


def test_admin_reservation_filters(client, act_as, make_user):
    resident = make_user()
    act_as(resident)
    client.post(f"{API}/reservations/", json={"time_slots": [1], "people_num": 2, "date": DAY})
    client.post(f"{API}/reservations/", json={"time_slots": [3, 4], "people_num": 8, "date": DAY})

    act_as(make_user(role=Role.GOD))

    everything = client.get(f"{API}/admin/reservations/").json()["data"]
    assert len(everything) == 2

    big = client.get(f"{API}/admin/reservations/", params={"people_num_from": 5}).json()["data"]
    assert [r["positions"] for r in big] == [[3, 4]]

    pending = client.get(f"{API}/admin/reservations/", params={"is_approved": "false"}).json()["data"]
    assert len(pending) == 2
    approved = client.get(f"{API}/admin/reservations/", params={"is_approved": "true"}).json()["data"]
    assert approved == []
