import json
from datetime import datetime, timedelta, timezone

from conftest import API


def test_create_returns_qr_payload(campus, helper):
    created = helper.event(campus["admin"], title="Hackathon")
    assert created["message"] == "Event created successfully"
    assert created["qr_code"].startswith("data:image/png;base64,")
    payload = json.loads(created["qr_data"])
    assert payload["event_id"] == created["event_id"]
    assert payload["college_id"] == campus["college_id"]
    assert payload["secret"]


def test_max_participants_is_accepted_for_capacity(client, helper, campus):
    created = helper.event(campus["admin"], capacity=None, max_participants=1)
    detail = client.get(f"{API}/events/{created['event_id']}", headers=campus["admin"]).json()["event"]
    assert detail["capacity"] == 1


def test_students_cannot_create_events(client, helper, campus):
    _, headers = helper.student(campus["college_id"])
    response = client.post(
        f"{API}/events",
        json={"title": "x", "event_date": datetime.now(timezone.utc).isoformat(), "venue": "y", "capacity": 1},
        headers=headers,
    )
    assert response.status_code == 403


def test_end_time_must_follow_start_time(client, campus):
    response = client.post(
        f"{API}/events",
        json={
            "title": "Backwards",
            "event_date": (datetime.now(timezone.utc) + timedelta(days=1)).isoformat(),
            "venue": "Lab",
            "capacity": 5,
            "start_time": "14:00:00",
            "end_time": "13:00:00",
        },
        headers=campus["admin"],
    )
    assert response.status_code == 400


def test_list_with_counts_and_pagination(client, helper, campus):
    for n in range(3):
        helper.event(campus["admin"], title=f"Extra {n}", category="talk")
    _, headers = helper.student(campus["college_id"])
    helper.register(headers, campus["event_id"])

    page = client.get(f"{API}/events", params={"limit": 2, "offset": 0}, headers=headers).json()
    assert len(page["events"]) == 2
    assert page["pagination"] == {"total": 4, "limit": 2, "offset": 0, "has_more": True}

    talks = client.get(f"{API}/events", params={"category": "talk"}, headers=headers).json()
    assert talks["pagination"]["total"] == 3

    first = client.get(f"{API}/events", params={"category": "workshop"}, headers=headers).json()["events"][0]
    assert first["registered_count"] == 1
    assert first["waitlist_count"] == 0
    assert first["created_by_name"].startswith("Admin")
    assert "qr_secret" not in first

    assert client.get(f"{API}/events", params={"limit": 101}, headers=headers).status_code == 400


def test_detail_shows_own_registration(client, helper, campus):
    _, headers = helper.student(campus["college_id"])
    detail = client.get(f"{API}/events/{campus['event_id']}", headers=headers).json()["event"]
    assert detail["user_registration"] is None

    helper.register(headers, campus["event_id"])
    detail = client.get(f"{API}/events/{campus['event_id']}", headers=headers).json()["event"]
    assert detail["user_registration"] == {"status": "registered", "waitlist_position": None}
    assert detail["feedback_count"] == 0
    assert detail["avg_rating"] is None


def test_lifecycle_transitions(client, helper, campus):
    event_id = helper.event(campus["admin"], status="draft")["event_id"]
    url = f"{API}/events/{event_id}"

    assert client.put(url, json={"status": "active"}, headers=campus["admin"]).status_code == 200
    back = client.put(url, json={"status": "draft"}, headers=campus["admin"])
    assert back.status_code == 400

    assert client.put(url, json={"status": "completed"}, headers=campus["admin"]).status_code == 200
    assert client.put(url, json={"status": "cancelled"}, headers=campus["admin"]).status_code == 400


def test_partial_update(client, campus):
    url = f"{API}/events/{campus['event_id']}"
    updated = client.put(url, json={"venue": "Auditorium", "max_participants": 10}, headers=campus["admin"])
    assert updated.status_code == 200
    assert updated.json()["venue"] == "Auditorium"
    assert updated.json()["capacity"] == 10
    assert updated.json()["title"] == "Tech Talk"

    assert client.put(url, json={}, headers=campus["admin"]).status_code == 400


def test_delete_cascades(client, helper, campus):
    student_id, headers = helper.student(campus["college_id"])
    helper.register(headers, campus["event_id"])
    helper.qr_checkin(headers, campus["qr_data"])

    url = f"{API}/events/{campus['event_id']}"
    assert client.delete(url, headers=campus["admin"]).status_code == 204
    assert client.get(url, headers=campus["admin"]).status_code == 404
    assert client.get(f"{API}/registrations/my", headers=headers).json() == {"registrations": []}


def test_other_college_cannot_touch_event(client, helper, campus):
    other = helper.college()
    _, other_admin = helper.admin(other)
    url = f"{API}/events/{campus['event_id']}"
    assert client.get(url, headers=other_admin).status_code == 404
    assert client.put(url, json={"venue": "Mine"}, headers=other_admin).status_code == 404
    assert client.delete(url, headers=other_admin).status_code == 404
    assert client.get(f"{url}/qr", headers=other_admin).status_code == 404


def test_qr_reissue_matches_creation(client, campus):
    response = client.get(f"{API}/events/{campus['event_id']}/qr", headers=campus["admin"])
    assert response.status_code == 200
    assert response.json()["qr_data"] == campus["qr_data"]
