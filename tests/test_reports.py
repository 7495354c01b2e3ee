from conftest import API


def _get(client, campus, path, key, **params):
    response = client.get(f"{API}{path}", params=params, headers=campus["admin"])
    assert response.status_code == 200, response.text
    return response.json()[key]


def test_event_popularity_counts_registered_only(client, helper, campus):
    quiet = helper.event(campus["admin"], title="Quiet")["event_id"]
    for _ in range(3):
        _, headers = helper.student(campus["college_id"])
        helper.register(headers, campus["event_id"])

    rows = _get(client, campus, "/reports/event-popularity", "report")
    assert [(r["id"], r["registrations"]) for r in rows] == [(campus["event_id"], 2), (quiet, 0)]


def test_participation_lists_everyone_and_filters(client, helper, campus):
    talk = helper.event(campus["admin"], title="Talk", category="talk")
    busy_id, busy = helper.student(campus["college_id"])
    idle_id, _ = helper.student(campus["college_id"])
    helper.qr_checkin(busy, campus["qr_data"])
    helper.qr_checkin(busy, talk["qr_data"])

    rows = {r["id"]: r["events_attended"] for r in _get(client, campus, "/reports/student-participation", "report")}
    assert rows == {busy_id: 2, idle_id: 0}

    talks = {r["id"]: r["events_attended"] for r in _get(client, campus, "/reports/student-participation", "report", event_type="talk")}
    assert talks == {busy_id: 1, idle_id: 0}

    future = _get(client, campus, "/reports/student-participation", "report", start_date="2999-01-01T00:00:00")
    assert all(r["events_attended"] == 0 for r in future)


def test_leaderboard_and_top_students(client, helper, campus):
    second = helper.event(campus["admin"], title="Second")
    ids = []
    for attended in (1, 2, 0, 1):
        student_id, headers = helper.student(campus["college_id"])
        ids.append(student_id)
        for qr in (campus["qr_data"], second["qr_data"])[:attended]:
            helper.qr_checkin(headers, qr)

    board = _get(client, campus, "/reports/leaderboard", "leaderboard", limit=3)
    assert [r["id"] for r in board] == [ids[1], ids[0], ids[3]]

    top = _get(client, campus, "/reports/top-students", "top_students")
    assert [r["id"] for r in top] == [ids[1], ids[0], ids[3]]
    assert ids[2] not in [r["id"] for r in top]

    response = client.get(f"{API}/reports/leaderboard", params={"limit": 0}, headers=campus["admin"])
    assert response.status_code == 400


def test_attendance_percentage_with_nulls_last(client, helper, campus):
    empty = helper.event(campus["admin"], title="Nobody")["event_id"]
    present_id, present = helper.student(campus["college_id"])
    _, absent = helper.student(campus["college_id"])
    helper.register(present, campus["event_id"])
    helper.register(absent, campus["event_id"])
    helper.manual_attendance(campus["admin"], campus["event_id"], present_id)

    rows = _get(client, campus, "/reports/attendance-percentage", "report")
    assert rows[0]["id"] == campus["event_id"]
    assert rows[0]["attendance_percentage"] == 50.0
    assert rows[-1]["id"] == empty
    assert rows[-1]["registered_count"] == 0
    assert rows[-1]["attendance_percentage"] is None


def test_average_feedback(client, helper, campus):
    silent = helper.event(campus["admin"], title="Silent")["event_id"]
    _, headers = helper.student(campus["college_id"])
    helper.qr_checkin(headers, campus["qr_data"])
    client.post(f"{API}/feedback", json={"event_id": campus["event_id"], "rating": 5}, headers=headers)

    rows = _get(client, campus, "/reports/average-feedback", "report")
    assert rows[0] == {"id": campus["event_id"], "title": "Tech Talk", "average_rating": 5.0, "feedback_count": 1}
    assert rows[-1]["id"] == silent
    assert rows[-1]["average_rating"] is None


def test_reports_are_tenant_scoped(client, helper, campus):
    other = helper.college()
    _, other_admin = helper.admin(other)
    helper.event(other_admin, title="Theirs")
    helper.student(other)

    titles = [r["title"] for r in _get(client, campus, "/reports/event-popularity", "report")]
    assert titles == ["Tech Talk"]
    assert _get(client, campus, "/reports/leaderboard", "leaderboard") == []


def test_college_stats_and_students(client, helper, campus):
    _, headers = helper.student(campus["college_id"], first_name="Zoe", department="Physics", year_of_study=3)
    helper.student(campus["college_id"], first_name="Yuri", department="History", year_of_study=1)
    helper.register(headers, campus["event_id"])

    stats = _get(client, campus, "/admin/college-stats", "stats")
    assert stats["total_events"] == 1
    assert stats["active_events"] == 1
    assert stats["total_students"] == 2
    assert stats["total_registrations"] == 1
    assert stats["total_attendance"] == 0

    assert [s["first_name"] for s in _get(client, campus, "/admin/students", "students")] == ["Yuri", "Zoe"]
    assert [s["first_name"] for s in _get(client, campus, "/admin/students", "students", search="zo")] == ["Zoe"]
    assert [s["first_name"] for s in _get(client, campus, "/admin/students", "students", department="History")] == ["Yuri"]
    assert [s["first_name"] for s in _get(client, campus, "/admin/students", "students", year_of_study=3)] == ["Zoe"]


def test_bulk_certificates(client, helper, campus):
    url = f"{API}/admin/bulk-certificates"
    body = {"event_id": campus["event_id"]}
    assert client.post(url, json=body, headers=campus["admin"]).status_code == 400

    for _ in range(2):
        _, headers = helper.student(campus["college_id"])
        helper.qr_checkin(headers, campus["qr_data"])

    issued = client.post(url, json=body, headers=campus["admin"]).json()
    assert issued["generated"] == 2
    assert issued["failed"] == 0
    assert len({d["certificate_id"] for d in issued["details"]["generated"]}) == 2

    again = client.post(url, json=body, headers=campus["admin"])
    assert again.status_code == 400
    assert _get(client, campus, "/admin/college-stats", "stats")["total_certificates"] == 2
