from conftest import API


def _roster(client, campus):
    response = client.get(f"{API}/registrations/event/{campus['event_id']}", headers=campus["admin"])
    assert response.status_code == 200
    return response.json()["registrations"]


def test_capacity_then_dense_waitlist(client, helper, campus):
    results = []
    for _ in range(4):
        _, headers = helper.student(campus["college_id"])
        response = helper.register(headers, campus["event_id"])
        assert response.status_code == 200
        results.append((response.json()["status"], response.json()["waitlist_position"]))

    assert results == [
        ("registered", None),
        ("registered", None),
        ("waitlisted", 1),
        ("waitlisted", 2),
    ]

    roster = _roster(client, campus)
    assert [r["status"] for r in roster] == ["registered", "registered", "waitlisted", "waitlisted"]
    assert [r["waitlist_position"] for r in roster if r["status"] == "waitlisted"] == [1, 2]


def test_duplicate_registration_conflicts(helper, campus):
    _, headers = helper.student(campus["college_id"])
    assert helper.register(headers, campus["event_id"]).status_code == 200

    again = helper.register(headers, campus["event_id"])
    assert again.status_code == 409
    assert again.json()["message"] == "Already registered for this event"


def test_cancel_promotes_head_and_closes_gaps(client, helper, campus):
    students = []
    for _ in range(5):
        _, headers = helper.student(campus["college_id"])
        reg = helper.register(headers, campus["event_id"]).json()
        students.append((headers, reg["registration_id"]))
    # A, B registered; C=1, D=2, E=3 waitlisted

    d_headers, d_reg = students[3]
    cancelled = client.post(f"{API}/registrations/{d_reg}/cancel", headers=d_headers)
    assert cancelled.status_code == 200
    assert cancelled.json()["promoted_registration_id"] is None

    a_headers, a_reg = students[0]
    cancelled = client.post(f"{API}/registrations/{a_reg}/cancel", headers=a_headers)
    assert cancelled.json()["promoted_registration_id"] == students[2][1]

    roster = {r["id"]: r for r in _roster(client, campus)}
    assert roster[students[2][1]]["status"] == "registered"
    assert roster[students[4][1]]["status"] == "waitlisted"
    assert roster[students[4][1]]["waitlist_position"] == 1
    assert roster[a_reg]["status"] == "cancelled"
    assert roster[a_reg]["waitlist_position"] is None


def test_cancel_twice_and_foreign_cancel(client, helper, campus):
    _, owner = helper.student(campus["college_id"])
    _, intruder = helper.student(campus["college_id"])
    reg_id = helper.register(owner, campus["event_id"]).json()["registration_id"]

    assert client.post(f"{API}/registrations/{reg_id}/cancel", headers=intruder).status_code == 404
    assert client.post(f"{API}/registrations/{reg_id}/cancel", headers=owner).status_code == 200
    assert client.post(f"{API}/registrations/{reg_id}/cancel", headers=owner).status_code == 409


def test_reregistering_after_cancel_joins_the_back(client, helper, campus):
    regs = []
    for _ in range(3):
        _, headers = helper.student(campus["college_id"])
        regs.append((headers, helper.register(headers, campus["event_id"]).json()["registration_id"]))

    headers, reg_id = regs[2]  # waitlisted #1
    client.post(f"{API}/registrations/{reg_id}/cancel", headers=headers)

    again = helper.register(headers, campus["event_id"])
    assert again.status_code == 200
    assert again.json()["registration_id"] == reg_id
    assert again.json()["status"] == "waitlisted"
    assert again.json()["waitlist_position"] == 1


def test_event_of_another_college_is_not_found(helper, campus):
    other = helper.college()
    _, headers = helper.student(other)
    response = helper.register(headers, campus["event_id"])
    assert response.status_code == 404


def test_terminal_event_rejects_registrations(client, helper, campus):
    client.put(f"{API}/events/{campus['event_id']}", json={"status": "cancelled"}, headers=campus["admin"])
    _, headers = helper.student(campus["college_id"])
    response = helper.register(headers, campus["event_id"])
    assert response.status_code == 400


def test_my_registrations(client, helper, campus):
    _, headers = helper.student(campus["college_id"])
    helper.register(headers, campus["event_id"])

    mine = client.get(f"{API}/registrations/my", headers=headers).json()["registrations"]
    assert len(mine) == 1
    assert mine[0]["event_id"] == campus["event_id"]
    assert mine[0]["title"] == "Tech Talk"
    assert mine[0]["status"] == "registered"


def test_capacity_raise_admits_waitlist_before_newcomers(client, helper, campus):
    regs = []
    for _ in range(3):
        _, headers = helper.student(campus["college_id"])
        regs.append(helper.register(headers, campus["event_id"]).json()["registration_id"])
    # A, B registered; C waitlisted #1

    raised = client.put(f"{API}/events/{campus['event_id']}", json={"capacity": 3}, headers=campus["admin"])
    assert raised.status_code == 200
    assert raised.json()["capacity"] == 3

    roster = {r["id"]: r for r in _roster(client, campus)}
    assert roster[regs[2]]["status"] == "registered"
    assert roster[regs[2]]["waitlist_position"] is None

    _, late = helper.student(campus["college_id"])
    response = helper.register(late, campus["event_id"])
    assert response.json()["status"] == "waitlisted"
    assert response.json()["waitlist_position"] == 1


def test_capacity_raise_renumbers_remaining_waitlist(client, helper, campus):
    regs = []
    for _ in range(5):
        _, headers = helper.student(campus["college_id"])
        regs.append(helper.register(headers, campus["event_id"]).json()["registration_id"])
    # A, B registered; C=1, D=2, E=3 waitlisted

    client.put(f"{API}/events/{campus['event_id']}", json={"max_participants": 4}, headers=campus["admin"])

    roster = {r["id"]: r for r in _roster(client, campus)}
    assert [roster[i]["status"] for i in regs] == ["registered"] * 4 + ["waitlisted"]
    assert roster[regs[4]]["waitlist_position"] == 1


def test_capacity_lowered_keeps_admitted_students(client, helper, campus):
    regs = []
    for _ in range(3):
        _, headers = helper.student(campus["college_id"])
        regs.append(helper.register(headers, campus["event_id"]).json()["registration_id"])

    client.put(f"{API}/events/{campus['event_id']}", json={"capacity": 1}, headers=campus["admin"])

    roster = {r["id"]: r for r in _roster(client, campus)}
    assert [roster[i]["status"] for i in regs] == ["registered", "registered", "waitlisted"]
    assert roster[regs[2]]["waitlist_position"] == 1
