from unievent.models.student import Student

from conftest import API


def test_college_bootstrap_is_public(client):
    created = client.post(f"{API}/colleges", json={"name": "North Campus"})
    assert created.status_code == 201
    assert created.json()["name"] == "North Campus"

    listed = client.get(f"{API}/colleges")
    assert [c["name"] for c in listed.json()] == ["North Campus"]

    duplicate = client.post(f"{API}/colleges", json={"name": "North Campus"})
    assert duplicate.status_code == 409


def test_register_and_login_student(client, helper):
    college_id = helper.college()
    response = client.post(
        f"{API}/auth/register/student",
        json={
            "email": "Ana.Lima@Example.com",
            "password": "secret123",
            "first_name": "Ana",
            "last_name": "Lima",
            "student_id": "CS-001",
            "college_id": college_id,
            "department": "CS",
            "year_of_study": 2,
        },
    )
    assert response.status_code == 201
    student_id = response.json()["studentId"]

    # emails are stored lower-cased
    login = client.post(f"{API}/auth/login", json={"email": "ana.lima@example.com", "password": "secret123"})
    assert login.status_code == 200
    body = login.json()
    assert body["token"]
    assert body["user"] == {"id": student_id, "email": "ana.lima@example.com", "role": "student"}


def test_admin_login_reports_admin_role(client, helper):
    college_id = helper.college()
    admin_id, _ = helper.admin(college_id, email="boss@example.com")
    login = client.post(f"{API}/auth/login", json={"email": "boss@example.com", "password": "secret123"})
    assert login.json()["user"] == {"id": admin_id, "email": "boss@example.com", "role": "admin"}


def test_register_requires_existing_college(client):
    response = client.post(
        f"{API}/auth/register/admin",
        json={"email": "x@example.com", "password": "secret123", "first_name": "X", "last_name": "Y", "college_id": 999},
    )
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_email_is_unique_across_account_kinds(client, helper):
    college_id = helper.college()
    helper.admin(college_id, email="shared@example.com")
    response = client.post(
        f"{API}/auth/register/student",
        json={
            "email": "shared@example.com",
            "password": "secret123",
            "first_name": "S",
            "last_name": "T",
            "student_id": "R1",
            "college_id": college_id,
        },
    )
    assert response.status_code == 409


def test_wrong_password_is_unauthenticated(client, helper):
    college_id = helper.college()
    helper.student(college_id, email="who@example.com")
    response = client.post(f"{API}/auth/login", json={"email": "who@example.com", "password": "nope-nope"})
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHENTICATED"


def test_inactive_account_cannot_login(client, helper, db_session):
    college_id = helper.college()
    student_id, _ = helper.student(college_id, email="gone@example.com")
    db_session.get(Student, student_id).is_active = False
    db_session.commit()

    response = client.post(f"{API}/auth/login", json={"email": "gone@example.com", "password": "secret123"})
    assert response.status_code == 403


def test_invalid_body_is_a_validation_error(client):
    response = client.post(f"{API}/auth/login", json={"email": "not-an-email"})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
