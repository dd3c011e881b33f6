from fastapi.testclient import TestClient

from school_portal.models import ApprovalStatus, Teacher


def test_approve_and_reject_teacher(client: TestClient, admin, make_teacher, session):
    teacher = make_teacher("Teacher One", ["Math"], approve=False)
    url = f"/api/admin/teachers/{teacher['id']}/status"

    response = client.post(url, json={"status": "approved"}, headers=admin["headers"])
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Teacher approved successfully"
    assert data["teacher"]["status"] == "approved"

    session.expire_all()
    record = session.get(Teacher, teacher["id"])
    assert record.approved_by == admin["user"]["id"]
    assert record.approved_at is not None

    response = client.post(url, json={"status": "rejected"}, headers=admin["headers"])
    assert response.status_code == 200
    assert response.json()["message"] == "Teacher rejected successfully"

    session.expire_all()
    record = session.get(Teacher, teacher["id"])
    assert record.status == ApprovalStatus.REJECTED
    assert record.approved_by is None
    assert record.approved_at is None


def test_status_update_errors(client: TestClient, admin, make_teacher):
    teacher = make_teacher("Teacher One", ["Math"], approve=False)

    response = client.post(
        f"/api/admin/teachers/{teacher['id']}/status", json={"status": "pending"}, headers=admin["headers"]
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid status"

    response = client.post("/api/admin/teachers/123/status", json={"status": "approved"}, headers=admin["headers"])
    assert response.status_code == 400

    response = client.post(
        f"/api/admin/teachers/{'e' * 24}/status", json={"status": "approved"}, headers=admin["headers"]
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Teacher not found"


def test_list_users(client: TestClient, admin, make_teacher, make_parent, add_child):
    teacher = make_teacher("Teacher One", ["Math", "Art"], grade="Grade 4")
    parent = make_parent()
    make_parent("Lonely Parent")
    add_child(parent, name="First Child")
    add_child(parent, name="Second Child")

    response = client.get("/api/admin/users", headers=admin["headers"])
    assert response.status_code == 200
    data = response.json()

    assert data["teachers"] == [
        {
            "id": teacher["id"],
            "fullName": "Teacher One",
            "email": teacher["email"],
            "phone": "555-0200",
            "subjects": ["Math", "Art"],
            "grade": "Grade 4",
            "status": "approved",
        }
    ]
    counts = {item["fullName"]: item["childCount"] for item in data["parents"]}
    assert counts == {"Pat Parent": 2, "Lonely Parent": 0}

    students = data["students"]
    assert [item["fullName"] for item in students] == ["First Child", "Second Child"]
    assert students[0]["parentName"] == "Pat Parent"
    assert students[0]["parentEmail"] == parent["email"]
    assert students[0]["classTeacher"] is None
