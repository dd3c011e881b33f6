from fastapi.testclient import TestClient

from school_portal.models import SubjectTeacherSlot


def test_add_child_creates_empty_subject_slots(client: TestClient, make_parent, session):
    parent = make_parent()
    response = client.post(
        "/api/parent/children",
        json={"fullName": "Sam Student", "age": 7, "grade": "Grade 2", "subjects": ["Math", "Art"]},
        headers=parent["headers"],
    )
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Child added successfully"
    assert data["child"]["subjects"] == ["Math", "Art"]

    slots = session.query(SubjectTeacherSlot).order_by(SubjectTeacherSlot.position).all()
    assert [(slot.subject, slot.teacher_id) for slot in slots] == [("Math", None), ("Art", None)]


def test_age_bounds(client: TestClient, make_parent):
    parent = make_parent()
    body = {"fullName": "Sam Student", "grade": "Grade 2", "subjects": ["Math"]}

    response = client.post("/api/parent/children", json={**body, "age": 3}, headers=parent["headers"])
    assert response.status_code == 400
    assert response.json()["message"] == "Age must be at least 4"

    response = client.post("/api/parent/children", json={**body, "age": 13}, headers=parent["headers"])
    assert response.status_code == 400
    assert response.json()["message"] == "Age must not exceed 12"


def test_list_children_is_scoped_and_populated(client: TestClient, admin, make_parent, make_teacher, add_child):
    teacher = make_teacher("Teacher One", ["Math"])
    parent = make_parent()
    other = make_parent("Other Parent")
    child = add_child(parent, subjects=["Math", "Art"])
    add_child(other, name="Someone Else")

    children = client.get("/api/parent/children", headers=parent["headers"]).json()["children"]
    assert len(children) == 1
    assert children[0]["classTeacher"] is None
    assert children[0]["subjectTeachers"] == [
        {"subject": "Math", "teacher": None},
        {"subject": "Art", "teacher": None},
    ]

    client.post(
        "/api/admin/assign-teachers",
        json={
            "studentId": child["id"],
            "classTeacherId": teacher["id"],
            "subjectTeachers": [{"subject": "Math", "teacherId": teacher["id"]}],
        },
        headers=admin["headers"],
    )
    children = client.get("/api/parent/children", headers=parent["headers"]).json()["children"]
    expected_teacher = {"id": teacher["id"], "fullName": "Teacher One", "email": teacher["email"]}
    assert children[0]["classTeacher"] == expected_teacher
    assert children[0]["subjectTeachers"] == [{"subject": "Math", "teacher": expected_teacher}]


def test_teacher_cannot_list_children(client: TestClient, make_teacher):
    teacher = make_teacher("Teacher One", ["Math"])
    response = client.get("/api/parent/children", headers=teacher["headers"])
    assert response.status_code == 403


def test_blank_fields_are_named(client: TestClient, make_parent):
    parent = make_parent()
    body = {"fullName": "Sam Student", "age": 7, "grade": "  ", "subjects": ["Math"]}

    response = client.post("/api/parent/children", json=body, headers=parent["headers"])
    assert response.status_code == 400
    assert response.json()["message"] == "Grade is required"

    response = client.post(
        "/api/parent/children", json={**body, "fullName": " ", "grade": "Grade 2"}, headers=parent["headers"]
    )
    assert response.json()["message"] == "Full name is required"

    response = client.post("/api/parent/children", json={**body, "age": 3}, headers=parent["headers"])
    assert response.json()["message"] == "Age must be at least 4. Grade is required"
