from fastapi.testclient import TestClient


def _grade(client, teacher, student_id, subject="Math", score=88, title="Quiz 1", grade="Grade 2"):
    return client.post(
        "/api/grades",
        json={
            "testTitle": title,
            "subject": subject,
            "grade": grade,
            "score": score,
            "studentId": student_id,
            "comments": "  Good work  ",
        },
        headers=teacher["headers"],
    )


def test_parent_without_children_gets_empty_list(client: TestClient, make_parent):
    parent = make_parent()
    response = client.get("/api/grades", headers=parent["headers"])
    assert response.status_code == 200
    assert response.json()["grades"] == []


def test_teacher_creates_grade(client: TestClient, make_teacher, make_parent, add_child):
    teacher = make_teacher("Teacher One", ["Math"])
    child = add_child(make_parent())

    response = _grade(client, teacher, child["id"])
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Grade added successfully"
    assert data["grade"]["comments"] == "Good work"
    assert data["grade"]["student"] == {"id": child["id"], "fullName": child["fullName"], "grade": "Grade 2"}
    assert data["grade"]["teacher"] == {"id": teacher["id"], "fullName": "Teacher One"}


def test_grade_validation(client: TestClient, make_teacher, make_parent, add_child):
    teacher = make_teacher("Teacher One", ["Math"])
    child = add_child(make_parent())

    response = _grade(client, teacher, child["id"], score=-1)
    assert response.status_code == 400
    assert response.json()["message"] == "Score cannot be less than 0"

    response = _grade(client, teacher, child["id"], score=101)
    assert response.status_code == 400
    assert response.json()["message"] == "Score cannot exceed 100"

    response = _grade(client, teacher, "bogus")
    assert response.status_code == 400

    response = _grade(client, teacher, "d" * 24)
    assert response.status_code == 404
    assert response.json()["message"] == "Student not found"


def test_parent_cannot_create_grade(client: TestClient, make_parent, add_child):
    parent = make_parent()
    child = add_child(parent)
    response = _grade(client, parent, child["id"])
    assert response.status_code == 403


def test_grade_visibility_by_role(client: TestClient, admin, make_teacher, make_parent, add_child):
    math = make_teacher("Math Teacher", ["Math"])
    art = make_teacher("Art Teacher", ["Art"])
    parent_a = make_parent("Parent A")
    parent_b = make_parent("Parent B")
    child_a = add_child(parent_a, name="Child A")
    child_b = add_child(parent_b, name="Child B")

    _grade(client, math, child_a["id"], title="Math A")
    _grade(client, art, child_a["id"], subject="Art", title="Art A")
    _grade(client, math, child_b["id"], title="Math B")

    def titles(user):
        response = client.get("/api/grades", headers=user["headers"])
        assert response.status_code == 200
        return sorted(item["testTitle"] for item in response.json()["grades"])

    assert titles(math) == ["Math A", "Math B"]
    assert titles(art) == ["Art A"]
    assert titles(parent_a) == ["Art A", "Math A"]
    assert titles(parent_b) == ["Math B"]
    assert titles(admin) == ["Art A", "Math A", "Math B"]


def test_grades_newest_first(client: TestClient, make_teacher, make_parent, add_child):
    teacher = make_teacher("Teacher One", ["Math"])
    child = add_child(make_parent())
    _grade(client, teacher, child["id"], title="Older")
    _grade(client, teacher, child["id"], title="Newer")

    grades = client.get("/api/grades", headers=teacher["headers"]).json()["grades"]
    assert [item["testTitle"] for item in grades] == ["Newer", "Older"]


def test_grade_summary(client: TestClient, admin, make_teacher, make_parent, add_child):
    math = make_teacher("Math Teacher", ["Math"])
    art = make_teacher("Art Teacher", ["Art"])
    parent = make_parent()
    child_a = add_child(parent, name="Child A")
    child_b = add_child(parent, name="Child B")
    child_c = add_child(parent, name="Child C", grade="Grade 3")

    _grade(client, math, child_a["id"], score=95)
    _grade(client, math, child_b["id"], score=84)
    _grade(client, art, child_a["id"], subject="Art", score=65)
    _grade(client, math, child_c["id"], score=72, grade="Grade 3")

    response = client.get("/api/grades/summary", headers=admin["headers"])
    assert response.status_code == 200
    summaries = response.json()["summaries"]
    assert [item["grade"] for item in summaries] == ["Grade 2", "Grade 3"]

    grade_two = summaries[0]
    assert grade_two["totalStudents"] == 2
    # (95 + 84 + 65) / 3 = 81.33
    assert grade_two["averageScore"] == 81
    assert grade_two["highestScore"] == 95
    assert grade_two["lowestScore"] == 65

    maths = grade_two["subjectBreakdown"]["Math"]
    # (95 + 84) / 2 = 89.5 rounds up
    assert maths["averageScore"] == 90
    assert maths["totalTests"] == 2
    assert maths["scoreDistribution"] == {"excellent": 1, "good": 1, "average": 0, "needsHelp": 0}
    assert grade_two["subjectBreakdown"]["Art"]["scoreDistribution"]["needsHelp"] == 1

    performance = {item["teacherName"]: item for item in grade_two["teacherPerformance"]}
    assert performance["Math Teacher"]["totalTests"] == 2
    assert performance["Math Teacher"]["subjects"] == ["Math"]
    assert performance["Art Teacher"]["averageScore"] == 65

    teacher_view = client.get("/api/grades/summary", headers=art["headers"]).json()["summaries"]
    assert [item["grade"] for item in teacher_view] == ["Grade 2"]
    assert teacher_view[0]["totalStudents"] == 1


def test_summary_for_parent_without_children(client: TestClient, make_parent):
    parent = make_parent()
    response = client.get("/api/grades/summary", headers=parent["headers"])
    assert response.status_code == 200
    assert response.json()["summaries"] == []


def test_blank_grade_fields_are_named(client: TestClient, make_teacher, make_parent, add_child):
    teacher = make_teacher("Teacher One", ["Math"])
    child = add_child(make_parent())

    response = _grade(client, teacher, child["id"], title=" ")
    assert response.status_code == 400
    assert response.json()["message"] == "Test title is required"

    response = _grade(client, teacher, child["id"], subject="")
    assert response.json()["message"] == "Subject is required"

    response = _grade(client, teacher, child["id"], grade="  ")
    assert response.json()["message"] == "Grade is required"
