from fastapi.testclient import TestClient


def test_create_and_list_assignments(client: TestClient, make_teacher):
    teacher = make_teacher("Teacher One", ["Math"])

    for title, due in (("Undated", None), ("Later", "2026-12-01T00:00:00"), ("Sooner", "2026-11-01T00:00:00")):
        response = client.post(
            "/api/assignments",
            json={"title": title, "description": "Read pages 1-10", "dueDate": due},
            headers=teacher["headers"],
        )
        assert response.status_code == 201
        assert response.json()["message"] == "Assignment created successfully"
        assert response.json()["assignment"]["createdBy"] == teacher["user"]["id"]

    response = client.get("/api/assignments", headers=teacher["headers"])
    assert response.status_code == 200
    assert [item["title"] for item in response.json()["assignments"]] == ["Sooner", "Later", "Undated"]


def test_assignment_requires_title_and_teacher(client: TestClient, make_teacher, make_parent):
    teacher = make_teacher("Teacher One", ["Math"])
    response = client.post("/api/assignments", json={"title": "   "}, headers=teacher["headers"])
    assert response.status_code == 400
    assert response.json()["message"] == "Title is required"

    parent = make_parent()
    assert client.get("/api/assignments", headers=parent["headers"]).status_code == 403
