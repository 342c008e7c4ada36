from __future__ import annotations

from crud.attribute_crud import find_attribute_by_project_and_name, list_attributes
from crud.timesheet_crud import get_timesheet
from models.project import Project


def test_can_list_projects(client, auth_headers, user, make_project):
    for _ in range(3):
        make_project(user)

    resp = client.get("/projects", headers=auth_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["data"]) == 3
    assert body["total"] == 3
    assert body["current_page"] == 1


def test_only_member_projects_are_listed(client, auth_headers, user, make_user, make_project):
    make_project(user, name="Mine")
    make_project(make_user(), name="Theirs")

    resp = client.get("/projects", headers=auth_headers)

    assert [p["name"] for p in resp.json()["data"]] == ["Mine"]


def test_can_filter_projects_by_name(client, auth_headers, user, make_project):
    make_project(user, name="Test Project")
    make_project(user, name="Another Project")

    resp = client.get("/projects?filters[name]=test", headers=auth_headers)

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert len(data) == 1
    assert data[0]["name"] == "Test Project"


def test_can_filter_projects_by_status(client, auth_headers, user, make_project):
    make_project(user, status="active")
    make_project(user, status="on_hold")
    make_project(user, status="completed")

    resp = client.get("/projects?filters[status]=active", headers=auth_headers)
    assert [p["status"] for p in resp.json()["data"]] == ["active"]

    resp = client.get("/projects?status=completed", headers=auth_headers)
    assert [p["status"] for p in resp.json()["data"]] == ["completed"]


def test_can_filter_projects_by_attribute(client, auth_headers, user, make_project):
    make_project(user, name="IT work", attributes={"department": "IT"})
    make_project(user, name="HR work", attributes={"department": "HR"})
    make_project(user, name="Plain")

    resp = client.get("/projects?filters[department]=IT", headers=auth_headers)

    assert [p["name"] for p in resp.json()["data"]] == ["IT work"]


def test_can_filter_projects_by_member(client, auth_headers, user, make_user, make_project):
    teammate = make_user()
    make_project(user, name="Shared", members=[teammate])
    make_project(user, name="Solo")

    resp = client.get(f"/projects?filters[user_id]={teammate.id}", headers=auth_headers)

    assert [p["name"] for p in resp.json()["data"]] == ["Shared"]


def test_projects_are_paginated(client, auth_headers, user, make_project):
    for _ in range(17):
        make_project(user)

    first = client.get("/projects", headers=auth_headers).json()
    assert len(first["data"]) == 15
    assert first["per_page"] == 15
    assert first["total"] == 17
    assert first["last_page"] == 2

    second = client.get("/projects?page=2", headers=auth_headers).json()
    assert len(second["data"]) == 2
    assert second["current_page"] == 2


def test_can_create_project(client, db, auth_headers, user):
    payload = {
        "name": "New Project",
        "description": "Project description",
        "status": "active",
        "user_ids": [user.id],
        "attributes": {"department": "IT"},
    }

    resp = client.post("/projects", json=payload, headers=auth_headers)

    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "New Project"
    assert [u["id"] for u in body["users"]] == [user.id]
    assert body["attributes"][0]["name"] == "department"
    assert body["attributes"][0]["type"] == "string"

    attr = find_attribute_by_project_and_name(db, body["id"], "department")
    assert attr.value == "IT"


def test_creator_is_added_alongside_requested_members(client, auth_headers, user, make_user):
    teammate = make_user()
    payload = {"name": "Team", "status": "active", "user_ids": [teammate.id]}

    resp = client.post("/projects", json=payload, headers=auth_headers)

    assert resp.status_code == 201
    assert {u["id"] for u in resp.json()["users"]} == {user.id, teammate.id}


def test_cannot_create_project_with_invalid_data(client, auth_headers):
    resp = client.post("/projects", json={"name": "", "status": "invalid-status"}, headers=auth_headers)

    assert resp.status_code == 422
    assert {"name", "status", "user_ids"} <= set(resp.json()["errors"])


def test_cannot_create_project_with_unknown_member(client, db, auth_headers):
    payload = {"name": "Ghosts", "status": "active", "user_ids": ["no-such-user"]}

    resp = client.post("/projects", json=payload, headers=auth_headers)

    assert resp.status_code == 422
    assert resp.json()["errors"] == {"user_ids": ["One or more selected users do not exist."]}
    assert db.query(Project).count() == 0


def test_create_rolls_back_on_attribute_failure(client, db, user, auth_headers):
    payload = {"name": "Broken", "status": "active", "user_ids": [user.id], "attributes": {"department": ""}}

    resp = client.post("/projects", json=payload, headers=auth_headers)

    assert resp.status_code == 422
    assert "attributes.department" in resp.json()["errors"]
    assert db.query(Project).count() == 0


def test_can_view_project(client, auth_headers, project):
    resp = client.get(f"/projects/{project.id}", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json()["id"] == project.id
    assert resp.json()["name"] == "Test Project"


def test_non_member_cannot_view_project(client, project, make_user, headers_for):
    outsider = headers_for(make_user())

    resp = client.get(f"/projects/{project.id}", headers=outsider)

    assert resp.status_code == 404
    assert resp.json() == {"message": "Project not found."}


def test_can_update_project(client, auth_headers, project):
    resp = client.put(
        f"/projects/{project.id}",
        json={"name": "Updated Project", "status": "completed"},
        headers=auth_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["name"] == "Updated Project"
    assert resp.json()["status"] == "completed"


def test_cannot_update_project_with_invalid_status(client, auth_headers, project):
    resp = client.patch(f"/projects/{project.id}", json={"status": "archived"}, headers=auth_headers)

    assert resp.status_code == 422
    assert "status" in resp.json()["errors"]


def test_update_syncs_members_and_keeps_actor(client, auth_headers, user, make_user, make_project):
    old, new = make_user(), make_user()
    proj = make_project(user, members=[old])

    resp = client.patch(f"/projects/{proj.id}", json={"user_ids": [new.id]}, headers=auth_headers)

    assert resp.status_code == 200
    assert {u["id"] for u in resp.json()["users"]} == {user.id, new.id}


def test_update_upserts_attributes_keeping_their_type(client, db, auth_headers, project, make_attribute):
    make_attribute(project, name="department", type="select", value="IT", options=["IT", "HR"])

    ok = client.patch(f"/projects/{project.id}", json={"attributes": {"department": "HR"}}, headers=auth_headers)
    assert ok.status_code == 200
    attr = ok.json()["attributes"][0]
    assert (attr["type"], attr["value"], attr["options"]) == ("select", "HR", ["IT", "HR"])

    bad = client.patch(
        f"/projects/{project.id}",
        json={"name": "Renamed", "attributes": {"department": "Finance"}},
        headers=auth_headers,
    )
    assert bad.status_code == 422
    assert bad.json()["errors"] == {
        "attributes.department": ["Selected value must be one of the provided options."]
    }

    db.expire_all()
    assert find_attribute_by_project_and_name(db, project.id, "department").value == "HR"
    assert db.get(Project, project.id).name == "Test Project"


def test_repeated_attribute_update_is_idempotent(client, db, auth_headers, project):
    for _ in range(2):
        resp = client.patch(f"/projects/{project.id}", json={"attributes": {"priority": "High"}}, headers=auth_headers)
        assert resp.status_code == 200

    db.expire_all()
    assert [(a.name, a.value) for a in list_attributes(db, project.id)] == [("priority", "High")]


def test_same_attribute_name_on_two_projects(client, db, auth_headers, user, make_project):
    first = make_project(user, attributes={"department": "IT"})
    second = make_project(user, attributes={"department": "HR"})

    resp = client.get(f"/projects/{second.id}", headers=auth_headers)

    assert resp.json()["attributes"][0]["value"] == "HR"
    assert find_attribute_by_project_and_name(db, first.id, "department").value == "IT"


def test_can_delete_project(client, db, auth_headers, user, project, make_attribute, make_timesheet):
    make_attribute(project, name="department")
    project_id, ts_id = project.id, make_timesheet(user, project).id

    resp = client.delete(f"/projects/{project_id}", headers=auth_headers)

    assert resp.status_code == 204
    db.expire_all()
    assert db.query(Project).filter(Project.id == project_id).count() == 0
    assert list_attributes(db, project_id) == []
    assert get_timesheet(db, ts_id) is None


def test_non_member_cannot_delete_project(client, db, project, make_user, headers_for):
    resp = client.delete(f"/projects/{project.id}", headers=headers_for(make_user()))

    assert resp.status_code == 404
    db.expire_all()
    assert db.get(Project, project.id) is not None


def test_create_requires_at_least_one_user(client, auth_headers):
    resp = client.post("/projects", json={"name": "Empty", "status": "active", "user_ids": []}, headers=auth_headers)

    assert resp.status_code == 422
    assert resp.json()["errors"] == {"user_ids": ["Please assign at least one user to the project."]}


def test_attribute_map_errors_are_keyed_by_attribute_name(client, auth_headers, project):
    resp = client.patch(f"/projects/{project.id}", json={"attributes": {"department": 5}}, headers=auth_headers)

    assert resp.status_code == 422
    assert list(resp.json()["errors"]) == ["attributes.department"]
