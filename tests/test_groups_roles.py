# tests/test_groups_roles.py

"""
Tests for group and role endpoints.
"""

from fastapi.testclient import TestClient


def test_any_user_lists_groups(client: TestClient, login_as):
    login_as("uid-user")

    response = client.get("/api/admin/groups")

    assert response.status_code == 200
    assert response.json() == [{"id": "1", "name": "North"}, {"id": "2", "name": "South"}]


def test_owner_creates_group(client: TestClient, login_as):
    login_as("uid-owner")

    response = client.post("/api/admin/groups", json={"name": "East"})

    assert response.status_code == 200
    assert response.json() == {"id": "3", "name": "East"}


def test_duplicate_group_name(client: TestClient, login_as):
    login_as("uid-owner")

    created = client.post("/api/admin/groups", json={"name": "North"})
    renamed = client.put("/api/admin/groups/2", json={"name": "North"})

    assert created.status_code == 400
    assert created.json()["detail"] == "Group already exists"
    assert renamed.status_code == 400


def test_non_owner_cannot_manage_groups(client: TestClient, login_as):
    login_as("uid-org")

    response = client.post("/api/admin/groups", json={"name": "East"})

    assert response.status_code == 403
    assert response.json()["detail"] == "Only Owner can manage groups"


def test_rename_missing_group(client: TestClient, login_as):
    login_as("uid-owner")

    response = client.put("/api/admin/groups/9", json={"name": "Ghost"})

    assert response.status_code == 404


def test_delete_group_removes_memberships_and_grants(client: TestClient, login_as, fake_db):
    login_as("uid-owner")

    response = client.delete("/api/admin/groups/1")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert fake_db.rows("user_groups") == []
    assert fake_db.rows("global_permissions") == []
    assert [g["id"] for g in fake_db.rows("groups")] == [2]


def test_list_roles(client: TestClient, login_as):
    login_as("uid-pending")

    response = client.get("/api/admin/roles")

    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == [
        "Owner", "Organization Admin", "Site Admin", "User", "Pending User"
    ]
    assert response.json()[0] == {"id": "1", "name": "Owner"}
