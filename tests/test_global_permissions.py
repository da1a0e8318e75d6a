# tests/test_global_permissions.py

"""
Tests for global permission (grant) endpoints.
"""

from fastapi.testclient import TestClient


def test_owner_lists_grants_with_names(client: TestClient, login_as):
    login_as("uid-owner")

    response = client.get("/api/admin/global-permissions")

    assert response.status_code == 200
    assert response.json() == [{
        "id": "1",
        "groupId": "1",
        "buildingId": "1",
        "floorId": "10",
        "groupName": "North",
        "buildingName": "HQ",
        "floorName": "HQ-Ground",
    }]


def test_org_admin_lists_own_group_grants(client: TestClient, login_as, fake_db):
    fake_db.seed("global_permissions", {"id": 2, "group_id": 2, "building_id": 2, "floor_id": 20})
    login_as("uid-org")

    response = client.get("/api/admin/global-permissions")

    assert response.status_code == 200
    assert [g["id"] for g in response.json()] == ["1"]


def test_site_admin_cannot_list_grants(client: TestClient, login_as):
    login_as("uid-site")

    response = client.get("/api/admin/global-permissions")

    assert response.status_code == 403


def test_owner_creates_grant(client: TestClient, login_as, fake_db):
    login_as("uid-owner")

    response = client.post(
        "/api/admin/global-permissions",
        json={"groupId": "2", "buildingId": "2", "floorId": "20"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["groupName"] == "South"
    assert data["floorName"] == "Annex-Ground"
    assert len(fake_db.rows("global_permissions")) == 2


def test_grant_floor_must_belong_to_building(client: TestClient, login_as):
    login_as("uid-owner")

    response = client.post(
        "/api/admin/global-permissions",
        json={"groupId": "2", "buildingId": "1", "floorId": "20"},
    )

    assert response.status_code == 422


def test_grant_unknown_references(client: TestClient, login_as):
    login_as("uid-owner")

    unknown_group = client.post(
        "/api/admin/global-permissions",
        json={"groupId": "9", "buildingId": "1", "floorId": "10"},
    )
    unknown_floor = client.post(
        "/api/admin/global-permissions",
        json={"groupId": "1", "buildingId": "1", "floorId": "99"},
    )

    assert unknown_group.status_code == 404
    assert unknown_group.json()["detail"] == "Group not found"
    assert unknown_floor.status_code == 404


def test_non_owner_cannot_create_grant(client: TestClient, login_as):
    login_as("uid-org")

    response = client.post(
        "/api/admin/global-permissions",
        json={"groupId": "1", "buildingId": "1", "floorId": "11"},
    )

    assert response.status_code == 403


def test_owner_revokes_grant(client: TestClient, login_as, fake_db):
    login_as("uid-owner")

    response = client.delete("/api/admin/global-permissions/1")
    missing = client.delete("/api/admin/global-permissions/1")

    assert response.status_code == 200
    assert fake_db.rows("global_permissions") == []
    assert missing.status_code == 404


def test_revoking_grant_removes_access(client: TestClient, login_as):
    login_as("uid-owner")
    client.delete("/api/admin/global-permissions/1")

    login_as("uid-site")
    response = client.put("/api/admin/floors/10", json={"name": "Lobby"})

    assert response.status_code == 403
