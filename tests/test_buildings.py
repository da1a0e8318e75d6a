# tests/test_buildings.py

"""
Tests for building endpoints.
"""

from fastapi.testclient import TestClient


def test_owner_lists_all_buildings(client: TestClient, login_as):
    login_as("uid-owner")

    response = client.get("/api/admin/buildings")

    assert response.status_code == 200
    assert response.json() == [{"id": "1", "name": "HQ"}, {"id": "2", "name": "Annex"}]


def test_admin_lists_granted_buildings(client: TestClient, login_as):
    login_as("uid-org")

    response = client.get("/api/admin/buildings")

    assert response.status_code == 200
    assert response.json() == [{"id": "1", "name": "HQ"}]


def test_user_without_groups_lists_nothing(client: TestClient, login_as):
    login_as("uid-lonely")

    response = client.get("/api/admin/buildings")

    assert response.status_code == 200
    assert response.json() == []


def test_owner_creates_building(client: TestClient, login_as, fake_db):
    login_as("uid-owner")

    response = client.post("/api/admin/buildings", json={"name": "Depot"})

    assert response.status_code == 200
    assert response.json() == {"id": "3", "name": "Depot"}
    assert fake_db.rows("buildings")[-1]["name"] == "Depot"


def test_non_owner_cannot_create_building(client: TestClient, login_as):
    login_as("uid-site")

    response = client.post("/api/admin/buildings", json={"name": "Depot"})

    assert response.status_code == 403
    assert response.json()["detail"] == "Only Owner can create buildings"


def test_create_building_requires_name(client: TestClient, login_as):
    login_as("uid-owner")

    response = client.post("/api/admin/buildings", json={"name": ""})

    assert response.status_code == 422


def test_owner_renames_building(client: TestClient, login_as):
    login_as("uid-owner")

    response = client.put("/api/admin/buildings/2", json={"name": "Annex East"})

    assert response.status_code == 200
    assert response.json() == {"id": "2", "name": "Annex East"}


def test_rename_missing_building(client: TestClient, login_as):
    login_as("uid-owner")

    response = client.put("/api/admin/buildings/99", json={"name": "Ghost"})

    assert response.status_code == 404


def test_org_admin_cannot_edit_building(client: TestClient, login_as):
    login_as("uid-org")

    response = client.put("/api/admin/buildings/1", json={"name": "Mine"})

    assert response.status_code == 403
    assert response.json()["detail"] == "Only Owner can Edit Building"


def test_delete_building_cascades(client: TestClient, login_as, fake_db):
    login_as("uid-owner")

    response = client.delete("/api/admin/buildings/1")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert [f["id"] for f in fake_db.rows("floors")] == [20]
    assert [a["id"] for a in fake_db.rows("aps")] == [200]
    assert [c["id"] for c in fake_db.rows("clients")] == [1002]
    assert fake_db.rows("global_permissions") == []


def test_non_owner_cannot_delete_building(client: TestClient, login_as):
    login_as("uid-site")

    response = client.delete("/api/admin/buildings/1")

    assert response.status_code == 403
    assert response.json()["detail"] == "Only Owner can delete buildings"
