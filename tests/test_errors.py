# tests/test_errors.py

"""
Tests for shared error helpers and generic HTTP behaviour.
"""

import pytest
from fastapi import HTTPException

from floortrack.core.errors import extract_store_error, is_unique_violation, parse_id
from tests.conftest import FakeAPIError


def test_parse_id_accepts_decimal_strings():
    assert parse_id("42") == 42
    assert parse_id(7) == 7


@pytest.mark.parametrize("value", ["abc", "-1", "1.5", "", "12a"])
def test_parse_id_rejects_non_decimal(value):
    with pytest.raises(HTTPException) as exc_info:
        parse_id(value)

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == f"Invalid ID: {value}"


def test_is_unique_violation_by_code_and_text():
    assert is_unique_violation(FakeAPIError("whatever", code="23505"))
    assert is_unique_violation(Exception("duplicate key value violates unique constraint"))
    assert not is_unique_violation(Exception("connection refused"))


def test_extract_store_error_prefers_message_attribute():
    assert extract_store_error(FakeAPIError("row not found")) == "row not found"
    assert extract_store_error(ValueError("plain")) == "plain"


def test_invalid_path_id_returns_400(client, login_as):
    login_as("uid-owner")

    response = client.put("/api/admin/floors/abc", json={"name": "x"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid ID: abc"


def test_store_failure_returns_generic_500(client, login_as, fake_db):
    login_as("uid-owner")
    fake_db.failing_tables.add("buildings")

    response = client.get("/api/admin/buildings")

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to list buildings"


def test_unregistered_identity_is_forbidden(client, login_as):
    login_as("uid-without-row")

    response = client.get("/api/admin/buildings")

    assert response.status_code == 403
    assert response.json()["detail"] == "Unauthorized"


def test_missing_token_is_unauthorized(client):
    response = client.get("/api/admin/buildings")

    assert response.status_code == 401
    assert response.json()["detail"] == "Missing access token"
