# tests/test_seed_roles.py

"""
Tests for the role seeding script.
"""

from unittest.mock import patch

import pytest

from floortrack.config.roles_config import ROLES
from floortrack.scripts import seed_roles
from tests.conftest import FakeSupabase


def test_seed_creates_missing_roles():
    db = FakeSupabase()

    created, updated, failed = seed_roles.seed_roles(db)

    assert (created, updated, failed) == (len(ROLES), 0, [])
    assert [r["name"] for r in db.rows("roles")] == [role["name"] for role in ROLES]


def test_seed_refreshes_existing_descriptions(fake_db):
    fake_db.rows("roles")[0]["description"] = "stale"

    created, updated, failed = seed_roles.seed_roles(fake_db)

    assert (created, updated, failed) == (0, len(ROLES), [])
    assert fake_db.rows("roles")[0]["description"] == ROLES[0]["description"]


def test_main_exits_non_zero_on_failure():
    db = FakeSupabase()
    db.failing_tables.add("roles")

    with patch.object(seed_roles, "get_supabase_admin", return_value=db):
        with pytest.raises(SystemExit) as exc_info:
            seed_roles.main()

    assert exc_info.value.code == 1
