"""
Role-based access control for the Building -> Floor -> AP -> Device hierarchy.

Grants are rows of the global_permissions table tying one group to one
building and one floor. How a grant is read depends on the user's role:

- Owner: manages everything.
- Organization Admin: manages a building when one of their groups holds a
  grant on it, and a floor only when one of their groups holds a grant on
  that exact floor.
- Site Admin: manages a building when one of their groups holds a grant on
  it, and every floor of such a building.
- Anyone else: manages nothing.

APs and devices are managed through the floor they sit on.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from supabase import Client

from floortrack.config.roles_config import OWNER, ORG_ADMIN, SITE_ADMIN, normalize_role_name

logger = logging.getLogger(__name__)

ADMIN_ROLES = (ORG_ADMIN, SITE_ADMIN)

APP_USER_SELECT = "*, roles(id, name), user_groups(group_id, groups(id, name))"


def get_app_user(auth_uid: str, supabase: Client) -> Optional[Dict[str, Any]]:
    """Load the users row linked to an identity-provider uid, with role and groups."""
    if not auth_uid:
        return None
    result = supabase.table("users")\
        .select(APP_USER_SELECT)\
        .eq("auth_uid", auth_uid)\
        .limit(1)\
        .execute()
    if not result.data:
        return None
    user = dict(result.data[0])
    memberships = user.pop("user_groups", None) or []
    user["role"] = user.pop("roles", None)
    user["groups"] = [m["groups"] for m in memberships if m.get("groups")]
    user["group_ids"] = [m["group_id"] for m in memberships]
    return user


def get_role_name(user: Optional[Dict[str, Any]]) -> Optional[str]:
    if not user:
        return None
    role = user.get("role") or {}
    return normalize_role_name(role.get("name"))


def has_role(user: Optional[Dict[str, Any]], role_name: str) -> bool:
    return get_role_name(user) == role_name


def is_owner(user: Optional[Dict[str, Any]]) -> bool:
    return has_role(user, OWNER)


def _group_ids(user: Dict[str, Any]) -> List[int]:
    return list(user.get("group_ids") or [])


def _has_grant(supabase: Client, group_ids: Iterable[int], **filters) -> bool:
    query = supabase.table("global_permissions")\
        .select("id")\
        .in_("group_id", list(group_ids))
    for column, value in filters.items():
        query = query.eq(column, value)
    result = query.limit(1).execute()
    return bool(result.data)


def can_manage_building(user: Optional[Dict[str, Any]], building_id, supabase: Client) -> bool:
    """Decide whether the user may manage the given building."""
    if not user:
        return False
    if is_owner(user):
        return True
    if get_role_name(user) not in ADMIN_ROLES:
        return False
    group_ids = _group_ids(user)
    if not group_ids:
        return False
    return _has_grant(supabase, group_ids, building_id=int(building_id))


def can_manage_floor(user: Optional[Dict[str, Any]], floor_id, supabase: Client) -> bool:
    """Decide whether the user may manage the given floor (and its APs and devices)."""
    if not user:
        return False
    if is_owner(user):
        return True
    role_name = get_role_name(user)
    if role_name not in ADMIN_ROLES:
        return False
    group_ids = _group_ids(user)
    if not group_ids or floor_id is None:
        return False

    floor_result = supabase.table("floors")\
        .select("id, building_id")\
        .eq("id", int(floor_id))\
        .limit(1)\
        .execute()
    if not floor_result.data:
        return False
    floor = floor_result.data[0]

    # Organization Admin grants never inherit from the building
    if role_name == ORG_ADMIN:
        return _has_grant(supabase, group_ids, floor_id=floor["id"])
    return _has_grant(supabase, group_ids, building_id=floor["building_id"])


def get_manageable_floor_ids(user: Optional[Dict[str, Any]], supabase: Client) -> Optional[Set[int]]:
    """
    Batch form of can_manage_floor: the ids of every floor the user manages.
    Returns None when the user is unrestricted (Owner).
    """
    if not user:
        return set()
    if is_owner(user):
        return None
    role_name = get_role_name(user)
    if role_name not in ADMIN_ROLES:
        return set()
    group_ids = _group_ids(user)
    if not group_ids:
        return set()

    grants = supabase.table("global_permissions")\
        .select("building_id, floor_id")\
        .in_("group_id", group_ids)\
        .execute()
    rows = grants.data or []

    if role_name == ORG_ADMIN:
        floor_ids = {row["floor_id"] for row in rows if row.get("floor_id") is not None}
        if not floor_ids:
            return set()
        # Only floors that still exist
        existing = supabase.table("floors")\
            .select("id")\
            .in_("id", list(floor_ids))\
            .execute()
        return {row["id"] for row in existing.data or []}

    building_ids = {row["building_id"] for row in rows if row.get("building_id") is not None}
    if not building_ids:
        return set()
    floors = supabase.table("floors")\
        .select("id")\
        .in_("building_id", list(building_ids))\
        .execute()
    return {row["id"] for row in floors.data or []}
