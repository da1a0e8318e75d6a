import logging
from supabase import Client
from floortrack.config import settings
from floortrack.modules.roles.service import RoleService
from floortrack.modules.users.schemas import AssignUserRequest, PendingUserResponse
from floortrack.core.errors import store_error
from typing import List
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.roles = RoleService(supabase)

    def list_pending_users(self) -> List[PendingUserResponse]:
        """Users still holding the registration role, oldest first"""
        pending_role = self.roles.find_role_by_name(settings.default_role_name)
        if not pending_role:
            logger.warning(f"Role '{settings.default_role_name}' not found; no pending users")
            return []
        try:
            result = self.supabase.table("users")\
                .select("id, email, created_at")\
                .eq("role_id", pending_role["id"])\
                .order("created_at")\
                .execute()
        except Exception as e:
            store_error(e, "List pending users", "Failed to list pending users")
        return [PendingUserResponse(**user) for user in result.data]

    def _require_groups(self, group_ids: List[int]) -> None:
        try:
            result = self.supabase.table("groups")\
                .select("id")\
                .in_("id", group_ids)\
                .execute()
        except Exception as e:
            store_error(e, "Get groups", "Failed to fetch groups")
        found = {group["id"] for group in result.data or []}
        unknown = [group_id for group_id in group_ids if group_id not in found]
        if unknown:
            raise HTTPException(status_code=404, detail="Group not found")

    def assign_user(self, user_id: int, assign_data: AssignUserRequest) -> bool:
        """Set the user's role and replace their group memberships"""
        try:
            existing = self.supabase.table("users")\
                .select("id")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            store_error(e, "Get user", "Failed to fetch user")
        if not existing.data:
            raise HTTPException(status_code=404, detail="User not found")

        role = self.roles.get_role_by_id(int(assign_data.role_id))
        group_ids = list(dict.fromkeys(int(group_id) for group_id in assign_data.group_ids))
        self._require_groups(group_ids)

        try:
            current = self.supabase.table("user_groups")\
                .select("group_id")\
                .eq("user_id", user_id)\
                .execute()
            current_ids = {m["group_id"] for m in current.data or []}

            # New memberships go in before stale ones are removed
            missing = [group_id for group_id in group_ids if group_id not in current_ids]
            if missing:
                self.supabase.table("user_groups").insert([
                    {"user_id": user_id, "group_id": group_id} for group_id in missing
                ]).execute()

            stale = list(current_ids - set(group_ids))
            if stale:
                self.supabase.table("user_groups")\
                    .delete()\
                    .eq("user_id", user_id)\
                    .in_("group_id", stale)\
                    .execute()

            self.supabase.table("users")\
                .update({"role_id": int(role.id)})\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            store_error(e, "Assign user", "Failed to assign user")

        logger.info(f"User {user_id} assigned role {role.name} and groups {group_ids}")
        return True
