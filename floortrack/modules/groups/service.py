from supabase import Client
from floortrack.modules.groups.schemas import GroupCreate, GroupUpdate, GroupResponse
from floortrack.core.errors import is_unique_violation, store_error
from typing import List
from fastapi import HTTPException


class GroupService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_groups(self) -> List[GroupResponse]:
        """List all groups"""
        try:
            result = self.supabase.table("groups")\
                .select("id, name")\
                .order("id")\
                .execute()
        except Exception as e:
            store_error(e, "List groups", "Failed to list groups")
        return [GroupResponse(**group) for group in result.data]

    def create_group(self, group_data: GroupCreate) -> GroupResponse:
        """Create a new group"""
        try:
            result = self.supabase.table("groups").insert({
                "name": group_data.name
            }).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise HTTPException(status_code=400, detail="Group already exists")
            store_error(e, "Create group", "Failed to create group")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create group")
        return GroupResponse(**result.data[0])

    def update_group(self, group_id: int, group_data: GroupUpdate) -> GroupResponse:
        """Rename group"""
        try:
            result = self.supabase.table("groups")\
                .update({"name": group_data.name})\
                .eq("id", group_id)\
                .execute()
        except Exception as e:
            if is_unique_violation(e):
                raise HTTPException(status_code=400, detail="Group already exists")
            store_error(e, "Update group", "Failed to update group")
        if not result.data:
            raise HTTPException(status_code=404, detail="Group not found")
        return GroupResponse(**result.data[0])

    def delete_group(self, group_id: int) -> bool:
        """Delete group"""
        try:
            # Delete memberships first
            self.supabase.table("user_groups")\
                .delete()\
                .eq("group_id", group_id)\
                .execute()

            # Delete grants
            self.supabase.table("global_permissions")\
                .delete()\
                .eq("group_id", group_id)\
                .execute()

            # Delete group
            result = self.supabase.table("groups")\
                .delete()\
                .eq("id", group_id)\
                .execute()
        except Exception as e:
            store_error(e, "Delete group", "Failed to delete group")
        if not result.data:
            raise HTTPException(status_code=404, detail="Group not found")
        return True
