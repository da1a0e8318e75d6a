from supabase import Client
from floortrack.modules.roles.schemas import RoleResponse
from floortrack.core.errors import store_error
from typing import Any, Dict, List, Optional
from fastapi import HTTPException


class RoleService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_roles(self) -> List[RoleResponse]:
        """List roles ordered by id"""
        try:
            result = self.supabase.table("roles")\
                .select("id, name")\
                .order("id")\
                .execute()
        except Exception as e:
            store_error(e, "List roles", "Failed to list roles")
        return [RoleResponse(**role) for role in result.data]

    def get_role_by_id(self, role_id: int) -> RoleResponse:
        """Get role by ID"""
        try:
            result = self.supabase.table("roles")\
                .select("id, name")\
                .eq("id", role_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            store_error(e, "Get role", "Failed to fetch role")
        if not result.data:
            raise HTTPException(status_code=404, detail="Role not found")
        return RoleResponse(**result.data[0])

    def find_role_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """Role row by name, or None"""
        try:
            result = self.supabase.table("roles")\
                .select("id, name")\
                .eq("name", name)\
                .limit(1)\
                .execute()
        except Exception as e:
            store_error(e, "Find role", "Failed to fetch role")
        return result.data[0] if result.data else None
