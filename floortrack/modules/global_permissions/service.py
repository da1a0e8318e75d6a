from supabase import Client
from floortrack.modules.global_permissions.schemas import GlobalPermissionCreate, GlobalPermissionResponse
from floortrack.core.errors import store_error
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

GRANT_SELECT = "id, group_id, building_id, floor_id, groups(name), buildings(name), floors(name)"


def _to_response(grant: Dict[str, Any]) -> GlobalPermissionResponse:
    return GlobalPermissionResponse(
        id=grant["id"],
        group_id=grant["group_id"],
        building_id=grant["building_id"],
        floor_id=grant["floor_id"],
        group_name=(grant.get("groups") or {}).get("name"),
        building_name=(grant.get("buildings") or {}).get("name"),
        floor_name=(grant.get("floors") or {}).get("name"),
    )


class GlobalPermissionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_permissions(self, group_ids: Optional[List[int]] = None) -> List[GlobalPermissionResponse]:
        """List grants with group/building/floor names. group_ids restricts to those groups."""
        if group_ids is not None and not group_ids:
            return []
        try:
            query = self.supabase.table("global_permissions").select(GRANT_SELECT)
            if group_ids is not None:
                query = query.in_("group_id", group_ids)
            result = query.order("id").execute()
        except Exception as e:
            store_error(e, "List global permissions", "Server error")
        return [_to_response(grant) for grant in result.data]

    def _require_row(self, table: str, row_id: int, label: str, columns: str = "id") -> Dict[str, Any]:
        result = self.supabase.table(table)\
            .select(columns)\
            .eq("id", row_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return result.data[0]

    def create_permission(self, permission_data: GlobalPermissionCreate) -> GlobalPermissionResponse:
        """Grant a group access to a building and one of its floors"""
        group_id = int(permission_data.group_id)
        building_id = int(permission_data.building_id)
        floor_id = int(permission_data.floor_id)
        try:
            self._require_row("groups", group_id, "Group")
            self._require_row("buildings", building_id, "Building")
            floor = self._require_row("floors", floor_id, "Floor", "id, building_id")
            if floor["building_id"] != building_id:
                raise HTTPException(status_code=422, detail="Floor does not belong to building")

            created = self.supabase.table("global_permissions").insert({
                "group_id": group_id,
                "building_id": building_id,
                "floor_id": floor_id
            }).execute()
            if not created.data:
                raise HTTPException(status_code=500, detail="Failed to create global permission")

            result = self.supabase.table("global_permissions")\
                .select(GRANT_SELECT)\
                .eq("id", created.data[0]["id"])\
                .limit(1)\
                .execute()
        except HTTPException:
            raise
        except Exception as e:
            store_error(e, "Create global permission", "Failed to create global permission")
        return _to_response(result.data[0] if result.data else created.data[0])

    def delete_permission(self, permission_id: int) -> bool:
        """Revoke a grant"""
        try:
            result = self.supabase.table("global_permissions")\
                .delete()\
                .eq("id", permission_id)\
                .execute()
        except Exception as e:
            store_error(e, "Delete global permission", "Failed to delete global permission")
        if not result.data:
            raise HTTPException(status_code=404, detail="Global permission not found")
        return True
