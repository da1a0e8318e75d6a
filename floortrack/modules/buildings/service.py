from supabase import Client
from floortrack.modules.buildings.schemas import BuildingCreate, BuildingUpdate, BuildingResponse
from floortrack.core.errors import store_error
from typing import List, Optional
from fastapi import HTTPException


class BuildingService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_buildings(self, group_ids: Optional[List[int]] = None) -> List[BuildingResponse]:
        """List buildings. With group_ids, only buildings granted to one of those groups."""
        try:
            query = self.supabase.table("buildings").select("id, name")
            if group_ids is not None:
                if not group_ids:
                    return []
                grants = self.supabase.table("global_permissions")\
                    .select("building_id")\
                    .in_("group_id", group_ids)\
                    .execute()
                building_ids = list({g["building_id"] for g in grants.data or []})
                if not building_ids:
                    return []
                query = query.in_("id", building_ids)
            result = query.order("id").execute()
            return [BuildingResponse(**building) for building in result.data]
        except HTTPException:
            raise
        except Exception as e:
            store_error(e, "List buildings", "Failed to list buildings")

    def create_building(self, building_data: BuildingCreate) -> BuildingResponse:
        """Create a new building"""
        try:
            result = self.supabase.table("buildings").insert({
                "name": building_data.name
            }).execute()
        except Exception as e:
            store_error(e, "Create building", "Failed to create building")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create building")
        return BuildingResponse(**result.data[0])

    def update_building(self, building_id: int, building_data: BuildingUpdate) -> BuildingResponse:
        """Rename building"""
        try:
            result = self.supabase.table("buildings")\
                .update({"name": building_data.name})\
                .eq("id", building_id)\
                .execute()
        except Exception as e:
            store_error(e, "Update building", "Failed to update building")
        if not result.data:
            raise HTTPException(status_code=404, detail="Building not found")
        return BuildingResponse(**result.data[0])

    def delete_building(self, building_id: int) -> bool:
        """Delete building; floors, APs and clients cascade in the store"""
        try:
            result = self.supabase.table("buildings")\
                .delete()\
                .eq("id", building_id)\
                .execute()
        except Exception as e:
            store_error(e, "Delete building", "Failed to delete building")
        if not result.data:
            raise HTTPException(status_code=404, detail="Building not found")
        return True
