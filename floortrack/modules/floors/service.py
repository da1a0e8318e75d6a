from supabase import Client
from floortrack.modules.floors.schemas import (
    FloorCreate, FloorUpdate, FloorResponse, FloorListItem,
    FloorDetailResponse, FloorBuildingResponse
)
from floortrack.core.errors import store_error
from typing import Any, Dict, List, Optional
from fastapi import HTTPException


class FloorService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    @staticmethod
    def _to_list_item(floor: Dict[str, Any]) -> FloorListItem:
        building = floor.get("buildings") or {}
        return FloorListItem(
            id=floor["id"],
            name=floor["name"],
            building_id=floor["building_id"],
            building_name=building.get("name"),
        )

    def list_floors(self, group_ids: Optional[List[int]] = None) -> List[FloorListItem]:
        """
        List floors with their building name. With group_ids, only floors
        granted to one of those groups or sitting in a granted building.
        """
        try:
            select = "id, name, building_id, buildings(id, name)"
            if group_ids is None:
                result = self.supabase.table("floors")\
                    .select(select)\
                    .order("id")\
                    .execute()
                return [self._to_list_item(floor) for floor in result.data]

            if not group_ids:
                return []
            grants = self.supabase.table("global_permissions")\
                .select("building_id, floor_id")\
                .in_("group_id", group_ids)\
                .execute()
            floor_ids = {g["floor_id"] for g in grants.data or [] if g.get("floor_id") is not None}
            building_ids = {g["building_id"] for g in grants.data or [] if g.get("building_id") is not None}

            floors: Dict[int, Dict[str, Any]] = {}
            if floor_ids:
                by_floor = self.supabase.table("floors")\
                    .select(select)\
                    .in_("id", list(floor_ids))\
                    .execute()
                floors.update({f["id"]: f for f in by_floor.data or []})
            if building_ids:
                by_building = self.supabase.table("floors")\
                    .select(select)\
                    .in_("building_id", list(building_ids))\
                    .execute()
                floors.update({f["id"]: f for f in by_building.data or []})
            return [self._to_list_item(floors[floor_id]) for floor_id in sorted(floors)]
        except HTTPException:
            raise
        except Exception as e:
            store_error(e, "List floors", "Failed to list floors")

    def get_floor(self, floor_id: int) -> Dict[str, Any]:
        """Raw floor row; 404 if missing"""
        try:
            result = self.supabase.table("floors")\
                .select("id, name, svg_map, building_id")\
                .eq("id", floor_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            store_error(e, "Get floor", "Failed to fetch floor")
        if not result.data:
            raise HTTPException(status_code=404, detail="Floor not found")
        return result.data[0]

    def get_floor_detail(self, floor_id: int) -> FloorDetailResponse:
        return FloorDetailResponse(**self.get_floor(floor_id))

    def get_floor_building(self, floor_id: int) -> FloorBuildingResponse:
        """Building a floor belongs to"""
        try:
            result = self.supabase.table("floors")\
                .select("id, buildings(id, name)")\
                .eq("id", floor_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            store_error(e, "Get building for floor", "Failed to fetch building")
        if not result.data or not result.data[0].get("buildings"):
            raise HTTPException(status_code=404, detail="Building not found for floor")
        return FloorBuildingResponse(**result.data[0]["buildings"])

    def create_floor(self, floor_data: FloorCreate) -> FloorResponse:
        """Create a floor inside an existing building"""
        building_id = int(floor_data.building_id)
        try:
            building = self.supabase.table("buildings")\
                .select("id")\
                .eq("id", building_id)\
                .limit(1)\
                .execute()
            if not building.data:
                raise HTTPException(status_code=404, detail="Building not found")

            result = self.supabase.table("floors").insert({
                "name": floor_data.name,
                "svg_map": floor_data.svg_map,
                "building_id": building_id
            }).execute()
        except HTTPException:
            raise
        except Exception as e:
            store_error(e, "Create floor", "Failed to create floor")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create floor")
        return FloorResponse(**result.data[0])

    def update_floor(self, floor_id: int, floor_data: FloorUpdate) -> FloorResponse:
        """Update floor name and/or map"""
        update_data = {}
        if floor_data.name:
            update_data["name"] = floor_data.name
        if floor_data.svg_map:
            update_data["svg_map"] = floor_data.svg_map
        if not update_data:
            raise HTTPException(status_code=400, detail="No valid fields to update")
        try:
            result = self.supabase.table("floors")\
                .update(update_data)\
                .eq("id", floor_id)\
                .execute()
        except Exception as e:
            store_error(e, "Update floor", "Failed to update floor")
        if not result.data:
            raise HTTPException(status_code=404, detail="Floor not found")
        return FloorResponse(**result.data[0])

    def delete_floor(self, floor_id: int) -> bool:
        """Delete floor; its APs, clients and grants cascade in the store"""
        try:
            result = self.supabase.table("floors")\
                .delete()\
                .eq("id", floor_id)\
                .execute()
        except Exception as e:
            store_error(e, "Delete floor", "Failed to delete floor")
        if not result.data:
            raise HTTPException(status_code=404, detail="Floor not found")
        return True
