from supabase import Client
from floortrack.modules.aps.schemas import APCreate, APUpdate, APResponse, APListItem
from floortrack.core.errors import store_error
from typing import Any, Dict, List, Optional, Set
from fastapi import HTTPException


class APService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_aps(self, floor_ids: Optional[Set[int]] = None) -> List[APListItem]:
        """List APs with their floor and building. floor_ids restricts to those floors; None means all."""
        if floor_ids is not None and not floor_ids:
            return []
        try:
            query = self.supabase.table("aps")\
                .select("id, name, cx, cy, floor_id, floors(id, building_id)")
            if floor_ids is not None:
                query = query.in_("floor_id", list(floor_ids))
            result = query.order("id").execute()
        except Exception as e:
            store_error(e, "List APs", "Failed to list APs")
        return [
            APListItem(
                id=ap["id"],
                name=ap["name"],
                cx=ap["cx"],
                cy=ap["cy"],
                floor_id=ap["floor_id"],
                building_id=(ap.get("floors") or {}).get("building_id"),
            )
            for ap in result.data
        ]

    def get_ap(self, ap_id: int) -> Dict[str, Any]:
        """Raw AP row; 404 if missing"""
        try:
            result = self.supabase.table("aps")\
                .select("id, name, cx, cy, floor_id")\
                .eq("id", ap_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            store_error(e, "Get AP", "Failed to fetch AP")
        if not result.data:
            raise HTTPException(status_code=404, detail="AP not found")
        return result.data[0]

    def create_ap(self, ap_data: APCreate) -> APResponse:
        """Place a new AP on an existing floor"""
        floor_id = int(ap_data.floor_id)
        try:
            floor = self.supabase.table("floors")\
                .select("id")\
                .eq("id", floor_id)\
                .limit(1)\
                .execute()
            if not floor.data:
                raise HTTPException(status_code=404, detail="Floor not found")

            result = self.supabase.table("aps").insert({
                "name": ap_data.name,
                "cx": ap_data.cx,
                "cy": ap_data.cy,
                "floor_id": floor_id
            }).execute()
        except HTTPException:
            raise
        except Exception as e:
            store_error(e, "Create AP", "Failed to create AP")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create AP")
        return APResponse(**result.data[0])

    def update_ap(self, ap_id: int, ap_data: APUpdate) -> APResponse:
        """Rename and/or move an AP marker"""
        update_data = {}
        if ap_data.name:
            update_data["name"] = ap_data.name
        if ap_data.cx is not None:
            update_data["cx"] = ap_data.cx
        if ap_data.cy is not None:
            update_data["cy"] = ap_data.cy
        if not update_data:
            raise HTTPException(status_code=400, detail="No valid fields to update")
        try:
            result = self.supabase.table("aps")\
                .update(update_data)\
                .eq("id", ap_id)\
                .execute()
        except Exception as e:
            store_error(e, "Update AP", "Failed to update AP")
        if not result.data:
            raise HTTPException(status_code=404, detail="AP not found")
        return APResponse(**result.data[0])

    def delete_ap(self, ap_id: int) -> bool:
        """Delete AP; its clients cascade in the store"""
        try:
            result = self.supabase.table("aps")\
                .delete()\
                .eq("id", ap_id)\
                .execute()
        except Exception as e:
            store_error(e, "Delete AP", "Failed to delete AP")
        if not result.data:
            raise HTTPException(status_code=404, detail="AP not found")
        return True
