from supabase import Client
from floortrack.modules.devices.schemas import DeviceCreate, DeviceUpdate, DeviceResponse
from floortrack.core.errors import is_unique_violation, store_error
from typing import Any, Dict, List, Optional, Set
from fastapi import HTTPException

DEVICE_SELECT = "id, mac, ap_id, created_at, aps(id, floor_id)"


def _to_response(device: Dict[str, Any]) -> DeviceResponse:
    ap = device.get("aps") or {}
    return DeviceResponse(
        id=device["id"],
        mac=device["mac"],
        ap_id=device["ap_id"],
        floor_id=ap.get("floor_id"),
        created_at=device.get("created_at"),
    )


class DeviceService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_devices(self, floor_ids: Optional[Set[int]] = None) -> List[DeviceResponse]:
        """List client devices. floor_ids restricts to APs on those floors; None means all."""
        if floor_ids is not None and not floor_ids:
            return []
        try:
            query = self.supabase.table("clients").select(DEVICE_SELECT)
            if floor_ids is not None:
                aps = self.supabase.table("aps")\
                    .select("id")\
                    .in_("floor_id", list(floor_ids))\
                    .execute()
                ap_ids = [ap["id"] for ap in aps.data or []]
                if not ap_ids:
                    return []
                query = query.in_("ap_id", ap_ids)
            result = query.order("id").execute()
        except Exception as e:
            store_error(e, "List devices", "Failed to list devices")
        return [_to_response(device) for device in result.data]

    def get_device(self, device_id: int) -> Dict[str, Any]:
        """Raw client row with its AP; 404 if missing"""
        try:
            result = self.supabase.table("clients")\
                .select(DEVICE_SELECT)\
                .eq("id", device_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            store_error(e, "Get device", "Failed to fetch device")
        if not result.data:
            raise HTTPException(status_code=404, detail="Device not found")
        return result.data[0]

    def create_device(self, device_data: DeviceCreate) -> DeviceResponse:
        """Attach a client device to an AP"""
        try:
            result = self.supabase.table("clients").insert({
                "mac": device_data.mac,
                "ap_id": int(device_data.ap_id)
            }).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise HTTPException(status_code=400, detail="MAC already exists")
            store_error(e, "Create device", "Failed to create device")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create device")
        return DeviceResponse(**result.data[0])

    def update_device(self, device_id: int, device_data: DeviceUpdate) -> DeviceResponse:
        """Change a device's MAC and/or move it to another AP"""
        update_data = {}
        if device_data.mac is not None:
            update_data["mac"] = device_data.mac
        if device_data.ap_id is not None:
            update_data["ap_id"] = int(device_data.ap_id)
        if not update_data:
            raise HTTPException(status_code=400, detail="No valid fields to update")
        try:
            self.supabase.table("clients")\
                .update(update_data)\
                .eq("id", device_id)\
                .execute()
        except Exception as e:
            if is_unique_violation(e):
                raise HTTPException(status_code=400, detail="MAC already exists")
            store_error(e, "Update device", "Failed to update device")
        return _to_response(self.get_device(device_id))

    def delete_device(self, device_id: int) -> bool:
        """Delete a client device"""
        try:
            result = self.supabase.table("clients")\
                .delete()\
                .eq("id", device_id)\
                .execute()
        except Exception as e:
            store_error(e, "Delete device", "Failed to delete device")
        if not result.data:
            raise HTTPException(status_code=404, detail="Device not found")
        return True
