import logging
from supabase import Client
from floortrack.modules.profile.schemas import (
    ProfileUpdate, ProfileUpdateResponse, UserDeviceCreate, UserDeviceUpdate, UserDeviceResponse
)
from floortrack.core.errors import is_unique_violation, store_error
from typing import Any, Dict, List
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def update_profile(self, user_id: int, profile_data: ProfileUpdate) -> ProfileUpdateResponse:
        """Update first/last name; omitted fields stay unchanged"""
        update_data = profile_data.model_dump(exclude_none=True)
        try:
            if update_data:
                result = self.supabase.table("users")\
                    .update(update_data)\
                    .eq("id", user_id)\
                    .execute()
            else:
                result = self.supabase.table("users")\
                    .select("id, first_name, last_name")\
                    .eq("id", user_id)\
                    .execute()
        except Exception as e:
            store_error(e, "Update profile", "Failed to update profile")
        if not result.data:
            raise HTTPException(status_code=404, detail="User not found")
        return ProfileUpdateResponse(**result.data[0])

    def delete_user_data(self, user_id: int) -> None:
        """Remove memberships, owned devices and finally the users row"""
        try:
            self.supabase.table("user_groups")\
                .delete()\
                .eq("user_id", user_id)\
                .execute()

            self.supabase.table("user_devices")\
                .delete()\
                .eq("user_id", user_id)\
                .execute()

            self.supabase.table("users")\
                .delete()\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            store_error(e, "Delete profile", "Failed to delete account")
        logger.info(f"Deleted user {user_id} with memberships and devices")

    def list_devices(self, user_id: int) -> List[UserDeviceResponse]:
        """Devices owned by the user, ordered by id"""
        try:
            result = self.supabase.table("user_devices")\
                .select("id, name, mac")\
                .eq("user_id", user_id)\
                .order("id")\
                .execute()
        except Exception as e:
            store_error(e, "List user devices", "Failed to load devices")
        return [UserDeviceResponse(**device) for device in result.data]

    def _get_owned_device(self, user_id: int, device_id: int) -> Dict[str, Any]:
        try:
            result = self.supabase.table("user_devices")\
                .select("id, user_id, name, mac")\
                .eq("id", device_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            store_error(e, "Get user device", "Failed to load device")
        if not result.data:
            raise HTTPException(status_code=404, detail="Device not found")
        device = result.data[0]
        if device["user_id"] != user_id:
            logger.info(f"User {user_id} denied access to device {device_id}")
            raise HTTPException(status_code=403, detail="Forbidden")
        return device

    def create_device(self, user_id: int, device_data: UserDeviceCreate) -> UserDeviceResponse:
        try:
            result = self.supabase.table("user_devices").insert({
                "user_id": user_id,
                "name": device_data.name,
                "mac": device_data.mac,
            }).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise HTTPException(status_code=400, detail="MAC already exists")
            store_error(e, "Create user device", "Failed to create device")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create device")
        return UserDeviceResponse(**result.data[0])

    def update_device(self, user_id: int, device_id: int, device_data: UserDeviceUpdate) -> UserDeviceResponse:
        device = self._get_owned_device(user_id, device_id)
        update_data = device_data.model_dump(exclude_none=True)
        if not update_data:
            return UserDeviceResponse(**device)
        try:
            result = self.supabase.table("user_devices")\
                .update(update_data)\
                .eq("id", device_id)\
                .execute()
        except Exception as e:
            if is_unique_violation(e):
                raise HTTPException(status_code=400, detail="MAC already exists")
            store_error(e, "Update user device", "Failed to update device")
        if not result.data:
            raise HTTPException(status_code=404, detail="Device not found")
        return UserDeviceResponse(**result.data[0])

    def delete_device(self, user_id: int, device_id: int) -> bool:
        self._get_owned_device(user_id, device_id)
        try:
            self.supabase.table("user_devices")\
                .delete()\
                .eq("id", device_id)\
                .execute()
        except Exception as e:
            store_error(e, "Delete user device", "Failed to delete device")
        return True
