from fastapi import APIRouter, Depends, Response
from floortrack.config import settings
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.auth.service import AuthService
from floortrack.modules.profile.schemas import (
    ProfileResponse, ProfileUpdate, ProfileUpdateResponse,
    UserDeviceCreate, UserDeviceUpdate, UserDeviceResponse
)
from floortrack.modules.profile.service import ProfileService
from floortrack.core.dependencies import get_auth_service, get_current_app_user, get_current_auth_user
from floortrack.core.errors import parse_id
from floortrack.core.rbac import get_app_user
from floortrack.core.schemas import OkResponse
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/api/profile", tags=["profile"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("", response_model=ProfileResponse)
async def get_profile(user: Dict = Depends(get_current_app_user)):
    """Current user with role and groups"""
    return ProfileResponse(user=user)


@router.put("", response_model=ProfileUpdateResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    user: Dict = Depends(get_current_app_user),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_profile(user["id"], profile_data)


@router.delete("", response_model=OkResponse)
async def delete_profile(
    response: Response,
    auth_user: Dict = Depends(get_current_auth_user),
    supabase: Client = Depends(get_supabase),
    auth_service: AuthService = Depends(get_auth_service),
    service: ProfileService = Depends(get_profile_service)
):
    """
    Delete the caller's account: app data first, then the identity account.
    The identity account is deleted even when no users row exists.
    """
    user = get_app_user(auth_user["id"], supabase)
    if user:
        service.delete_user_data(user["id"])
    auth_service.delete_account(auth_user["id"])
    response.delete_cookie(settings.auth_cookie_name)
    return OkResponse()


@router.get("/devices", response_model=List[UserDeviceResponse])
async def list_devices(
    user: Dict = Depends(get_current_app_user),
    service: ProfileService = Depends(get_profile_service)
):
    return service.list_devices(user["id"])


@router.post("/devices", response_model=UserDeviceResponse)
async def create_device(
    device_data: UserDeviceCreate,
    user: Dict = Depends(get_current_app_user),
    service: ProfileService = Depends(get_profile_service)
):
    return service.create_device(user["id"], device_data)


@router.put("/devices/{device_id}", response_model=UserDeviceResponse)
async def update_device(
    device_id: str,
    device_data: UserDeviceUpdate,
    user: Dict = Depends(get_current_app_user),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_device(user["id"], parse_id(device_id), device_data)


@router.delete("/devices/{device_id}", response_model=OkResponse)
async def delete_device(
    device_id: str,
    user: Dict = Depends(get_current_app_user),
    service: ProfileService = Depends(get_profile_service)
):
    service.delete_device(user["id"], parse_id(device_id))
    return OkResponse()
