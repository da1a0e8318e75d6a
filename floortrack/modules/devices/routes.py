from fastapi import APIRouter, Depends, HTTPException, status
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.aps.service import APService
from floortrack.modules.devices.schemas import DeviceCreate, DeviceUpdate, DeviceResponse
from floortrack.modules.devices.service import DeviceService
from floortrack.core.dependencies import get_current_app_user
from floortrack.core.errors import parse_id
from floortrack.core.rbac import can_manage_floor, get_manageable_floor_ids
from floortrack.core.schemas import OkResponse
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/api", tags=["devices"])


def get_device_service(supabase: Client = Depends(get_supabase)) -> DeviceService:
    return DeviceService(supabase)


def get_ap_service(supabase: Client = Depends(get_supabase)) -> APService:
    return APService(supabase)


def _device_floor_id(device: Dict):
    return (device.get("aps") or {}).get("floor_id")


@router.get("/admin/devices", response_model=List[DeviceResponse])
async def list_devices(
    user: Dict = Depends(get_current_app_user),
    service: DeviceService = Depends(get_device_service),
    supabase: Client = Depends(get_supabase)
):
    """List client devices attached to APs on the floors the user manages"""
    return service.list_devices(floor_ids=get_manageable_floor_ids(user, supabase))


@router.post("/admin/devices", response_model=DeviceResponse)
async def create_device(
    device_data: DeviceCreate,
    user: Dict = Depends(get_current_app_user),
    service: DeviceService = Depends(get_device_service),
    ap_service: APService = Depends(get_ap_service),
    supabase: Client = Depends(get_supabase)
):
    """Attach a device to an AP (requires management rights on the AP's floor)"""
    ap = ap_service.get_ap(int(device_data.ap_id))
    if not can_manage_floor(user, ap["floor_id"], supabase):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return service.create_device(device_data)


@router.post("/clients", response_model=DeviceResponse)
async def ingest_client(
    device_data: DeviceCreate,
    user: Dict = Depends(get_current_app_user),
    service: DeviceService = Depends(get_device_service),
    ap_service: APService = Depends(get_ap_service),
    supabase: Client = Depends(get_supabase)
):
    """Record a client device seen on an AP (same rules as the admin create)"""
    return await create_device(device_data, user, service, ap_service, supabase)


@router.put("/admin/devices/{device_id}", response_model=DeviceResponse)
async def update_device(
    device_id: str,
    device_data: DeviceUpdate,
    user: Dict = Depends(get_current_app_user),
    service: DeviceService = Depends(get_device_service),
    ap_service: APService = Depends(get_ap_service),
    supabase: Client = Depends(get_supabase)
):
    """Update a device; moving it needs rights on both the current and the target floor"""
    existing = service.get_device(parse_id(device_id))
    if not can_manage_floor(user, _device_floor_id(existing), supabase):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    if device_data.ap_id is not None:
        target_ap = ap_service.get_ap(int(device_data.ap_id))
        if not can_manage_floor(user, target_ap["floor_id"], supabase):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden for target floor")

    return service.update_device(existing["id"], device_data)


@router.delete("/admin/devices/{device_id}", response_model=OkResponse)
async def delete_device(
    device_id: str,
    user: Dict = Depends(get_current_app_user),
    service: DeviceService = Depends(get_device_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete a device (requires management rights on its floor)"""
    device = service.get_device(parse_id(device_id))
    if not can_manage_floor(user, _device_floor_id(device), supabase):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    service.delete_device(device["id"])
    return OkResponse()
