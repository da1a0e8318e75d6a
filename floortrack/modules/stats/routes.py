from fastapi import APIRouter, Depends, HTTPException, Query
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.stats.schemas import DevicesByAPResponse, TotalDevicesResponse, TotalAPsResponse
from floortrack.modules.stats.service import StatsService
from floortrack.core.dependencies import get_current_auth_user
from floortrack.core.errors import parse_id
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/api/stats", tags=["stats"])


def get_stats_service(supabase: Client = Depends(get_supabase)) -> StatsService:
    return StatsService(supabase)


@router.get("/devices-by-ap", response_model=DevicesByAPResponse)
async def devices_by_ap(
    floor_id: Optional[str] = Query(None, alias="floorId"),
    auth_user: Dict = Depends(get_current_auth_user),
    service: StatsService = Depends(get_stats_service)
):
    """Per-AP device counts for one floor, ordered by AP id"""
    if not floor_id:
        raise HTTPException(status_code=400, detail="floorId query param is required")
    return service.devices_by_ap(parse_id(floor_id))


@router.get("/total-devices", response_model=TotalDevicesResponse)
async def total_devices(
    auth_user: Dict = Depends(get_current_auth_user),
    service: StatsService = Depends(get_stats_service)
):
    return TotalDevicesResponse(total_devices=service.total_devices())


@router.get("/total-aps", response_model=TotalAPsResponse)
async def total_aps(
    auth_user: Dict = Depends(get_current_auth_user),
    service: StatsService = Depends(get_stats_service)
):
    return TotalAPsResponse(total_aps=service.total_aps())
