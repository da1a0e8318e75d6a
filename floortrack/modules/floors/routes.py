from fastapi import APIRouter, Depends, HTTPException, status
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.floors.schemas import (
    FloorCreate, FloorUpdate, FloorResponse, FloorListItem,
    FloorDetailResponse, FloorBuildingResponse
)
from floortrack.modules.floors.service import FloorService
from floortrack.core.dependencies import get_current_app_user, get_current_auth_user
from floortrack.core.errors import parse_id
from floortrack.core.rbac import can_manage_building, can_manage_floor, is_owner
from floortrack.core.schemas import OkResponse
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/api", tags=["floors"])


def get_floor_service(supabase: Client = Depends(get_supabase)) -> FloorService:
    return FloorService(supabase)


# Admin endpoints
@router.get("/admin/floors", response_model=List[FloorListItem])
async def list_admin_floors(
    user: Dict = Depends(get_current_app_user),
    service: FloorService = Depends(get_floor_service)
):
    """List floors: all for Owner, otherwise floors granted directly or through their building"""
    if is_owner(user):
        return service.list_floors()
    return service.list_floors(group_ids=user["group_ids"])


@router.post("/admin/floors", response_model=FloorResponse)
async def create_floor(
    floor_data: FloorCreate,
    user: Dict = Depends(get_current_app_user),
    service: FloorService = Depends(get_floor_service),
    supabase: Client = Depends(get_supabase)
):
    """Create a floor (requires management rights on the building)"""
    if not can_manage_building(user, floor_data.building_id, supabase):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden for building")
    return service.create_floor(floor_data)


@router.put("/admin/floors/{floor_id}", response_model=FloorResponse)
async def update_floor(
    floor_id: str,
    floor_data: FloorUpdate,
    user: Dict = Depends(get_current_app_user),
    service: FloorService = Depends(get_floor_service),
    supabase: Client = Depends(get_supabase)
):
    """Update a floor (requires management rights on the floor)"""
    floor = service.get_floor(parse_id(floor_id))
    if not can_manage_floor(user, floor["id"], supabase):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return service.update_floor(floor["id"], floor_data)


@router.delete("/admin/floors/{floor_id}", response_model=OkResponse)
async def delete_floor(
    floor_id: str,
    user: Dict = Depends(get_current_app_user),
    service: FloorService = Depends(get_floor_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete a floor (requires management rights on the floor)"""
    floor = service.get_floor(parse_id(floor_id))
    if not can_manage_floor(user, floor["id"], supabase):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    service.delete_floor(floor["id"])
    return OkResponse()


# Dashboard reads
@router.get("/floors", response_model=List[FloorListItem])
async def list_floors(
    auth_user: Dict = Depends(get_current_auth_user),
    service: FloorService = Depends(get_floor_service)
):
    """All floors with their building, for the floor picker"""
    return service.list_floors()


@router.get("/floors/{floor_id}", response_model=FloorDetailResponse)
async def get_floor(
    floor_id: str,
    auth_user: Dict = Depends(get_current_auth_user),
    service: FloorService = Depends(get_floor_service)
):
    """Floor details including the stored SVG map"""
    return service.get_floor_detail(parse_id(floor_id))


@router.get("/floors/{floor_id}/building", response_model=FloorBuildingResponse)
async def get_floor_building(
    floor_id: str,
    auth_user: Dict = Depends(get_current_auth_user),
    service: FloorService = Depends(get_floor_service)
):
    return service.get_floor_building(parse_id(floor_id))
