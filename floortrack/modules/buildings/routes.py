from fastapi import APIRouter, Depends
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.buildings.schemas import BuildingCreate, BuildingUpdate, BuildingResponse
from floortrack.modules.buildings.service import BuildingService
from floortrack.core.dependencies import get_current_app_user, require_owner
from floortrack.core.errors import parse_id
from floortrack.core.rbac import is_owner
from floortrack.core.schemas import OkResponse
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/api/admin/buildings", tags=["buildings"])


def get_building_service(supabase: Client = Depends(get_supabase)) -> BuildingService:
    return BuildingService(supabase)


@router.get("", response_model=List[BuildingResponse])
async def list_buildings(
    user: Dict = Depends(get_current_app_user),
    service: BuildingService = Depends(get_building_service)
):
    """List buildings: all for Owner, otherwise those granted to the user's groups"""
    if is_owner(user):
        return service.list_buildings()
    return service.list_buildings(group_ids=user["group_ids"])


@router.post("", response_model=BuildingResponse)
async def create_building(
    building_data: BuildingCreate,
    user: Dict = Depends(require_owner("Only Owner can create buildings")),
    service: BuildingService = Depends(get_building_service)
):
    """Create a new building (Owner only)"""
    return service.create_building(building_data)


@router.put("/{building_id}", response_model=BuildingResponse)
async def update_building(
    building_id: str,
    building_data: BuildingUpdate,
    user: Dict = Depends(require_owner("Only Owner can Edit Building")),
    service: BuildingService = Depends(get_building_service)
):
    """Rename building (Owner only)"""
    return service.update_building(parse_id(building_id), building_data)


@router.delete("/{building_id}", response_model=OkResponse)
async def delete_building(
    building_id: str,
    user: Dict = Depends(require_owner("Only Owner can delete buildings")),
    service: BuildingService = Depends(get_building_service)
):
    """Delete building (Owner only)"""
    service.delete_building(parse_id(building_id))
    return OkResponse()
