from fastapi import APIRouter, Depends, HTTPException, status
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.aps.schemas import APCreate, APUpdate, APResponse, APListItem
from floortrack.modules.aps.service import APService
from floortrack.core.dependencies import get_current_app_user
from floortrack.core.errors import parse_id
from floortrack.core.rbac import can_manage_floor, get_manageable_floor_ids
from floortrack.core.schemas import OkResponse
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/api/admin/aps", tags=["aps"])


def get_ap_service(supabase: Client = Depends(get_supabase)) -> APService:
    return APService(supabase)


@router.get("", response_model=List[APListItem])
async def list_aps(
    user: Dict = Depends(get_current_app_user),
    service: APService = Depends(get_ap_service),
    supabase: Client = Depends(get_supabase)
):
    """List APs on the floors the user manages"""
    return service.list_aps(floor_ids=get_manageable_floor_ids(user, supabase))


@router.post("", response_model=APResponse)
async def create_ap(
    ap_data: APCreate,
    user: Dict = Depends(get_current_app_user),
    service: APService = Depends(get_ap_service),
    supabase: Client = Depends(get_supabase)
):
    """Create an AP (requires management rights on the floor)"""
    if not can_manage_floor(user, ap_data.floor_id, supabase):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden for floor")
    return service.create_ap(ap_data)


@router.put("/{ap_id}", response_model=APResponse)
async def update_ap(
    ap_id: str,
    ap_data: APUpdate,
    user: Dict = Depends(get_current_app_user),
    service: APService = Depends(get_ap_service),
    supabase: Client = Depends(get_supabase)
):
    """Update an AP (requires management rights on its floor)"""
    ap = service.get_ap(parse_id(ap_id))
    if not can_manage_floor(user, ap["floor_id"], supabase):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return service.update_ap(ap["id"], ap_data)


@router.delete("/{ap_id}", response_model=OkResponse)
async def delete_ap(
    ap_id: str,
    user: Dict = Depends(get_current_app_user),
    service: APService = Depends(get_ap_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete an AP (requires management rights on its floor)"""
    ap = service.get_ap(parse_id(ap_id))
    if not can_manage_floor(user, ap["floor_id"], supabase):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    service.delete_ap(ap["id"])
    return OkResponse()
