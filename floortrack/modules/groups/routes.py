from fastapi import APIRouter, Depends
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.groups.schemas import GroupCreate, GroupUpdate, GroupResponse
from floortrack.modules.groups.service import GroupService
from floortrack.core.dependencies import get_current_app_user, require_owner
from floortrack.core.errors import parse_id
from floortrack.core.schemas import OkResponse
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/api/admin/groups", tags=["groups"])


def get_group_service(supabase: Client = Depends(get_supabase)) -> GroupService:
    return GroupService(supabase)


@router.get("", response_model=List[GroupResponse])
async def list_groups(
    user: Dict = Depends(get_current_app_user),
    service: GroupService = Depends(get_group_service)
):
    """List groups (for assignment dropdowns)"""
    return service.list_groups()


@router.post("", response_model=GroupResponse)
async def create_group(
    group_data: GroupCreate,
    user: Dict = Depends(require_owner("Only Owner can manage groups")),
    service: GroupService = Depends(get_group_service)
):
    return service.create_group(group_data)


@router.put("/{group_id}", response_model=GroupResponse)
async def update_group(
    group_id: str,
    group_data: GroupUpdate,
    user: Dict = Depends(require_owner("Only Owner can manage groups")),
    service: GroupService = Depends(get_group_service)
):
    return service.update_group(parse_id(group_id), group_data)


@router.delete("/{group_id}", response_model=OkResponse)
async def delete_group(
    group_id: str,
    user: Dict = Depends(require_owner("Only Owner can manage groups")),
    service: GroupService = Depends(get_group_service)
):
    """Delete group with its memberships and grants"""
    service.delete_group(parse_id(group_id))
    return OkResponse()
