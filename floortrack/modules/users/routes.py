from fastapi import APIRouter, Depends
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.users.schemas import AssignUserRequest, PendingUserResponse
from floortrack.modules.users.service import UserService
from floortrack.core.dependencies import require_owner
from floortrack.core.errors import parse_id
from floortrack.core.schemas import OkResponse
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/api/admin/pending-users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("", response_model=List[PendingUserResponse])
async def list_pending_users(
    user: Dict = Depends(require_owner("Only Owner can view pending users")),
    service: UserService = Depends(get_user_service)
):
    return service.list_pending_users()


@router.post("/{user_id}/assign", response_model=OkResponse)
async def assign_user(
    user_id: str,
    assign_data: AssignUserRequest,
    user: Dict = Depends(require_owner("Only Owner can assign users")),
    service: UserService = Depends(get_user_service)
):
    """Give a pending user a role and their groups"""
    service.assign_user(parse_id(user_id), assign_data)
    return OkResponse()
