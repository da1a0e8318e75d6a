from fastapi import APIRouter, Depends
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.roles.schemas import RoleResponse
from floortrack.modules.roles.service import RoleService
from floortrack.core.dependencies import get_current_app_user
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/api/admin/roles", tags=["roles"])


def get_role_service(supabase: Client = Depends(get_supabase)) -> RoleService:
    return RoleService(supabase)


@router.get("", response_model=List[RoleResponse])
async def list_roles(
    user: Dict = Depends(get_current_app_user),
    service: RoleService = Depends(get_role_service)
):
    """List roles for dropdowns"""
    return service.list_roles()
