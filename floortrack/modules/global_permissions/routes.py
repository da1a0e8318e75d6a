from fastapi import APIRouter, Depends, HTTPException, status
from floortrack.config.roles_config import ORG_ADMIN
from floortrack.database.supabase_client import get_supabase
from floortrack.modules.global_permissions.schemas import GlobalPermissionCreate, GlobalPermissionResponse
from floortrack.modules.global_permissions.service import GlobalPermissionService
from floortrack.core.dependencies import get_current_app_user, require_owner
from floortrack.core.errors import parse_id
from floortrack.core.rbac import has_role, is_owner
from floortrack.core.schemas import OkResponse
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/api/admin/global-permissions", tags=["global-permissions"])


def get_global_permission_service(supabase: Client = Depends(get_supabase)) -> GlobalPermissionService:
    return GlobalPermissionService(supabase)


@router.get("", response_model=List[GlobalPermissionResponse])
async def list_global_permissions(
    user: Dict = Depends(get_current_app_user),
    service: GlobalPermissionService = Depends(get_global_permission_service)
):
    """All grants for Owner; the grants of their own groups for Organization Admin"""
    if is_owner(user):
        return service.list_permissions()
    if has_role(user, ORG_ADMIN):
        return service.list_permissions(group_ids=user["group_ids"])
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.post("", response_model=GlobalPermissionResponse)
async def create_global_permission(
    permission_data: GlobalPermissionCreate,
    user: Dict = Depends(require_owner("Only Owner can grant permissions")),
    service: GlobalPermissionService = Depends(get_global_permission_service)
):
    """Grant a group access to a building floor (Owner only)"""
    return service.create_permission(permission_data)


@router.delete("/{permission_id}", response_model=OkResponse)
async def delete_global_permission(
    permission_id: str,
    user: Dict = Depends(require_owner("Only Owner can revoke permissions")),
    service: GlobalPermissionService = Depends(get_global_permission_service)
):
    """Revoke a grant (Owner only)"""
    service.delete_permission(parse_id(permission_id))
    return OkResponse()
