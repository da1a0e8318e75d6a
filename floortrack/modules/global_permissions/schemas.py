from typing import Optional

from floortrack.core.schemas import CamelModel, DecimalId


class GlobalPermissionCreate(CamelModel):
    group_id: DecimalId
    building_id: DecimalId
    floor_id: DecimalId


class GlobalPermissionResponse(CamelModel):
    id: str
    group_id: str
    building_id: str
    floor_id: str
    group_name: Optional[str] = None
    building_name: Optional[str] = None
    floor_name: Optional[str] = None
