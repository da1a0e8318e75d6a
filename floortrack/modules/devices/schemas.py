from pydantic import Field
from typing import Optional
from datetime import datetime

from floortrack.core.schemas import CamelModel, DecimalId


class DeviceCreate(CamelModel):
    mac: str = Field(min_length=1)
    ap_id: DecimalId


class DeviceUpdate(CamelModel):
    mac: Optional[str] = None
    ap_id: Optional[DecimalId] = None


class DeviceResponse(CamelModel):
    id: str
    mac: str
    ap_id: str
    floor_id: Optional[str] = None
    created_at: Optional[datetime] = None
