from pydantic import Field
from typing import Optional

from floortrack.core.schemas import CamelModel, DecimalId


class FloorCreate(CamelModel):
    name: str = Field(min_length=1)
    svg_map: str = Field(min_length=1)
    building_id: DecimalId


class FloorUpdate(CamelModel):
    name: Optional[str] = None
    svg_map: Optional[str] = None


class FloorResponse(CamelModel):
    id: str
    name: str
    building_id: str


class FloorListItem(CamelModel):
    id: str
    name: str
    building_id: str
    building_name: Optional[str] = None


class FloorDetailResponse(CamelModel):
    id: str
    name: str
    svg_map: Optional[str] = None


class FloorBuildingResponse(CamelModel):
    id: str
    name: str
