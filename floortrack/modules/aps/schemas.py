from pydantic import Field
from typing import Optional

from floortrack.core.schemas import CamelModel, DecimalId


class APCreate(CamelModel):
    name: str = Field(min_length=1)
    cx: float
    cy: float
    floor_id: DecimalId


class APUpdate(CamelModel):
    name: Optional[str] = None
    cx: Optional[float] = None
    cy: Optional[float] = None


class APResponse(CamelModel):
    id: str
    name: str


class APListItem(CamelModel):
    id: str
    name: str
    cx: float
    cy: float
    floor_id: str
    building_id: str
