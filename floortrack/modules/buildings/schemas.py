from pydantic import Field

from floortrack.core.schemas import CamelModel


class BuildingCreate(CamelModel):
    name: str = Field(min_length=1)


class BuildingUpdate(CamelModel):
    name: str = Field(min_length=1)


class BuildingResponse(CamelModel):
    id: str
    name: str
