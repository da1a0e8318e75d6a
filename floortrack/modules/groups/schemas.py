from pydantic import Field

from floortrack.core.schemas import CamelModel


class GroupCreate(CamelModel):
    name: str = Field(min_length=1)


class GroupUpdate(CamelModel):
    name: str = Field(min_length=1)


class GroupResponse(CamelModel):
    id: str
    name: str
