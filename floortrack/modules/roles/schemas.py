from floortrack.core.schemas import CamelModel


class RoleResponse(CamelModel):
    id: str
    name: str
