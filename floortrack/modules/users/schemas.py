from pydantic import Field
from floortrack.core.schemas import CamelModel, DecimalId
from typing import List, Optional


class PendingUserResponse(CamelModel):
    id: str
    email: str
    created_at: Optional[str] = None


class AssignUserRequest(CamelModel):
    role_id: DecimalId
    group_ids: List[DecimalId] = Field(..., min_length=1)
