from pydantic import Field
from floortrack.core.schemas import CamelModel
from floortrack.modules.auth.schemas import AppUserResponse
from typing import Optional


class ProfileResponse(CamelModel):
    user: AppUserResponse


class ProfileUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ProfileUpdateResponse(CamelModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UserDeviceCreate(CamelModel):
    name: str = Field(min_length=1)
    mac: str = Field(min_length=1)


class UserDeviceUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    mac: Optional[str] = Field(None, min_length=1)


class UserDeviceResponse(CamelModel):
    id: str
    name: str
    mac: str
