from pydantic import EmailStr, Field
from typing import Optional, List

from floortrack.core.schemas import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(CamelModel):
    message: str = "User logged in successfully"
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterResponse(CamelModel):
    user_id: str
    email: str
    message: str


class ResetPasswordRequest(CamelModel):
    email: EmailStr


class MessageResponse(CamelModel):
    message: str


class RoleRef(CamelModel):
    id: str
    name: str


class GroupRef(CamelModel):
    id: str
    name: str


class AppUserResponse(CamelModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[RoleRef] = None
    groups: List[GroupRef] = []


class MeResponse(CamelModel):
    auth_uid: str
    user: Optional[AppUserResponse] = None
