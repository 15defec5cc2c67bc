from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

RoleName = Literal["user", "admin", "superadmin"]

# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


def check_password_bytes(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_BYTES)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return check_password_bytes(v)


class LoginRequest(BaseModel):
    username: str
    password: str


# super-admin creates an account with a role
class AdminUserCreate(UserCreate):
    role: RoleName = "user"


class RoleUpdate(BaseModel):
    role: RoleName


class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=1, max_length=64)
    password: Optional[str] = Field(None, min_length=1, max_length=MAX_PASSWORD_BYTES)
    is_admin: Optional[bool] = None
    is_super_admin: Optional[bool] = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        return check_password_bytes(v)


class UserResponse(BaseModel):
    id: int
    username: str
    is_admin: bool
    is_super_admin: bool

    class Config:
        from_attributes = True
