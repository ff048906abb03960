# models/user.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    email: str
    password: str


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str
    address: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_password: str = Field(..., alias="oldPassword")
    new_password: str = Field(..., alias="newPassword")


class CreateUserRequest(BaseModel):
    """Body of the admin "add user" form; the role is chosen by the admin."""
    name: str
    email: str
    password: str
    address: Optional[str] = None
    role: str
