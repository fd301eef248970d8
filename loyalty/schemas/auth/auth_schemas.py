# loyalty/schemas/auth/auth_schemas.py

from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class AuthTokens(BaseModel):
    access_token: str
    refresh_token: str
    token_type: Literal["bearer"] = "bearer"


class AuthUser(BaseModel):
    id: int
    username: str
    role: str

    model_config = {"from_attributes": True}


class LoginResult(BaseModel):
    auth: AuthTokens
    user: AuthUser


class RefreshResult(AuthTokens):
    role: str
