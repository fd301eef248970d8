from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime

from loyalty.constants.roles import UserRole


# =========================
# CREATE
# =========================
class UserCreateSchema(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    role: UserRole = UserRole.STAFF


# =========================
# RESPONSE SCHEMAS
# =========================
class UserDetailSchema(BaseModel):
    id: int
    username: str
    role: str
    is_active: bool
    last_login: Optional[datetime]
    created_at: datetime
    created_by_admin_id: Optional[int]

    model_config = {"from_attributes": True}


class UserListData(BaseModel):
    total: int
    items: List[UserDetailSchema]
