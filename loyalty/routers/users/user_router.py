from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.db import get_db
from loyalty.constants.roles import ADMIN_ONLY, UserRole
from loyalty.schemas.users.user_schemas import (
    UserCreateSchema,
    UserDetailSchema,
    UserListData,
)
from loyalty.services.users.user_service import (
    create_user,
    list_users,
    deactivate_user,
)
from loyalty.utils.check_roles import require_role
from loyalty.utils.response import APIResponse, success_response
from loyalty.utils.logger import get_logger

router = APIRouter(prefix="/users", tags=["Users"])
logger = get_logger(__name__)


@router.post("/", response_model=APIResponse[UserDetailSchema])
async def create_user_api(
    payload: UserCreateSchema,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Create user", extra={"email": payload.email, "role": payload.role.value})
    user = await create_user(db, payload, admin)
    return success_response("User created successfully", user)


@router.get("/", response_model=APIResponse[UserListData])
async def list_users_api(
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_role(ADMIN_ONLY)),

    role: Optional[UserRole] = Query(None),
    is_active: Optional[bool] = Query(None),

    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    data = await list_users(
        db,
        role=role.value if role else None,
        is_active=is_active,
        page=page,
        page_size=page_size,
    )
    return success_response("Users fetched successfully", data)


@router.delete("/{user_id}", response_model=APIResponse[UserDetailSchema])
async def deactivate_user_api(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Deactivate user", extra={"user_id": user_id})
    user = await deactivate_user(db, user_id, admin)
    return success_response("User deactivated successfully", user)
