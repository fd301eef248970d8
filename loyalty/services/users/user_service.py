from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from loyalty.models.users.user_models import User
from loyalty.schemas.users.user_schemas import (
    UserCreateSchema,
    UserDetailSchema,
    UserListData,
)
from loyalty.core.security import hash_password
from loyalty.utils.activity_helpers import record_user_activity
from loyalty.constants.activity_codes import ActivityCode
from loyalty.core.exceptions import AppException, NotFoundException
from loyalty.constants.error_codes import ErrorCode
from loyalty.utils.logger import get_logger

logger = get_logger(__name__)


# =========================
# CREATE USER
# =========================
async def create_user(db: AsyncSession, payload: UserCreateSchema, admin: User) -> UserDetailSchema:
    exists = await db.scalar(select(User.id).where(User.username == payload.email))
    if exists:
        raise AppException(400, "User already exists", ErrorCode.USER_EMAIL_EXISTS)

    user = User(
        username=payload.email,
        password_hash=hash_password(payload.password),
        role=payload.role.value,
        created_by_admin_id=admin.id,
    )

    db.add(user)
    await db.flush()

    await record_user_activity(
        db,
        admin,
        ActivityCode.CREATE_USER,
        target_email=user.username,
        target_role=user.role.capitalize(),
    )

    await db.commit()
    await db.refresh(user)

    logger.info("User created", extra={"user_id": user.id})
    return UserDetailSchema.model_validate(user)


# =========================
# LIST USERS
# =========================
async def list_users(
    db: AsyncSession,
    *,
    role: str | None,
    is_active: bool | None,
    page: int,
    page_size: int,
) -> UserListData:
    base_stmt = select(User)

    if role:
        base_stmt = base_stmt.where(User.role == role)

    if is_active is not None:
        base_stmt = base_stmt.where(User.is_active == is_active)

    total = await db.scalar(
        select(func.count()).select_from(base_stmt.subquery())
    )

    stmt = (
        base_stmt
        .order_by(User.created_at.desc(), User.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    users = (await db.execute(stmt)).scalars().all()

    return UserListData(
        total=total or 0,
        items=[UserDetailSchema.model_validate(u) for u in users],
    )


# =========================
# DEACTIVATE USER
# =========================
async def deactivate_user(db: AsyncSession, user_id: int, admin: User) -> UserDetailSchema:
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundException("User not found", ErrorCode.USER_NOT_FOUND)

    if not user.is_active:
        raise AppException(400, "User is already inactive", ErrorCode.USER_ALREADY_INACTIVE)

    if user.id == admin.id:
        raise AppException(400, "You cannot deactivate yourself", ErrorCode.VALIDATION_ERROR)

    user.is_active = False
    # Invalidates any access token already issued
    user.token_version += 1

    await record_user_activity(
        db,
        admin,
        ActivityCode.DEACTIVATE_USER,
        target_email=user.username,
    )

    await db.commit()
    await db.refresh(user)

    logger.info("User deactivated", extra={"user_id": user.id})
    return UserDetailSchema.model_validate(user)
