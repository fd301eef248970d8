# loyalty/services/auth/activity_service.py

from sqlalchemy import select, func, desc, asc
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.models.support.activity_models import UserActivity
from loyalty.schemas.auth.activity_schemas import (
    UserActivityOut,
    UserActivityFilters,
    UserActivityListData,
)
from loyalty.core.exceptions import AppException
from loyalty.constants.error_codes import ErrorCode
from loyalty.utils.logger import get_logger

logger = get_logger(__name__)

SORT_COLUMNS = {
    "created_at": UserActivity.created_at,
    "username": UserActivity.username_snapshot,
}


def _conditions(filters: UserActivityFilters) -> list:
    conditions = []
    if filters.user_id:
        conditions.append(UserActivity.user_id == filters.user_id)
    if filters.username:
        conditions.append(UserActivity.username_snapshot.ilike(f"%{filters.username}%"))
    if filters.search:
        conditions.append(UserActivity.message.ilike(f"%{filters.search}%"))
    if filters.date_from:
        conditions.append(UserActivity.created_at >= filters.date_from)
    if filters.date_to:
        conditions.append(UserActivity.created_at <= filters.date_to)
    return conditions


async def list_user_activities(
    *,
    db: AsyncSession,
    filters: UserActivityFilters,
) -> UserActivityListData:
    if filters.date_from and filters.date_to and filters.date_from > filters.date_to:
        raise AppException(
            400,
            "date_from must be before date_to",
            ErrorCode.VALIDATION_ERROR,
        )

    conditions = _conditions(filters)

    order = desc if filters.sort_order == "desc" else asc
    sort_column = SORT_COLUMNS[filters.sort_by]

    total = await db.scalar(select(func.count(UserActivity.id)).where(*conditions))

    activities = (
        await db.execute(
            select(UserActivity)
            .where(*conditions)
            .order_by(order(sort_column), order(UserActivity.id))
            .offset((filters.page - 1) * filters.page_size)
            .limit(filters.page_size)
        )
    ).scalars().all()

    logger.info(
        "User activities fetched",
        extra={"total": total, "page": filters.page, "page_size": filters.page_size},
    )

    return UserActivityListData(
        total=total or 0,
        items=[UserActivityOut.model_validate(a) for a in activities],
    )
