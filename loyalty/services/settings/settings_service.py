# loyalty/services/settings/settings_service.py

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.config import DEFAULT_POINTS_FOR_REWARD
from loyalty.core.exceptions import AppException
from loyalty.constants.error_codes import ErrorCode
from loyalty.constants.activity_codes import ActivityCode
from loyalty.models.settings.settings_models import Settings
from loyalty.schemas.settings.settings_schemas import SettingsOut, SettingsUpdate
from loyalty.utils.activity_helpers import record_user_activity
from loyalty.utils.upsert import insert_if_missing
from loyalty.utils.logger import get_logger

logger = get_logger(__name__)

SETTINGS_ROW_ID = 1


async def get_or_create_settings(db: AsyncSession, *, for_update: bool = False) -> Settings:
    """
    Fetch the settings row, seeding it with defaults on first access.
    Never cached: callers always see the threshold as currently stored.
    """
    await insert_if_missing(
        db,
        Settings,
        index_elements=["id"],
        values={
            "id": SETTINGS_ROW_ID,
            "points_for_reward": DEFAULT_POINTS_FOR_REWARD,
        },
    )

    stmt = (
        select(Settings)
        .where(Settings.id == SETTINGS_ROW_ID)
        .execution_options(populate_existing=True)
    )
    if for_update:
        stmt = stmt.with_for_update()

    return (await db.execute(stmt)).scalar_one()


# =========================
# GET
# =========================
async def get_settings(db: AsyncSession) -> SettingsOut:
    settings = await get_or_create_settings(db)
    await db.commit()
    return SettingsOut.model_validate(settings)


# =========================
# UPDATE
# =========================
async def update_settings(db: AsyncSession, payload: SettingsUpdate, user) -> SettingsOut:
    settings = await get_or_create_settings(db, for_update=True)

    if settings.points_for_reward == payload.points_for_reward:
        raise AppException(
            400,
            "No changes detected",
            ErrorCode.VALIDATION_ERROR,
        )

    changes = f"points_for_reward: {settings.points_for_reward} → {payload.points_for_reward}"
    settings.points_for_reward = payload.points_for_reward

    await record_user_activity(
        db,
        user,
        ActivityCode.UPDATE_SETTINGS,
        changes=changes,
    )

    await db.commit()
    await db.refresh(settings)

    logger.info("Settings updated", extra={"points_for_reward": settings.points_for_reward})
    return SettingsOut.model_validate(settings)
