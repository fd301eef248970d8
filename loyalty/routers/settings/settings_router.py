from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.db import get_db
from loyalty.constants.roles import ALL_ROLES, ADMIN_ONLY
from loyalty.schemas.settings.settings_schemas import SettingsOut, SettingsUpdate
from loyalty.services.settings.settings_service import get_settings, update_settings
from loyalty.utils.check_roles import require_role
from loyalty.utils.response import APIResponse, success_response
from loyalty.utils.logger import get_logger

router = APIRouter(prefix="/settings", tags=["Settings"])
logger = get_logger(__name__)


@router.get("/", response_model=APIResponse[SettingsOut])
async def get_settings_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ALL_ROLES)),
):
    settings = await get_settings(db)
    return success_response("Settings fetched successfully", settings)


@router.put("/", response_model=APIResponse[SettingsOut])
async def update_settings_api(
    payload: SettingsUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Update settings", extra={"points_for_reward": payload.points_for_reward})
    settings = await update_settings(db, payload, user)
    return success_response("Settings updated successfully", settings)
