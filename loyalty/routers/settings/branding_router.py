from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.db import get_db
from loyalty.constants.roles import ADMIN_ONLY
from loyalty.schemas.settings.settings_schemas import BrandingOut, BrandingUpdate
from loyalty.services.settings.branding_service import get_branding, update_branding
from loyalty.utils.check_roles import require_role
from loyalty.utils.response import APIResponse, success_response
from loyalty.utils.logger import get_logger

router = APIRouter(prefix="/branding", tags=["Branding"])
logger = get_logger(__name__)


@router.get("/", response_model=APIResponse[BrandingOut])
async def get_branding_api(db: AsyncSession = Depends(get_db)):
    branding = await get_branding(db)
    return success_response("Branding fetched successfully", branding)


@router.put("/", response_model=APIResponse[BrandingOut])
async def update_branding_api(
    payload: BrandingUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Update branding", extra={"business_name": payload.business_name})
    branding = await update_branding(db, payload, user)
    return success_response("Branding updated successfully", branding)
