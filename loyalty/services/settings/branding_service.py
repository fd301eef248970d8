# loyalty/services/settings/branding_service.py

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.constants.activity_codes import ActivityCode
from loyalty.constants.branding import (
    DEFAULT_BUSINESS_NAME,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    DEFAULT_LOGO_URL,
    DEFAULT_WELCOME_MESSAGE,
)
from loyalty.models.settings.branding_models import Branding
from loyalty.schemas.settings.settings_schemas import BrandingOut, BrandingUpdate
from loyalty.utils.activity_helpers import record_user_activity
from loyalty.utils.upsert import insert_if_missing
from loyalty.utils.logger import get_logger

logger = get_logger(__name__)

BRANDING_ROW_ID = 1

DEFAULT_BRANDING = {
    "business_name": DEFAULT_BUSINESS_NAME,
    "primary_color": DEFAULT_PRIMARY_COLOR,
    "secondary_color": DEFAULT_SECONDARY_COLOR,
    "logo_url": DEFAULT_LOGO_URL,
    "welcome_message": DEFAULT_WELCOME_MESSAGE,
}


async def get_or_create_branding(db: AsyncSession) -> Branding:
    await insert_if_missing(
        db,
        Branding,
        index_elements=["id"],
        values={"id": BRANDING_ROW_ID, **DEFAULT_BRANDING},
    )
    return (
        await db.execute(
            select(Branding)
            .where(Branding.id == BRANDING_ROW_ID)
            .execution_options(populate_existing=True)
        )
    ).scalar_one()


# =========================
# GET
# =========================
async def get_branding(db: AsyncSession) -> BrandingOut:
    branding = await get_or_create_branding(db)
    await db.commit()
    return BrandingOut.model_validate(branding)


# =========================
# UPDATE
# =========================
async def update_branding(db: AsyncSession, payload: BrandingUpdate, user) -> BrandingOut:
    branding = await get_or_create_branding(db)

    # Omitted or empty fields fall back to the defaults
    new_values = {
        field: getattr(payload, field) or default
        for field, default in DEFAULT_BRANDING.items()
    }

    changes = [
        field
        for field, value in new_values.items()
        if getattr(branding, field) != value
    ]

    for field, value in new_values.items():
        setattr(branding, field, value)

    await record_user_activity(
        db,
        user,
        ActivityCode.UPDATE_BRANDING,
        changes=", ".join(changes) or "no changes",
    )

    await db.commit()
    await db.refresh(branding)

    logger.info("Branding updated", extra={"changed_fields": changes})
    return BrandingOut.model_validate(branding)
