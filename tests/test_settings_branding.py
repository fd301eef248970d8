import pytest

from loyalty.constants.branding import DEFAULT_BUSINESS_NAME, DEFAULT_PRIMARY_COLOR
from loyalty.constants.error_codes import ErrorCode
from loyalty.core.exceptions import AppException
from loyalty.schemas.settings.settings_schemas import SettingsUpdate, BrandingUpdate
from loyalty.services.settings.settings_service import get_settings, update_settings
from loyalty.services.settings.branding_service import get_branding, update_branding


async def test_settings_seeded_with_default_threshold(db):
    settings = await get_settings(db)
    assert settings.points_for_reward == 10


async def test_update_threshold(db, admin_user):
    updated = await update_settings(db, SettingsUpdate(points_for_reward=6), admin_user)
    assert updated.points_for_reward == 6
    assert (await get_settings(db)).points_for_reward == 6


async def test_update_threshold_to_same_value_is_rejected(db, admin_user):
    with pytest.raises(AppException) as exc:
        await update_settings(db, SettingsUpdate(points_for_reward=10), admin_user)
    assert exc.value.error_code == ErrorCode.VALIDATION_ERROR


def test_threshold_must_be_positive():
    with pytest.raises(ValueError):
        SettingsUpdate(points_for_reward=0)


async def test_branding_defaults(db):
    branding = await get_branding(db)
    assert branding.business_name == DEFAULT_BUSINESS_NAME
    assert branding.primary_color == DEFAULT_PRIMARY_COLOR


async def test_branding_update_falls_back_to_defaults(db, admin_user):
    updated = await update_branding(
        db,
        BrandingUpdate(business_name="Bean There", secondary_color="#112233"),
        admin_user,
    )

    assert updated.business_name == "Bean There"
    assert updated.secondary_color == "#112233"
    assert updated.primary_color == DEFAULT_PRIMARY_COLOR


def test_branding_colors_must_be_hex():
    with pytest.raises(ValueError):
        BrandingUpdate(business_name="X", primary_color="blue")
