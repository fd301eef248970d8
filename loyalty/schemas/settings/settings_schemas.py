# loyalty/schemas/settings/settings_schemas.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from loyalty.constants.branding import HEX_COLOR_PATTERN


# =========================
# SETTINGS
# =========================
class SettingsOut(BaseModel):
    points_for_reward: int
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SettingsUpdate(BaseModel):
    points_for_reward: int = Field(ge=1)


# =========================
# BRANDING
# =========================
class BrandingOut(BaseModel):
    business_name: str
    primary_color: str
    secondary_color: str
    logo_url: str
    welcome_message: str
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BrandingUpdate(BaseModel):
    business_name: str = Field(min_length=1, max_length=255)
    primary_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    secondary_color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    logo_url: Optional[str] = Field(None, max_length=1000)
    welcome_message: Optional[str] = Field(None, max_length=500)
