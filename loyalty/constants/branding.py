# loyalty/constants/branding.py

DEFAULT_BUSINESS_NAME = "Loyalty Card App"
DEFAULT_PRIMARY_COLOR = "#3b82f6"
DEFAULT_SECONDARY_COLOR = "#10b981"
DEFAULT_LOGO_URL = ""
DEFAULT_WELCOME_MESSAGE = "Join our loyalty program and earn rewards!"

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"
