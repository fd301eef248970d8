# loyalty/routers/__init__.py

from .auth.auth_router import router as auth_router
from .auth.activity_router import router as activity_router

from .users.user_router import router as user_router

from .customers.customer_router import router as customer_router

from .catalog.item_router import router as item_router

from .points.points_router import router as points_router

from .settings.settings_router import router as settings_router
from .settings.branding_router import router as branding_router

from .analytics.analytics_router import router as analytics_router


__all__ = [
"auth_router",
"activity_router",

"user_router",

"customer_router",

"item_router",

"points_router",

"settings_router",
"branding_router",

"analytics_router",
]
