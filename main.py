# main.py
import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import IntegrityError

from loyalty.routers import (
    auth_router,
    activity_router,
    user_router,
    customer_router,
    item_router,
    points_router,
    settings_router,
    branding_router,
    analytics_router,
)

from loyalty.core.config import APP_ENV
from loyalty.core.db import init_models
from loyalty.core.scheduler import scheduler
from loyalty.core.exceptions import AppException
from loyalty.core.logging import setup_logging
from loyalty.middleware.request_logging import request_logging_middleware
from loyalty.core.error_handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    integrity_error_handler,
    unhandled_exception_handler,
)

# ------------------------------------------------------------------------------
# ENV CONFIG
# ------------------------------------------------------------------------------
APP_NAME = "Loyalty Card API"
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
ALLOWED_ORIGINS = os.getenv("CORS_ORIGINS", "").split(",")

# ------------------------------------------------------------------------------
# LOGGING
# ------------------------------------------------------------------------------
setup_logging()
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# LIFESPAN
# ------------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application")

    if APP_ENV == "development":
        await init_models()
        logger.info("Database models initialized (development)")
    else:
        logger.info("Production mode: init_models() skipped")

    if os.getenv("ENABLE_SCHEDULER", "true").lower() == "true":
        scheduler.start()
        logger.info("Scheduler started")
    else:
        logger.info("Scheduler disabled")

    yield

    logger.info("Shutting down application")
    if scheduler.running:
        scheduler.shutdown()

# ------------------------------------------------------------------------------
# APP INIT
# ------------------------------------------------------------------------------
app = FastAPI(
    title=APP_NAME,
    description="Backend API for loyalty cards, point accrual and rewards",
    version=APP_VERSION,
    docs_url="/docs" if APP_ENV != "production" else None,
    redoc_url=None,
    lifespan=lifespan,
)

# ------------------------------------------------------------------------------
# EXCEPTION HANDLERS
# ------------------------------------------------------------------------------
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# ------------------------------------------------------------------------------
# MIDDLEWARE
# ------------------------------------------------------------------------------
app.middleware("http")(request_logging_middleware)

origins = [o.strip() for o in ALLOWED_ORIGINS if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------------------
# HEALTH CHECK
# ------------------------------------------------------------------------------
@app.get("/", tags=["Health"])
async def health_check():
    return {
        "status": "ok",
        "service": "loyalty-card-api",
        "environment": APP_ENV,
        "version": APP_VERSION,
    }

# ------------------------------------------------------------------------------
# ROUTERS
# ------------------------------------------------------------------------------
app.include_router(auth_router)
app.include_router(user_router)
app.include_router(activity_router)
app.include_router(customer_router)
app.include_router(item_router)
app.include_router(points_router)
app.include_router(settings_router)
app.include_router(branding_router)
app.include_router(analytics_router)
