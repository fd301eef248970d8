# loyalty/routers/auth/auth_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.db import get_db
from loyalty.schemas.auth.auth_schemas import (
    LoginRequest,
    RefreshRequest,
    LoginResult,
    RefreshResult,
)
from loyalty.services.auth.auth_service import login_user, refresh_tokens, logout_user
from loyalty.utils.get_user import get_current_user
from loyalty.utils.response import APIResponse, success_response
from loyalty.utils.logger import get_logger

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = get_logger("auth.router")


@router.post("/login", response_model=APIResponse[LoginResult])
async def login_api(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    logger.info("Login attempt", extra={"email": payload.email})
    result = await login_user(db, payload.email, payload.password)
    return success_response("Login successful", result)


@router.post("/refresh", response_model=APIResponse[RefreshResult])
async def refresh_api(payload: RefreshRequest, db: AsyncSession = Depends(get_db)):
    result = await refresh_tokens(db, payload.refresh_token)
    return success_response("Token refreshed", result)


@router.post("/logout", response_model=APIResponse[None])
async def logout_api(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    await logout_user(db, current_user)
    return success_response("Logged out successfully")
