# loyalty/services/auth/auth_service.py

import secrets
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.constants.activity_codes import ActivityCode
from loyalty.core.config import ACCESS_TOKEN_EXPIRE_MINUTES, REFRESH_TOKEN_EXPIRE_DAYS
from loyalty.core.security import verify_password, create_access_token, credentials_error
from loyalty.models.users.user_models import User, RefreshToken
from loyalty.schemas.auth.auth_schemas import AuthTokens, AuthUser, LoginResult, RefreshResult
from loyalty.utils.activity_helpers import record_user_activity
from loyalty.utils.logger import get_logger

logger = get_logger("auth.service")


def _issue_tokens(db: AsyncSession, user: User) -> AuthTokens:
    """Sign an access token and stage a new refresh token row on ``db``."""
    now = datetime.now(timezone.utc)
    refresh_value = secrets.token_urlsafe(48)

    db.add(
        RefreshToken(
            user_id=user.id,
            token=refresh_value,
            expires_at=now + timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS),
        )
    )

    access_token = create_access_token(
        subject=user.username,
        token_version=user.token_version,
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return AuthTokens(access_token=access_token, refresh_token=refresh_value)


# =====================================================
# LOGIN
# =====================================================
async def login_user(db: AsyncSession, email: str, password: str) -> LoginResult:
    user = await db.scalar(select(User).where(User.username == email))

    # Same answer for unknown email and wrong password
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Invalid credentials", extra={"email": email})
        raise credentials_error("Invalid credentials")

    if not user.is_active:
        logger.warning("Inactive user login blocked", extra={"user_id": user.id})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    user.last_login = datetime.now(timezone.utc)
    tokens = _issue_tokens(db, user)
    await record_user_activity(db, user, ActivityCode.LOGIN)
    await db.commit()

    logger.info("Login successful", extra={"user_id": user.id, "role": user.role})
    return LoginResult(auth=tokens, user=AuthUser.model_validate(user))


# =====================================================
# REFRESH (rotating)
# =====================================================
async def refresh_tokens(db: AsyncSession, refresh_token_value: str) -> RefreshResult:
    stored = await db.scalar(
        select(RefreshToken).where(
            RefreshToken.token == refresh_token_value,
            RefreshToken.revoked.is_(False),
            RefreshToken.expires_at > datetime.now(timezone.utc),
        )
    )
    if not stored:
        logger.warning("Invalid refresh token presented")
        raise credentials_error("Invalid or expired refresh token")

    user = await db.get(User, stored.user_id)
    if not user or not user.is_active:
        logger.warning("Refresh blocked for inactive user", extra={"user_id": stored.user_id})
        raise credentials_error("User invalid or inactive")

    # A refresh token is single-use
    stored.revoked = True
    tokens = _issue_tokens(db, user)
    await db.commit()

    logger.info("Token refreshed", extra={"user_id": user.id})
    return RefreshResult(**tokens.model_dump(), role=user.role)


# =====================================================
# LOGOUT
# =====================================================
async def logout_user(db: AsyncSession, user: User) -> None:
    # Invalidates outstanding access tokens
    user.token_version += 1

    await db.execute(
        update(RefreshToken)
        .where(RefreshToken.user_id == user.id, RefreshToken.revoked.is_(False))
        .values(revoked=True)
    )
    await record_user_activity(db, user, ActivityCode.LOGOUT)
    await db.commit()

    logger.info("Logout successful", extra={"user_id": user.id})
