# loyalty/utils/get_user.py

from typing import Optional

from fastapi import Depends, HTTPException, Header, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.db import get_db
from loyalty.core.security import decode_access_token, credentials_error
from loyalty.models.users.user_models import User
from loyalty.utils.logger import get_logger

logger = get_logger("auth.guard")

BEARER_PREFIX = "Bearer "


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the staff user behind the bearer token, or fail with 401/403."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        logger.warning("Missing bearer token", extra={"path": request.url.path})
        raise credentials_error("Invalid authorization header")

    claims = decode_access_token(authorization[len(BEARER_PREFIX):].strip())

    user = await db.scalar(select(User).where(User.username == claims.get("sub")))
    if not user:
        logger.warning("Token user not found", extra={"username": claims.get("sub")})
        raise credentials_error("User not found")

    if not user.is_active:
        logger.warning("Inactive user access blocked", extra={"user_id": user.id})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    if user.token_version != claims.get("token_version"):
        logger.warning("Token version mismatch", extra={"user_id": user.id})
        raise credentials_error("Session expired")

    request.state.user = user
    return user
