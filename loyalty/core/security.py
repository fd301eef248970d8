# loyalty/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, status
from jose import jwt, JWTError
from passlib.context import CryptContext

from loyalty.core.config import (
    JWT_ACCESS_SECRET_KEY,
    JWT_ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES,
)

ACCESS_TOKEN_TYPE = "access"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def credentials_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# =====================================================
# ACCESS TOKENS
# =====================================================
def create_access_token(
    subject: str,
    token_version: int,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a short-lived access token. ``token_version`` must match the user's
    current value for the token to be accepted, so bumping it on logout or
    deactivation revokes every token already issued.
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {
        "sub": subject,
        "token_version": token_version,
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(claims, JWT_ACCESS_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        claims = jwt.decode(token, JWT_ACCESS_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise credentials_error("Invalid or expired token")

    if claims.get("type") != ACCESS_TOKEN_TYPE:
        raise credentials_error("Invalid token type")

    return claims
