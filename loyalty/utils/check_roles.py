# loyalty/utils/check_roles.py

from fastapi import Depends, HTTPException, status

from loyalty.models.users.user_models import User
from loyalty.utils.get_user import get_current_user
from loyalty.utils.logger import get_logger

logger = get_logger("auth.guard")


def require_role(roles: list[str]):
    """Dependency factory: the current user must hold one of ``roles``."""
    allowed = {role.lower() for role in roles}

    async def role_checker(user: User = Depends(get_current_user)) -> User:
        if user.role.lower() not in allowed:
            logger.warning(
                "Role not permitted",
                extra={"user_id": user.id, "role": user.role, "allowed": sorted(allowed)},
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Permission denied",
            )
        return user

    return role_checker
