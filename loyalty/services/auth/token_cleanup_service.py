from datetime import datetime, timezone

from sqlalchemy import delete, or_
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.models.users.user_models import RefreshToken
from loyalty.utils.logger import get_logger

logger = get_logger(__name__)


async def purge_stale_refresh_tokens(db: AsyncSession) -> int:
    result = await db.execute(
        delete(RefreshToken).where(
            or_(
                RefreshToken.revoked.is_(True),
                RefreshToken.expires_at <= datetime.now(timezone.utc),
            )
        )
    )
    await db.commit()

    purged = result.rowcount or 0
    logger.info("Stale refresh tokens purged", extra={"purged": purged})
    return purged
