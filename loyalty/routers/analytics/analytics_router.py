from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.db import get_db
from loyalty.constants.roles import ADMIN_ONLY
from loyalty.schemas.analytics.analytics_schemas import StatsOut, AnalyticsOut
from loyalty.services.analytics.analytics_service import get_stats, get_analytics
from loyalty.utils.check_roles import require_role
from loyalty.utils.response import APIResponse, success_response

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/stats", response_model=APIResponse[StatsOut])
async def get_stats_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),
):
    stats = await get_stats(db)
    return success_response("Stats fetched successfully", stats)


@router.get("/", response_model=APIResponse[AnalyticsOut])
async def get_analytics_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),
    days: int = Query(30, ge=1, le=365),
):
    data = await get_analytics(db, days=days)
    return success_response("Analytics fetched successfully", data)
