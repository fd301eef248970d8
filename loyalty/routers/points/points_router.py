from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.db import get_db
from loyalty.constants.roles import ALL_ROLES
from loyalty.schemas.points.points_schemas import PurchaseRequest, PurchaseResult
from loyalty.services.points.accrual_service import record_purchase
from loyalty.utils.check_roles import require_role
from loyalty.utils.response import success_response, APIResponse
from loyalty.utils.logger import get_logger

router = APIRouter(prefix="/points", tags=["Points"])
logger = get_logger(__name__)


# =====================================================
# ADD POINTS (STAFF SCAN / MANUAL ENTRY)
# =====================================================
@router.post("/add", response_model=APIResponse[PurchaseResult])
async def add_points_api(
    payload: PurchaseRequest,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ALL_ROLES)),
):
    result = await record_purchase(db, payload.customer_id, payload.item_id, user)
    return success_response(result.message, result)
