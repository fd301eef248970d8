from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.db import get_db
from loyalty.constants.roles import ADMIN_ONLY
from loyalty.schemas.auth.activity_schemas import UserActivityFilters, UserActivityListData
from loyalty.services.auth.activity_service import list_user_activities
from loyalty.utils.check_roles import require_role
from loyalty.utils.response import APIResponse, success_response
from loyalty.utils.logger import get_logger

router = APIRouter(prefix="/activities", tags=["User Activities"])
logger = get_logger(__name__)


@router.get("/", response_model=APIResponse[UserActivityListData])
async def list_user_activities_api(
    filters: UserActivityFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    admin=Depends(require_role(ADMIN_ONLY)),
):
    logger.info(
        "List user activities requested",
        extra=filters.model_dump(exclude_none=True),
    )

    result = await list_user_activities(db=db, filters=filters)
    return success_response("User activities fetched successfully", result)
