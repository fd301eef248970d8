# loyalty/routers/catalog/item_router.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.db import get_db
from loyalty.constants.roles import ADMIN_ONLY
from loyalty.schemas.catalog.item_schemas import (
    ItemCreate,
    ItemUpdate,
    ItemOut,
    ItemListData,
)
from loyalty.services.catalog.item_service import (
    list_items,
    get_item,
    create_item,
    update_item,
    delete_item,
)
from loyalty.utils.check_roles import require_role
from loyalty.utils.response import APIResponse, success_response
from loyalty.utils.logger import get_logger

router = APIRouter(prefix="/items", tags=["Items"])
logger = get_logger(__name__)


# ---------------- PUBLIC CATALOGUE ----------------
@router.get("/", response_model=APIResponse[ItemListData])
async def list_active_items_api(db: AsyncSession = Depends(get_db)):
    data = await list_items(db)
    return success_response("Items fetched successfully", data)


# ---------------- ADMIN ----------------
@router.get("/all", response_model=APIResponse[ItemListData])
async def list_all_items_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),
):
    data = await list_items(db, include_inactive=True)
    return success_response("Items fetched successfully", data)


@router.get("/{item_id}", response_model=APIResponse[ItemOut])
async def get_item_api(
    item_id: int,
    db: AsyncSession = Depends(get_db),
):
    item = await get_item(db, item_id)
    return success_response("Item fetched successfully", item)


@router.post("/", response_model=APIResponse[ItemOut])
async def create_item_api(
    payload: ItemCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Create item", extra={"item_name": payload.name})
    item = await create_item(db, payload, user)
    return success_response("Item created successfully", item)


@router.patch("/{item_id}", response_model=APIResponse[ItemOut])
async def update_item_api(
    item_id: int,
    payload: ItemUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Update item", extra={"item_id": item_id})
    item = await update_item(db, item_id, payload, user)
    return success_response("Item updated successfully", item)


@router.delete("/{item_id}", response_model=APIResponse[None])
async def delete_item_api(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_role(ADMIN_ONLY)),
):
    logger.info("Delete item", extra={"item_id": item_id})
    await delete_item(db, item_id, user)
    return success_response("Item deleted successfully")
