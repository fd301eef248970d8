# loyalty/services/catalog/item_service.py

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.models.catalog.item_models import Item
from loyalty.models.points.transaction_models import PointTransaction
from loyalty.schemas.catalog.item_schemas import (
    ItemCreate,
    ItemUpdate,
    ItemOut,
    ItemListData,
)
from loyalty.core.exceptions import AppException, NotFoundException
from loyalty.constants.error_codes import ErrorCode
from loyalty.constants.activity_codes import ActivityCode
from loyalty.utils.activity_helpers import record_user_activity
from loyalty.utils.logger import get_logger

logger = get_logger(__name__)


async def _get_item_or_404(db: AsyncSession, item_id: int) -> Item:
    item = await db.get(Item, item_id)
    if not item:
        raise NotFoundException("Item not found", ErrorCode.ITEM_NOT_FOUND)
    return item


# ---------------- LIST ----------------
async def list_items(db: AsyncSession, *, include_inactive: bool = False) -> ItemListData:
    filters = []
    if not include_inactive:
        filters.append(Item.is_active.is_(True))

    items = (
        await db.execute(
            select(Item).where(*filters).order_by(Item.name.asc(), Item.id.asc())
        )
    ).scalars().all()

    total = await db.scalar(
        select(func.count()).select_from(select(Item.id).where(*filters).subquery())
    )

    return ItemListData(
        total=total or 0,
        items=[ItemOut.model_validate(i) for i in items],
    )


# ---------------- GET ----------------
async def get_item(db: AsyncSession, item_id: int) -> ItemOut:
    item = await _get_item_or_404(db, item_id)
    return ItemOut.model_validate(item)


# ---------------- CREATE ----------------
async def create_item(db: AsyncSession, payload: ItemCreate, user) -> ItemOut:
    item = Item(**payload.model_dump())
    db.add(item)
    await db.flush()

    await record_user_activity(
        db,
        user,
        ActivityCode.CREATE_ITEM,
        target_name=item.name,
        points_value=item.points_value,
    )

    await db.commit()
    await db.refresh(item)

    logger.info("Item created", extra={"item_id": item.id})
    return ItemOut.model_validate(item)


# ---------------- UPDATE ----------------
async def update_item(
    db: AsyncSession,
    item_id: int,
    payload: ItemUpdate,
    user,
) -> ItemOut:
    item = await _get_item_or_404(db, item_id)

    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise AppException(
            400,
            "No changes detected",
            ErrorCode.VALIDATION_ERROR,
        )

    # -------------------------------------------------
    # CHANGE TRACKING
    # -------------------------------------------------
    changes: list[str] = []
    for field, new_value in updates.items():
        old_value = getattr(item, field)
        if old_value != new_value:
            changes.append(f"{field}: {old_value} → {new_value}")
            setattr(item, field, new_value)

    if not changes:
        raise AppException(
            400,
            "No actual changes detected",
            ErrorCode.VALIDATION_ERROR,
        )

    await record_user_activity(
        db,
        user,
        ActivityCode.UPDATE_ITEM,
        target_name=item.name,
        changes=", ".join(changes),
    )

    await db.commit()
    await db.refresh(item)

    logger.info("Item updated", extra={"item_id": item.id})
    return ItemOut.model_validate(item)


# ---------------- DELETE ----------------
async def delete_item(db: AsyncSession, item_id: int, user) -> None:
    item = await _get_item_or_404(db, item_id)
    item_name = item.name

    has_history = await db.scalar(
        select(PointTransaction.id).where(PointTransaction.item_id == item_id).limit(1)
    )
    if has_history:
        raise AppException(
            409,
            "Item has transaction history; deactivate it instead",
            ErrorCode.CONFLICT,
        )

    # Ledger rows go with it (ON DELETE CASCADE)
    await db.execute(delete(Item).where(Item.id == item_id))

    await record_user_activity(
        db,
        user,
        ActivityCode.DELETE_ITEM,
        target_name=item_name,
    )

    await db.commit()
    logger.info("Item deleted", extra={"item_id": item_id})
