# loyalty/services/points/accrual_service.py

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.exceptions import AppException, NotFoundException
from loyalty.constants.error_codes import ErrorCode
from loyalty.models.customers.customer_models import Customer
from loyalty.models.catalog.item_models import Item
from loyalty.models.points.ledger_models import CustomerItemPoints
from loyalty.models.points.transaction_models import PointTransaction
from loyalty.schemas.points.points_schemas import PurchaseResult
from loyalty.services.settings.settings_service import get_or_create_settings
from loyalty.utils.upsert import insert_if_missing
from loyalty.utils.logger import get_logger

logger = get_logger(__name__)


def apply_points(current: int, points_value: int, threshold: int) -> tuple[int, bool]:
    """
    Add ``points_value`` to a ledger counter.

    Returns the value to store and whether a reward was earned. Crossing the
    threshold resets the counter to the remainder; one purchase earns at most
    one reward even if the remainder is still above the threshold.
    """
    new_total = current + points_value
    if new_total >= threshold:
        return new_total - threshold, True
    return new_total, False


def purchase_message(points_value: int, item_name: str, reward_earned: bool) -> str:
    message = f"{points_value} points added for {item_name}"
    if reward_earned:
        message += " and reward earned!"
    return message


# =====================================================
# RECORD PURCHASE
# =====================================================
async def record_purchase(
    db: AsyncSession,
    customer_id: str,
    item_id: int,
    user=None,
) -> PurchaseResult:
    """
    Apply one purchase to the customer's ledger entry for the item.

    The ledger upsert, the reward counter increment and the transaction
    record are committed together or not at all.
    """
    logger.info(
        "Record purchase",
        extra={
            "customer_id": customer_id,
            "item_id": item_id,
            "user_id": getattr(user, "id", None),
        },
    )

    try:
        # -------------------------------
        # THRESHOLD (fresh per call)
        # -------------------------------
        settings = await get_or_create_settings(db)
        threshold = settings.points_for_reward

        # -------------------------------
        # CUSTOMER + ITEM
        # -------------------------------
        customer = await db.get(Customer, customer_id)
        if not customer:
            raise NotFoundException("Customer not found", ErrorCode.CUSTOMER_NOT_FOUND)

        item = await db.get(Item, item_id)
        if not item or not item.is_active:
            raise NotFoundException("Item not found or inactive", ErrorCode.ITEM_NOT_FOUND)

        # -------------------------------
        # LEDGER (upsert, then lock)
        # -------------------------------
        await insert_if_missing(
            db,
            CustomerItemPoints,
            index_elements=["customer_id", "item_id"],
            values={"customer_id": customer_id, "item_id": item_id, "points": 0},
        )

        ledger = (
            await db.execute(
                select(CustomerItemPoints)
                .where(
                    CustomerItemPoints.customer_id == customer_id,
                    CustomerItemPoints.item_id == item_id,
                )
                .with_for_update()
                .execution_options(populate_existing=True)
            )
        ).scalar_one()

        stored_points, reward_earned = apply_points(
            ledger.points, item.points_value, threshold
        )
        ledger.points = stored_points

        if reward_earned:
            await db.execute(
                update(Customer)
                .where(Customer.id == customer_id)
                .values(reward_count=Customer.reward_count + 1)
            )

        # -------------------------------
        # TRANSACTION LOG
        # -------------------------------
        db.add(
            PointTransaction(
                customer_id=customer_id,
                item_id=item_id,
                points_added=item.points_value,
                reward_earned=reward_earned,
            )
        )

        item_name = item.name
        points_value = item.points_value

        await db.commit()

    except AppException:
        await db.rollback()
        raise

    except SQLAlchemyError:
        await db.rollback()
        logger.exception(
            "Record purchase failed",
            extra={"customer_id": customer_id, "item_id": item_id},
        )
        raise AppException(
            500,
            "Failed to record purchase",
            ErrorCode.POINTS_OPERATION_FAILED,
        )

    logger.info(
        "Purchase recorded",
        extra={
            "customer_id": customer_id,
            "item_id": item_id,
            "points": stored_points,
            "reward_earned": reward_earned,
        },
    )

    return PurchaseResult(
        customer_id=customer_id,
        item_id=item_id,
        item_name=item_name,
        points_added=points_value,
        total_item_points=stored_points,
        reward_earned=reward_earned,
        message=purchase_message(points_value, item_name, reward_earned),
    )
