# loyalty/services/customers/customer_service.py

import time
import uuid

from sqlalchemy import select, delete, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.models.customers.customer_models import Customer
from loyalty.models.points.ledger_models import CustomerItemPoints
from loyalty.schemas.customers.customer_schemas import (
    CustomerRegister,
    CustomerRegistered,
    CustomerOut,
    CustomerPointsOut,
    CustomerListData,
    CustomerBulkDelete,
    CustomerBulkDeleteResult,
)
from loyalty.core.exceptions import AppException, NotFoundException
from loyalty.constants.error_codes import ErrorCode
from loyalty.constants.activity_codes import ActivityCode
from loyalty.utils.activity_helpers import record_user_activity
from loyalty.utils.qr_code import generate_qr_data_url, generate_qr_png
from loyalty.utils.logger import get_logger

logger = get_logger(__name__)


def generate_customer_id() -> str:
    millis = int(time.time() * 1000)
    unique_part = uuid.uuid4().hex[:4].upper()
    return f"LC{millis}{unique_part}"


async def _get_customer_or_404(db: AsyncSession, customer_id: str) -> Customer:
    customer = await db.get(Customer, customer_id)
    if not customer:
        raise NotFoundException("Customer not found", ErrorCode.CUSTOMER_NOT_FOUND)
    return customer


# =========================
# REGISTER
# =========================
async def register_customer(db: AsyncSession, payload: CustomerRegister) -> CustomerRegistered:
    # Try once (UUID collision is astronomically unlikely)
    customer_id = generate_customer_id()

    customer = Customer(
        id=customer_id,
        name=payload.name,
        pin=payload.pin,
        reward_count=0,
    )
    db.add(customer)

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise AppException(
            409,
            "Customer ID already exists. Please retry.",
            ErrorCode.CUSTOMER_ID_EXISTS,
        )

    qr_code = generate_qr_data_url(customer_id)

    await db.commit()
    await db.refresh(customer)

    logger.info("Customer registered", extra={"customer_id": customer_id})
    return CustomerRegistered(
        customer_id=customer_id,
        name=payload.name,
        qr_code=qr_code,
    )


# =========================
# GET
# =========================
async def get_customer(db: AsyncSession, customer_id: str) -> CustomerOut:
    customer = await _get_customer_or_404(db, customer_id)
    return CustomerOut.model_validate(customer)


async def get_customer_points(db: AsyncSession, customer_id: str) -> CustomerPointsOut:
    customer = await _get_customer_or_404(db, customer_id)

    rows = (
        await db.execute(
            select(CustomerItemPoints.item_id, CustomerItemPoints.points)
            .where(CustomerItemPoints.customer_id == customer_id)
        )
    ).all()

    return CustomerPointsOut(
        customer_name=customer.name,
        total_rewards=customer.reward_count,
        item_points={r.item_id: r.points for r in rows},
    )


async def get_customer_qr_png(db: AsyncSession, customer_id: str) -> bytes:
    customer = await _get_customer_or_404(db, customer_id)
    return generate_qr_png(customer.id)


# =========================
# LIST
# =========================
async def list_customers(
    *,
    db: AsyncSession,
    search: str | None,
    page: int,
    page_size: int,
) -> CustomerListData:
    filters = []
    if search:
        filters.append(
            or_(
                Customer.name.ilike(f"%{search}%"),
                Customer.id.ilike(f"%{search}%"),
            )
        )

    total = await db.scalar(
        select(func.count()).select_from(
            select(Customer.id).where(*filters).subquery()
        )
    )

    stmt = (
        select(Customer)
        .where(*filters)
        .order_by(Customer.created_at.desc(), Customer.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    customers = (await db.execute(stmt)).scalars().all()

    return CustomerListData(
        total=total or 0,
        items=[CustomerOut.model_validate(c) for c in customers],
    )


# =========================
# DELETE
# =========================
async def delete_customer(db: AsyncSession, customer_id: str, user) -> None:
    customer = await _get_customer_or_404(db, customer_id)
    customer_name = customer.name

    # Ledger and transaction rows go with it (ON DELETE CASCADE)
    await db.execute(delete(Customer).where(Customer.id == customer_id))

    await record_user_activity(
        db,
        user,
        ActivityCode.DELETE_CUSTOMER,
        target_name=customer_name,
        customer_id=customer_id,
    )

    await db.commit()
    logger.info("Customer deleted", extra={"customer_id": customer_id})


async def bulk_delete_customers(
    db: AsyncSession,
    payload: CustomerBulkDelete,
    user,
) -> CustomerBulkDeleteResult:
    stmt = delete(Customer)
    if not payload.delete_all:
        stmt = stmt.where(Customer.id.in_(payload.customer_ids))

    result = await db.execute(stmt.execution_options(synchronize_session=False))
    deleted = result.rowcount or 0

    await record_user_activity(
        db,
        user,
        ActivityCode.BULK_DELETE_CUSTOMERS,
        count=deleted,
    )

    await db.commit()
    logger.info(
        "Customers bulk deleted",
        extra={"deleted": deleted, "delete_all": payload.delete_all},
    )
    return CustomerBulkDeleteResult(deleted=deleted)
