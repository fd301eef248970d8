# loyalty/services/analytics/analytics_service.py

from datetime import datetime, timedelta, timezone

from sqlalchemy import select, func, desc, distinct
from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.models.customers.customer_models import Customer
from loyalty.models.catalog.item_models import Item
from loyalty.models.points.ledger_models import CustomerItemPoints
from loyalty.models.points.transaction_models import PointTransaction
from loyalty.schemas.analytics.analytics_schemas import (
    StatsOut,
    AnalyticsOut,
    TopItem,
    RecentTransaction,
    DailyCount,
)
from loyalty.utils.logger import get_logger

logger = get_logger(__name__)

TOP_ITEMS_LIMIT = 10
RECENT_TRANSACTIONS_LIMIT = 20


# =====================================================
# DASHBOARD STATS
# =====================================================
async def get_stats(db: AsyncSession) -> StatsOut:
    total_customers = await db.scalar(select(func.count(Customer.id)))
    total_rewards = await db.scalar(select(func.coalesce(func.sum(Customer.reward_count), 0)))
    total_points = await db.scalar(select(func.coalesce(func.sum(CustomerItemPoints.points), 0)))

    return StatsOut(
        total_customers=total_customers or 0,
        total_rewards=total_rewards or 0,
        total_points=total_points or 0,
    )


# =====================================================
# ANALYTICS
# =====================================================
async def _daily_counts(db: AsyncSession, column, *filters) -> list[DailyCount]:
    day = func.date(column)
    rows = (
        await db.execute(
            select(day.label("day"), func.count().label("count"))
            .where(*filters)
            .group_by(day)
            .order_by(day)
        )
    ).all()
    return [DailyCount(date=r.day, count=r.count) for r in rows]


async def get_analytics(db: AsyncSession, *, days: int = 30) -> AnalyticsOut:
    logger.info("Build analytics", extra={"days": days})

    since = datetime.now(timezone.utc) - timedelta(days=days)

    # -------------------------------
    # TOTALS
    # -------------------------------
    total_customers = await db.scalar(select(func.count(Customer.id)))
    total_rewards = await db.scalar(select(func.coalesce(func.sum(Customer.reward_count), 0)))
    total_transactions = await db.scalar(select(func.count(PointTransaction.id)))

    # Average over customers that have at least one ledger entry
    ledger_totals = (
        await db.execute(
            select(
                func.coalesce(func.sum(CustomerItemPoints.points), 0),
                func.count(distinct(CustomerItemPoints.customer_id)),
            )
        )
    ).one()
    ledger_points, ledger_customers = ledger_totals
    average_points = ledger_points / ledger_customers if ledger_customers else 0.0

    # -------------------------------
    # TOP ITEMS
    # -------------------------------
    purchase_count = func.count(PointTransaction.id).label("count")
    top_rows = (
        await db.execute(
            select(Item.name, purchase_count)
            .select_from(PointTransaction)
            .join(Item, Item.id == PointTransaction.item_id)
            .group_by(Item.id, Item.name)
            .order_by(desc(purchase_count), Item.name)
            .limit(TOP_ITEMS_LIMIT)
        )
    ).all()

    # -------------------------------
    # RECENT TRANSACTIONS
    # -------------------------------
    recent_rows = (
        await db.execute(
            select(
                PointTransaction.id,
                Customer.name.label("customer_name"),
                Item.name.label("item_name"),
                PointTransaction.points_added,
                PointTransaction.reward_earned,
                PointTransaction.created_at,
            )
            .select_from(PointTransaction)
            .join(Customer, Customer.id == PointTransaction.customer_id)
            .join(Item, Item.id == PointTransaction.item_id)
            .order_by(PointTransaction.created_at.desc(), PointTransaction.id.desc())
            .limit(RECENT_TRANSACTIONS_LIMIT)
        )
    ).all()

    # -------------------------------
    # TRENDS
    # -------------------------------
    customer_growth = await _daily_counts(
        db,
        Customer.created_at,
        Customer.created_at >= since,
    )
    reward_trends = await _daily_counts(
        db,
        PointTransaction.created_at,
        PointTransaction.created_at >= since,
        PointTransaction.reward_earned.is_(True),
    )

    return AnalyticsOut(
        total_customers=total_customers or 0,
        total_rewards=total_rewards or 0,
        total_transactions=total_transactions or 0,
        average_points_per_customer=float(average_points),
        top_items=[TopItem(name=r.name, count=r.count) for r in top_rows],
        recent_transactions=[
            RecentTransaction(
                id=r.id,
                customer_name=r.customer_name,
                item_name=r.item_name,
                points_added=r.points_added,
                reward_earned=r.reward_earned,
                created_at=r.created_at,
            )
            for r in recent_rows
        ],
        customer_growth=customer_growth,
        reward_trends=reward_trends,
    )
