from loyalty.services.analytics.analytics_service import get_stats, get_analytics
from loyalty.services.points.accrual_service import record_purchase
from tests.factories import make_customer, make_item, set_threshold


async def test_stats_on_empty_database(db):
    stats = await get_stats(db)
    assert (stats.total_customers, stats.total_rewards, stats.total_points) == (0, 0, 0)


async def test_stats_and_analytics_after_purchases(db):
    alice = await make_customer(db, customer_id="LC1", name="Alice")
    bob = await make_customer(db, customer_id="LC2", name="Bob")
    coffee = await make_item(db, name="Coffee", points_value=4)
    bagel = await make_item(db, name="Bagel", points_value=1)
    await set_threshold(db, 10)

    for _ in range(3):
        await record_purchase(db, alice, coffee)
    await record_purchase(db, bob, bagel)

    stats = await get_stats(db)
    assert stats.total_customers == 2
    assert stats.total_rewards == 1
    # Alice: 12 - 10 = 2 on coffee, Bob: 1 on bagel
    assert stats.total_points == 3

    analytics = await get_analytics(db, days=30)
    assert analytics.total_transactions == 4
    assert analytics.average_points_per_customer == 1.5
    assert [(t.name, t.count) for t in analytics.top_items] == [("Coffee", 3), ("Bagel", 1)]
    assert analytics.recent_transactions[0].customer_name == "Bob"
    assert len(analytics.recent_transactions) == 4
    assert sum(d.count for d in analytics.customer_growth) == 2
    assert sum(d.count for d in analytics.reward_trends) == 1
