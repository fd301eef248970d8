"""
Tests for the accrual engine (record_purchase).

Covers threshold crossing, ledger reset to the remainder, the
single-reward-per-purchase policy, not-found outcomes and rollback.
"""
import asyncio

import pytest
from sqlalchemy.exc import OperationalError

from loyalty.constants.error_codes import ErrorCode
from loyalty.core.exceptions import AppException
from loyalty.models.points.ledger_models import CustomerItemPoints
from loyalty.models.points.transaction_models import PointTransaction
from loyalty.services.points.accrual_service import (
    apply_points,
    purchase_message,
    record_purchase,
)
from tests.factories import (
    make_customer,
    make_item,
    set_threshold,
    set_ledger,
    ledger_points,
    reward_count,
    transactions_for,
    count_rows,
)


class TestApplyPoints:
    """Pure threshold arithmetic."""

    def test_below_threshold_accumulates(self):
        assert apply_points(2, 3, 10) == (5, False)

    def test_crossing_threshold_resets_to_remainder(self):
        assert apply_points(7, 4, 10) == (1, True)

    def test_exactly_threshold_resets_to_zero(self):
        assert apply_points(6, 4, 10) == (0, True)

    def test_single_reward_even_when_value_exceeds_two_thresholds(self):
        # 0 + 25 crosses T=10 twice but only one reward is granted
        assert apply_points(0, 25, 10) == (15, True)

    def test_message_mentions_reward(self):
        assert purchase_message(4, "Coffee", True) == "4 points added for Coffee and reward earned!"
        assert purchase_message(3, "Coffee", False) == "3 points added for Coffee"


class TestRecordPurchase:

    async def test_accrues_without_reward(self, db):
        customer_id = await make_customer(db)
        item_id = await make_item(db, points_value=3)
        await set_threshold(db, 10)
        await set_ledger(db, customer_id, item_id, 2)

        result = await record_purchase(db, customer_id, item_id)

        assert result.reward_earned is False
        assert result.total_item_points == 5
        assert result.points_added == 3
        assert result.item_name == "Coffee"
        assert result.message == "3 points added for Coffee"
        assert await ledger_points(db, customer_id, item_id) == 5
        assert await reward_count(db, customer_id) == 0

    async def test_crossing_threshold_earns_reward(self, db):
        customer_id = await make_customer(db)
        item_id = await make_item(db, points_value=4)
        await set_threshold(db, 10)
        await set_ledger(db, customer_id, item_id, 7)

        result = await record_purchase(db, customer_id, item_id)

        assert result.reward_earned is True
        assert result.total_item_points == 1
        assert result.message.endswith("and reward earned!")
        assert await ledger_points(db, customer_id, item_id) == 1
        assert await reward_count(db, customer_id) == 1

    async def test_first_purchase_creates_ledger_entry(self, db):
        customer_id = await make_customer(db)
        item_id = await make_item(db, points_value=3)

        assert await ledger_points(db, customer_id, item_id) is None

        result = await record_purchase(db, customer_id, item_id)

        assert result.total_item_points == 3
        assert await ledger_points(db, customer_id, item_id) == 3

    async def test_default_threshold_seeded_on_first_call(self, db):
        customer_id = await make_customer(db)
        item_id = await make_item(db, points_value=5)

        first = await record_purchase(db, customer_id, item_id)
        second = await record_purchase(db, customer_id, item_id)

        # default points_for_reward is 10
        assert first.reward_earned is False
        assert second.reward_earned is True
        assert second.total_item_points == 0

    async def test_appends_one_transaction_per_call(self, db):
        customer_id = await make_customer(db)
        item_id = await make_item(db, points_value=4)
        await set_threshold(db, 10)
        await set_ledger(db, customer_id, item_id, 7)

        await record_purchase(db, customer_id, item_id)
        await record_purchase(db, customer_id, item_id)

        txns = await transactions_for(db, customer_id)
        assert [(t.item_id, t.points_added, t.reward_earned) for t in txns] == [
            (item_id, 4, True),
            (item_id, 4, False),
        ]

    async def test_ledger_stays_below_threshold_over_many_purchases(self, db):
        customer_id = await make_customer(db)
        item_id = await make_item(db, points_value=3)
        await set_threshold(db, 7)

        rewards = 0
        for _ in range(20):
            result = await record_purchase(db, customer_id, item_id)
            assert 0 <= result.total_item_points < 7
            rewards += result.reward_earned

        # 20 * 3 = 60 points -> 8 full thresholds of 7, remainder 4
        assert rewards == 8
        assert await ledger_points(db, customer_id, item_id) == 4
        assert await reward_count(db, customer_id) == 8

    async def test_ledgers_are_tracked_per_item(self, db):
        customer_id = await make_customer(db)
        coffee = await make_item(db, name="Coffee", points_value=4)
        bagel = await make_item(db, name="Bagel", points_value=6)
        await set_threshold(db, 10)

        await record_purchase(db, customer_id, coffee)
        result = await record_purchase(db, customer_id, bagel)

        assert result.reward_earned is False
        assert await ledger_points(db, customer_id, coffee) == 4
        assert await ledger_points(db, customer_id, bagel) == 6

    async def test_rewards_accumulate_across_items(self, db):
        customer_id = await make_customer(db, reward_count=2)
        coffee = await make_item(db, name="Coffee", points_value=10)
        bagel = await make_item(db, name="Bagel", points_value=10)
        await set_threshold(db, 10)

        await record_purchase(db, customer_id, coffee)
        await record_purchase(db, customer_id, bagel)

        assert await reward_count(db, customer_id) == 4

    async def test_threshold_change_applies_to_next_call(self, db):
        customer_id = await make_customer(db)
        item_id = await make_item(db, points_value=3)
        await set_threshold(db, 10)

        await record_purchase(db, customer_id, item_id)
        await set_threshold(db, 5)
        result = await record_purchase(db, customer_id, item_id)

        assert result.reward_earned is True
        assert result.total_item_points == 1

    async def test_unknown_customer_is_not_found(self, db):
        item_id = await make_item(db)

        with pytest.raises(AppException) as exc:
            await record_purchase(db, "LC-missing", item_id)

        assert exc.value.status_code == 404
        assert exc.value.error_code == ErrorCode.CUSTOMER_NOT_FOUND
        assert await count_rows(db, CustomerItemPoints) == 0
        assert await count_rows(db, PointTransaction) == 0

    async def test_unknown_item_is_not_found(self, db):
        customer_id = await make_customer(db)

        with pytest.raises(AppException) as exc:
            await record_purchase(db, customer_id, 9999)

        assert exc.value.status_code == 404
        assert exc.value.error_code == ErrorCode.ITEM_NOT_FOUND
        assert exc.value.detail == "Item not found or inactive"
        assert await count_rows(db, CustomerItemPoints) == 0
        assert await count_rows(db, PointTransaction) == 0

    async def test_inactive_item_is_not_found_and_changes_nothing(self, db):
        customer_id = await make_customer(db)
        item_id = await make_item(db, points_value=4, is_active=False)
        await set_threshold(db, 10)
        await set_ledger(db, customer_id, item_id, 7)

        with pytest.raises(AppException) as exc:
            await record_purchase(db, customer_id, item_id)

        assert exc.value.error_code == ErrorCode.ITEM_NOT_FOUND
        assert await ledger_points(db, customer_id, item_id) == 7
        assert await reward_count(db, customer_id) == 0
        assert await count_rows(db, PointTransaction) == 0

    async def test_store_failure_rolls_back_every_write(self, db, monkeypatch):
        customer_id = await make_customer(db)
        item_id = await make_item(db, points_value=4)
        await set_threshold(db, 10)
        await set_ledger(db, customer_id, item_id, 7)

        original_commit = db.commit

        async def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(AppException) as exc:
            await record_purchase(db, customer_id, item_id)

        monkeypatch.setattr(db, "commit", original_commit)

        assert exc.value.status_code == 500
        assert exc.value.error_code == ErrorCode.POINTS_OPERATION_FAILED
        assert "disk" not in exc.value.detail
        assert await ledger_points(db, customer_id, item_id) == 7
        assert await reward_count(db, customer_id) == 0
        assert await count_rows(db, PointTransaction) == 0


class TestConcurrentPurchases:

    async def test_same_pair_purchases_do_not_lose_updates(self, db, session_factory):
        customer_id = await make_customer(db)
        item_id = await make_item(db, points_value=3)
        await set_threshold(db, 10)

        async def purchase():
            async with session_factory() as session:
                return await record_purchase(session, customer_id, item_id)

        results = await asyncio.gather(*(purchase() for _ in range(3)))

        assert sorted(r.total_item_points for r in results) == [3, 6, 9]
        assert await ledger_points(db, customer_id, item_id) == 9
        assert await count_rows(db, PointTransaction) == 3
