import re

import pytest

from loyalty.constants.error_codes import ErrorCode
from loyalty.core.exceptions import AppException
from loyalty.models.customers.customer_models import Customer
from loyalty.models.points.ledger_models import CustomerItemPoints
from loyalty.models.points.transaction_models import PointTransaction
from loyalty.models.support.activity_models import UserActivity
from loyalty.schemas.customers.customer_schemas import CustomerRegister, CustomerBulkDelete
from loyalty.services.customers.customer_service import (
    generate_customer_id,
    register_customer,
    get_customer,
    get_customer_points,
    list_customers,
    delete_customer,
    bulk_delete_customers,
)
from loyalty.services.points.accrual_service import record_purchase
from tests.factories import make_customer, make_item, set_ledger, count_rows

CUSTOMER_ID_RE = re.compile(r"^LC\d{13}[0-9A-F]{4}$")


def test_generated_ids_are_prefixed_and_unique():
    ids = {generate_customer_id() for _ in range(200)}
    assert len(ids) == 200
    assert all(CUSTOMER_ID_RE.match(i) for i in ids)


def test_register_payload_requires_four_digit_pin():
    with pytest.raises(ValueError):
        CustomerRegister(name="Bob", pin="12a4")
    with pytest.raises(ValueError):
        CustomerRegister(name="Bob", pin="12345")
    with pytest.raises(ValueError):
        CustomerRegister(name="   ", pin="1234")


def test_bulk_delete_payload_requires_a_target():
    with pytest.raises(ValueError):
        CustomerBulkDelete()
    assert CustomerBulkDelete(delete_all=True).delete_all is True


async def test_register_customer_starts_with_zero_rewards(db):
    result = await register_customer(db, CustomerRegister(name="  Bob ", pin="0042"))

    assert CUSTOMER_ID_RE.match(result.customer_id)
    assert result.name == "Bob"
    assert result.qr_code.startswith("data:image/png;base64,")

    customer = await get_customer(db, result.customer_id)
    assert customer.reward_count == 0
    assert customer.name == "Bob"


async def test_get_unknown_customer_is_not_found(db):
    with pytest.raises(AppException) as exc:
        await get_customer(db, "LC0")
    assert exc.value.error_code == ErrorCode.CUSTOMER_NOT_FOUND


async def test_points_lookup_lists_every_ledger_entry(db):
    customer_id = await make_customer(db, reward_count=3)
    coffee = await make_item(db, name="Coffee")
    bagel = await make_item(db, name="Bagel")
    await set_ledger(db, customer_id, coffee, 4)
    await set_ledger(db, customer_id, bagel, 0)

    points = await get_customer_points(db, customer_id)

    assert points.customer_name == "Alice"
    assert points.total_rewards == 3
    assert points.item_points == {coffee: 4, bagel: 0}


async def test_points_lookup_without_purchases_is_empty(db):
    customer_id = await make_customer(db)
    points = await get_customer_points(db, customer_id)
    assert points.item_points == {}


async def test_list_customers_searches_name_and_id(db):
    await make_customer(db, customer_id="LC1000000000001AAAA", name="Alice")
    await make_customer(db, customer_id="LC1000000000002BBBB", name="Bob")

    by_name = await list_customers(db=db, search="bob", page=1, page_size=20)
    by_id = await list_customers(db=db, search="0001AAAA", page=1, page_size=20)
    everyone = await list_customers(db=db, search=None, page=1, page_size=1)

    assert [c.name for c in by_name.items] == ["Bob"]
    assert [c.id for c in by_id.items] == ["LC1000000000001AAAA"]
    assert everyone.total == 2
    assert len(everyone.items) == 1


async def test_delete_customer_cascades_and_logs_activity(db, admin_user):
    customer_id = await make_customer(db)
    item_id = await make_item(db, points_value=2)
    await record_purchase(db, customer_id, item_id)

    await delete_customer(db, customer_id, admin_user)

    assert await count_rows(db, Customer) == 0
    assert await count_rows(db, CustomerItemPoints) == 0
    assert await count_rows(db, PointTransaction) == 0
    assert await count_rows(db, UserActivity) == 1


async def test_bulk_delete_selected_customers(db, admin_user):
    await make_customer(db, customer_id="LC1", name="A")
    await make_customer(db, customer_id="LC2", name="B")
    await make_customer(db, customer_id="LC3", name="C")

    result = await bulk_delete_customers(
        db, CustomerBulkDelete(customer_ids=["LC1", "LC3", "LC-missing"]), admin_user
    )

    assert result.deleted == 2
    remaining = await list_customers(db=db, search=None, page=1, page_size=20)
    assert [c.id for c in remaining.items] == ["LC2"]


async def test_bulk_delete_all_removes_ledgers_too(db, admin_user):
    first = await make_customer(db, customer_id="LC1", name="A")
    await make_customer(db, customer_id="LC2", name="B")
    item_id = await make_item(db)
    await set_ledger(db, first, item_id, 5)

    result = await bulk_delete_customers(db, CustomerBulkDelete(delete_all=True), admin_user)

    assert result.deleted == 2
    assert await count_rows(db, Customer) == 0
    assert await count_rows(db, CustomerItemPoints) == 0
