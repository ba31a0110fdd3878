from datetime import date
from decimal import Decimal

import pytest

from medshop.exceptions import RaisedDatabaseError
from medshop.models import PENDING_STATUS, Product
from medshop.routines import InProcessRoutines, SqlServerRoutines, build_routines


@pytest.mark.asyncio
class TestInsertPendingOrder:

    async def test_inserts_empty_pending_order(self, seed_store, routines, order_repository):
        order_id = await routines.insert_pending_order(seed_store.carol_id, date(2024, 5, 1))

        order = await order_repository.get_order(order_id)
        assert order.status == PENDING_STATUS
        assert order.total_amount == Decimal("0")
        assert order.items == []
        assert order.user.user_name == "carol"

    async def test_second_pending_order_same_day_is_rejected(self, seed_store, routines):
        with pytest.raises(RaisedDatabaseError) as exc_info:
            await routines.insert_pending_order(seed_store.bob_id, date(2024, 2, 1))

        assert exc_info.value.number == 50010

    async def test_completed_order_does_not_block_new_one(self, seed_store, routines):
        order_id = await routines.insert_pending_order(seed_store.alice_id, date(2024, 1, 10))
        assert order_id not in (seed_store.alice_order_id, seed_store.bob_order_id)


@pytest.mark.asyncio
class TestPurchaseProduct:

    async def test_creates_todays_order_and_decrements_stock(self, seed_store, routines, db_session,
                                                            order_repository, product_repository):
        await routines.purchase_product(seed_store.thermometer_id, seed_store.carol_id, 2, None)
        await db_session.commit()

        user_orders = [o for o in await order_repository.list_orders() if o.user_id == seed_store.carol_id]
        assert len(user_orders) == 1
        order = user_orders[0]
        assert order.order_date == date.today()
        assert order.status == PENDING_STATUS
        assert [(i.product_id, i.quantity) for i in order.items] == [(seed_store.thermometer_id, 2)]
        assert order.total_amount == Decimal("199.98")

        thermometer = await product_repository.get_product_detail(seed_store.thermometer_id)
        assert thermometer.quantity == 3

    async def test_repeat_purchase_reuses_todays_order(self, seed_store, routines, order_repository):
        await routines.purchase_product(seed_store.vitamin_c_id, seed_store.carol_id, 1, None)
        await routines.purchase_product(seed_store.ibuprofen_id, seed_store.carol_id, 1, None)

        user_orders = [o for o in await order_repository.list_orders() if o.user_id == seed_store.carol_id]
        assert len(user_orders) == 1
        assert len(user_orders[0].items) == 2

    async def test_same_price_extends_existing_line(self, seed_store, routines, order_repository):
        await routines.purchase_product(seed_store.vitamin_c_id, seed_store.bob_id, 3, seed_store.bob_order_id)

        order = await order_repository.get_order(seed_store.bob_order_id)
        assert [(i.quantity, i.total_price) for i in order.items] == [(7, Decimal("35.00"))]
        assert order.total_amount == Decimal("35.00")

    async def test_changed_price_adds_new_line(self, seed_store, routines, db_session, order_repository):
        product = await db_session.get(Product, seed_store.vitamin_c_id)
        product.price = Decimal("6.00")
        await db_session.flush()

        await routines.purchase_product(seed_store.vitamin_c_id, seed_store.bob_id, 1, seed_store.bob_order_id)

        order = await order_repository.get_order(seed_store.bob_order_id)
        assert [(i.quantity, i.unit_price) for i in order.items] == [(4, Decimal("5.00")), (1, Decimal("6.00"))]
        assert order.total_amount == Decimal("26.00")

    @pytest.mark.parametrize(
        "case, expected_number",
        [
            ("zero_quantity", 50001),
            ("unknown_product", 50002),
            ("unknown_user", 50003),
            ("insufficient_stock", 50004),
            ("unknown_order", 50005),
            ("other_users_order", 50006),
            ("order_not_pending", 50007),
        ],
    )
    async def test_rule_violations(self, seed_store, routines, case, expected_number):
        s = seed_store
        args = {
            "zero_quantity": (s.ibuprofen_id, s.alice_id, 0, None),
            "unknown_product": (999999, s.alice_id, 1, None),
            "unknown_user": (s.ibuprofen_id, 999999, 1, None),
            "insufficient_stock": (s.thermometer_id, s.alice_id, 6, None),
            "unknown_order": (s.ibuprofen_id, s.alice_id, 1, 999999),
            "other_users_order": (s.ibuprofen_id, s.alice_id, 1, s.bob_order_id),
            "order_not_pending": (s.ibuprofen_id, s.alice_id, 1, s.alice_order_id),
        }[case]

        with pytest.raises(RaisedDatabaseError) as exc_info:
            await routines.purchase_product(*args)

        assert exc_info.value.number == expected_number
        assert exc_info.value.severity == 16

    async def test_failed_purchase_leaves_stock_untouched(self, seed_store, routines, product_repository):
        with pytest.raises(RaisedDatabaseError):
            await routines.purchase_product(seed_store.thermometer_id, seed_store.alice_id, 1, seed_store.alice_order_id)

        thermometer = await product_repository.get_product_detail(seed_store.thermometer_id)
        assert thermometer.quantity == 5


@pytest.mark.asyncio
class TestFunctions:

    async def test_buyers_of_expensive_products_in_category(self, seed_store, routines):
        rows = await routines.users_with_expensive_products(Decimal("50"), seed_store.analgesics_id)

        assert [(r["UserId"], r["UserName"], r["FullName"]) for r in rows] == [
            (seed_store.alice_id, "alice", "Alice Moroz"),
        ]

    async def test_buyer_listed_once_even_with_several_matching_lines(self, seed_store, routines):
        rows = await routines.users_with_expensive_products(Decimal("1"), seed_store.analgesics_id)
        assert [r["UserId"] for r in rows] == [seed_store.alice_id]

    async def test_no_buyers_above_price(self, seed_store, routines):
        assert await routines.users_with_expensive_products(Decimal("200"), seed_store.analgesics_id) == []

    @pytest.mark.parametrize("max_amount, expected", [("50", 1), ("1000", 2), ("20.00", 0), ("20.01", 1)])
    async def test_count_orders_below_amount(self, seed_store, routines, max_amount, expected):
        assert await routines.count_orders(Decimal(max_amount)) == expected

    async def test_count_orders_includes_empty_orders(self, seed_store, routines):
        await routines.insert_pending_order(seed_store.carol_id, date(2024, 6, 1))
        assert await routines.count_orders(Decimal("0.01")) == 1


class TestBuildRoutines:

    def test_known_backends(self, db_session):
        assert isinstance(build_routines("inprocess", db_session), InProcessRoutines)
        assert isinstance(build_routines("sqlserver", db_session), SqlServerRoutines)

    def test_unknown_backend(self, db_session):
        with pytest.raises(ValueError, match="oracle"):
            build_routines("oracle", db_session)
