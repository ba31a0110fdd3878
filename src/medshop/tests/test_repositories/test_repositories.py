import logging
from decimal import Decimal

import pytest
from sqlalchemy import update

from medshop.exceptions import NotFoundError
from medshop.mappers import to_order_dto, to_product_detail_dto, to_user_dto
from medshop.models import Order


@pytest.mark.asyncio
class TestCategoryRepository:

    async def test_list_is_ordered_by_id(self, seed_store, category_repository):
        categories = await category_repository.list_categories()

        assert [c.id for c in categories] == sorted([seed_store.analgesics_id, seed_store.vitamins_id])
        assert categories[1].description is None

    async def test_get_missing_raises_with_id_in_message(self, seed_store, category_repository):
        with pytest.raises(NotFoundError) as exc_info:
            await category_repository.get_category(999999)

        assert "999999" in exc_info.value.message
        assert exc_info.value.message == "Category with ID 999999 not found"


@pytest.mark.asyncio
class TestProductRepository:

    async def test_list_loads_category(self, seed_store, product_repository):
        products = await product_repository.list_products()

        assert [p.id for p in products] == sorted(p.id for p in products)
        assert {p.category.name for p in products} == {"Analgesics", "Vitamins"}

    async def test_detail_graph_is_fully_loaded(self, seed_store, product_repository):
        product = await product_repository.get_product_detail(seed_store.ibuprofen_id)

        dto = to_product_detail_dto(product)

        assert dto.category.id == seed_store.analgesics_id
        assert len(dto.order_items) == 1
        assert dto.order_items[0].quantity == 2
        assert dto.order_items[0].order.user.user_name == "alice"
        assert dto.order_items[0].order.total_amount == seed_store.alice_order_total

    async def test_history_includes_pending_orders(self, seed_store, product_repository):
        product = await product_repository.get_product_detail(seed_store.vitamin_c_id)
        assert len(product.order_items) == 1

        line_order = to_product_detail_dto(product).order_items[0].order
        assert line_order.status == "Pending"

    async def test_detail_of_product_sold_in_several_orders(self, seed_store, routines, db_session,
                                                            product_repository):
        await routines.purchase_product(seed_store.ibuprofen_id, seed_store.bob_id, 3, seed_store.bob_order_id)
        await db_session.commit()

        product = await product_repository.get_product_detail(seed_store.ibuprofen_id)
        dto = to_product_detail_dto(product)

        assert product.quantity == 97
        assert sorted((i.order.user.user_name, i.quantity, i.order.total_amount) for i in dto.order_items) == [
            ("alice", 2, Decimal("120.99")),
            ("bob", 3, Decimal("51.50")),
        ]

    async def test_detail_after_reading_the_same_orders(self, seed_store, order_repository, product_repository):
        await order_repository.list_orders()

        product = await product_repository.get_product_detail(seed_store.thermometer_id)

        [line] = to_product_detail_dto(product).order_items
        assert line.order.id == seed_store.alice_order_id
        assert line.order.user.user_name == "alice"

    async def test_missing_product(self, seed_store, product_repository):
        with pytest.raises(NotFoundError, match="Product with ID 999999 not found"):
            await product_repository.get_product_detail(999999)


@pytest.mark.asyncio
class TestUserRepository:

    async def test_users_carry_their_orders(self, seed_store, user_repository):
        users = await user_repository.list_users()

        by_name = {u.user_name: to_user_dto(u) for u in users}
        assert [o.id for o in by_name["alice"].orders] == [seed_store.alice_order_id]
        assert by_name["carol"].orders == []
        assert by_name["carol"].full_name is None

    async def test_get_user(self, seed_store, user_repository):
        user = await user_repository.get_user(seed_store.bob_id)
        assert to_user_dto(user).orders[0].total_amount == seed_store.bob_order_total


@pytest.mark.asyncio
class TestOrderRepository:

    async def test_order_detail(self, seed_store, order_repository):
        order = await order_repository.get_order(seed_store.alice_order_id)

        dto = to_order_dto(order)

        assert dto.total_amount == Decimal("120.99")
        assert [item.product.name for item in dto.order_items] == ["Ibuprofen 200mg", "Digital thermometer"]
        assert dto.order_items[1].product.category.name == "Analgesics"

    async def test_repeated_reads_are_identical(self, seed_store, order_repository):
        first = [to_order_dto(o) for o in await order_repository.list_orders()]
        second = [to_order_dto(o) for o in await order_repository.list_orders()]

        assert first == second

    async def test_stale_stored_total_is_logged_and_not_used(self, seed_store, order_repository, db_session, caplog):
        await db_session.execute(
            update(Order).where(Order.id == seed_store.alice_order_id).values(total_amount=Decimal("1.00"))
        )
        await db_session.commit()

        with caplog.at_level(logging.WARNING, logger="medshop.repositories.order_repository"):
            order = await order_repository.get_order(seed_store.alice_order_id)

        assert order.total_amount == Decimal("1.00")
        assert to_order_dto(order).total_amount == Decimal("120.99")
        mismatches = [r for r in caplog.records if r.getMessage() == "order.total_mismatch"]
        assert len(mismatches) == 1
        assert mismatches[0].order_id == seed_store.alice_order_id

    async def test_consistent_totals_log_nothing(self, seed_store, order_repository, caplog):
        with caplog.at_level(logging.WARNING, logger="medshop.repositories.order_repository"):
            await order_repository.list_orders()

        assert not [r for r in caplog.records if r.getMessage() == "order.total_mismatch"]

    async def test_missing_order(self, seed_store, order_repository):
        with pytest.raises(NotFoundError) as exc_info:
            await order_repository.get_order(999999)
        assert exc_info.value.http_status() == 404
