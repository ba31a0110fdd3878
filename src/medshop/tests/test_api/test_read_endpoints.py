import pytest


@pytest.mark.asyncio
class TestCategories:

    async def test_list(self, client, seed_store):
        resp = await client.get("/api/categories")

        assert resp.status_code == 200
        assert [c["name"] for c in resp.json()] == ["Analgesics", "Vitamins"]

    async def test_get(self, client, seed_store):
        resp = await client.get(f"/api/categories/{seed_store.vitamins_id}")

        assert resp.status_code == 200
        assert resp.json() == {"id": seed_store.vitamins_id, "name": "Vitamins", "description": None}

    async def test_missing(self, client, seed_store):
        resp = await client.get("/api/categories/999999")

        assert resp.status_code == 404
        body = resp.json()
        assert "999999" in body["message"]
        assert body["code"] == "not_found"


@pytest.mark.asyncio
class TestProducts:

    async def test_list_shape(self, client, seed_store):
        resp = await client.get("/api/products")

        assert resp.status_code == 200
        products = resp.json()
        assert len(products) == 3
        ibuprofen = next(p for p in products if p["id"] == seed_store.ibuprofen_id)
        assert ibuprofen["price"] == 10.5
        assert ibuprofen["quantity"] == 100
        assert ibuprofen["sku"] == "IBU-200"
        assert "imageUrl" in ibuprofen
        assert ibuprofen["category"]["id"] == seed_store.analgesics_id
        assert "orderItems" not in ibuprofen

    async def test_detail_includes_sales_history(self, client, seed_store):
        resp = await client.get(f"/api/products/{seed_store.thermometer_id}")

        assert resp.status_code == 200
        body = resp.json()
        assert body["price"] == 99.99
        [line] = body["orderItems"]
        assert line["orderId"] == seed_store.alice_order_id
        assert line["quantity"] == 1
        assert line["totalPrice"] == 99.99
        assert line["order"]["totalAmount"] == pytest.approx(120.99)
        assert line["order"]["orderDate"] == "2024-01-10"
        assert line["order"]["user"]["userName"] == "alice"
        assert "product" not in line

    async def test_detail_lists_every_order_the_product_was_sold_in(self, client, seed_store):
        purchase = await client.post(
            "/api/products/purchase",
            json={"productId": seed_store.ibuprofen_id, "userId": seed_store.bob_id,
                  "quantity": 3, "orderId": seed_store.bob_order_id},
        )
        assert purchase.status_code == 200

        resp = await client.get(f"/api/products/{seed_store.ibuprofen_id}")

        assert resp.status_code == 200
        lines = sorted(resp.json()["orderItems"], key=lambda line: line["orderId"])
        assert [line["orderId"] for line in lines] == [seed_store.alice_order_id, seed_store.bob_order_id]
        assert [line["order"]["user"]["userName"] for line in lines] == ["alice", "bob"]
        assert [line["order"]["totalAmount"] for line in lines] == [pytest.approx(120.99), pytest.approx(51.5)]

    async def test_missing(self, client, seed_store):
        resp = await client.get("/api/products/999999")

        assert resp.status_code == 404
        assert resp.json()["message"] == "Product with ID 999999 not found"


@pytest.mark.asyncio
class TestUsers:

    async def test_list_with_orders(self, client, seed_store):
        resp = await client.get("/api/users")

        assert resp.status_code == 200
        users = {u["userName"]: u for u in resp.json()}
        assert set(users) == {"alice", "bob", "carol"}
        assert users["carol"]["orders"] == []
        assert users["carol"]["email"] is None
        [order] = users["bob"]["orders"]
        assert order["totalAmount"] == 20.0
        assert order["status"] == "Pending"
        assert order["user"] == {"id": seed_store.bob_id, "userName": "bob", "fullName": "Bob Koval"}

    async def test_missing(self, client, seed_store):
        resp = await client.get("/api/users/999999")

        assert resp.status_code == 404
        assert "999999" in resp.json()["message"]


@pytest.mark.asyncio
class TestOrders:

    async def test_detail(self, client, seed_store):
        resp = await client.get(f"/api/orders/{seed_store.alice_order_id}")

        assert resp.status_code == 200
        body = resp.json()
        assert body["totalAmount"] == pytest.approx(120.99)
        assert body["status"] == "Completed"
        assert body["user"]["fullName"] == "Alice Moroz"
        assert [item["totalPrice"] for item in body["orderItems"]] == [21.0, 99.99]
        assert body["orderItems"][0]["product"]["category"]["name"] == "Analgesics"

    async def test_total_is_sum_of_lines_for_every_order(self, client, seed_store):
        for order in (await client.get("/api/orders")).json():
            lines = sum(item["quantity"] * item["unitPrice"] for item in order["orderItems"])
            assert order["totalAmount"] == pytest.approx(lines)

    async def test_missing(self, client, seed_store):
        resp = await client.get("/api/orders/999999")

        assert resp.status_code == 404
        assert resp.json()["message"] == "Order with ID 999999 not found"


@pytest.mark.asyncio
class TestListProperties:

    @pytest.mark.parametrize("resource", ["categories", "products", "users", "orders"])
    async def test_list_is_idempotent(self, client, seed_store, resource):
        first = await client.get(f"/api/{resource}")
        second = await client.get(f"/api/{resource}")

        assert first.json() == second.json()

    @pytest.mark.parametrize("resource", ["categories", "users", "orders"])
    async def test_get_by_id_matches_list_entry(self, client, seed_store, resource):
        listing = (await client.get(f"/api/{resource}")).json()

        for entry in listing:
            resp = await client.get(f"/api/{resource}/{entry['id']}")
            assert resp.json() == entry

    async def test_product_detail_extends_list_entry(self, client, seed_store):
        for entry in (await client.get("/api/products")).json():
            detail = (await client.get(f"/api/products/{entry['id']}")).json()
            assert {k: v for k, v in detail.items() if k != "orderItems"} == entry
