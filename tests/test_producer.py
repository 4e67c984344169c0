"""Producer dashboard: lookups, product CRUD, stock, orders, favorites, stats."""

from decimal import Decimal

from helpers import FRUITS, LALGUDI, PERISHABLE, VEGETABLES, auth


def _product_payload(**overrides):
    payload = {
        "name": "Tomato",
        "description": "Country tomatoes",
        "price": "24.00",
        "quantity": 10,
        "category_id": VEGETABLES,
        "expiry_type_id": PERISHABLE,
        "taluk_id": LALGUDI,
    }
    payload.update(overrides)
    return payload


class TestLookups:
    def test_lookups_sorted_by_name(self, client, producer):
        taluks = client.get("/producer/lookups/taluks", headers=auth(producer)).json()
        categories = client.get("/producer/lookups/categories", headers=auth(producer)).json()
        expiry = client.get("/producer/lookups/expiry-types", headers=auth(producer)).json()

        assert taluks[0] == {"taluk_id": LALGUDI, "name": "Lalgudi"}
        assert [t["name"] for t in taluks] == sorted(t["name"] for t in taluks)
        assert {"category_id": FRUITS, "name": "Fruits"} in categories
        assert len(expiry) == 3

    def test_consumers_are_forbidden(self, client, consumer):
        response = client.get("/producer/lookups/taluks", headers=auth(consumer))

        assert response.status_code == 403
        assert response.json() == {"error": "Access allowed for producers only"}


class TestProductCrud:
    def test_create(self, client, producer):
        response = client.post("/producer/products", json=_product_payload(), headers=auth(producer))

        assert response.status_code == 201
        body = response.json()
        assert body["producer_id"] == producer
        assert body["category_name"] == "Vegetables"
        assert Decimal(str(body["price"])) == Decimal("24.00")
        assert body["quantity"] == 10

    def test_create_missing_fields(self, client, producer):
        payload = _product_payload()
        del payload["taluk_id"]

        response = client.post("/producer/products", json=payload, headers=auth(producer))

        assert response.status_code == 400

    def test_create_unknown_category(self, client, producer):
        response = client.post("/producer/products", json=_product_payload(category_id=99), headers=auth(producer))

        assert response.status_code == 400
        assert response.json() == {"error": "Unknown category_id"}

    def test_list_and_get_only_own(self, client, make_user, make_product):
        mine = make_user("Producer")
        theirs = make_user("Producer")
        own_id = make_product(name="mine", producer_id=mine)
        other_id = make_product(name="theirs", producer_id=theirs)

        listed = client.get("/producer/products", headers=auth(mine)).json()

        assert [p["product_id"] for p in listed] == [own_id]
        assert client.get(f"/producer/products/{other_id}", headers=auth(mine)).status_code == 404

    def test_partial_update(self, client, producer, make_product):
        product_id = make_product(name="Tomato", price="24.00")

        response = client.put(
            f"/producer/products/{product_id}",
            json={"price": "26.50", "description": "Hybrid"},
            headers=auth(producer),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Tomato"
        assert body["description"] == "Hybrid"
        assert Decimal(str(body["price"])) == Decimal("26.50")

    def test_update_without_fields(self, client, producer, make_product):
        response = client.put(f"/producer/products/{make_product()}", json={}, headers=auth(producer))

        assert response.status_code == 400
        assert response.json() == {"error": "No updatable fields provided"}

    def test_update_unknown_field(self, client, producer, make_product):
        response = client.put(
            f"/producer/products/{make_product()}", json={"producer_id": 1}, headers=auth(producer)
        )

        assert response.status_code == 400

    def test_update_not_owned(self, client, make_user, make_product):
        owner = make_user("Producer")
        other = make_user("Producer")
        product_id = make_product(producer_id=owner)

        response = client.put(f"/producer/products/{product_id}", json={"name": "x"}, headers=auth(other))

        assert response.status_code == 404

    def test_delete_removes_cart_lines_and_favorites(self, client, producer, consumer, make_product, add_to_cart):
        product_id = make_product()
        add_to_cart(consumer, product_id, 1)
        client.post("/favorites", json={"product_id": product_id}, headers=auth(consumer))

        response = client.delete(f"/producer/products/{product_id}", headers=auth(producer))

        assert response.status_code == 200
        assert response.json() == {"success": True, "deleted": product_id}
        assert client.get("/cart", headers=auth(consumer)).json() == []
        assert client.get("/favorites", headers=auth(consumer)).json() == []

    def test_delete_sold_product_conflicts(self, client, producer, consumer, make_product, add_to_cart):
        product_id = make_product()
        add_to_cart(consumer, product_id, 1)
        client.post("/cart/checkout", headers=auth(consumer))

        response = client.delete(f"/producer/products/{product_id}", headers=auth(producer))

        assert response.status_code == 409

    def test_delete_missing(self, client, producer):
        assert client.delete("/producer/products/999", headers=auth(producer)).status_code == 404


class TestStock:
    def test_set_quantity(self, client, producer, make_product, stock_of):
        product_id = make_product(quantity=3)

        response = client.patch(
            f"/producer/products/{product_id}/quantity", json={"quantity": 12}, headers=auth(producer)
        )

        assert response.status_code == 200
        assert response.json() == {"product_id": product_id, "quantity": 12}
        assert stock_of(product_id) == 12

    def test_negative_quantity_rejected(self, client, producer, make_product):
        response = client.patch(
            f"/producer/products/{make_product()}/quantity", json={"quantity": -2}, headers=auth(producer)
        )

        assert response.status_code == 400


class TestProducerOrders:
    def test_orders_and_detail_show_only_own_lines(self, client, make_user, make_product, add_to_cart):
        farmer = make_user("Producer")
        dairy = make_user("Producer")
        buyer = make_user()
        greens = make_product(name="Spinach", price="3.00", producer_id=farmer)
        milk = make_product(name="Milk", price="40.00", producer_id=dairy)
        add_to_cart(buyer, greens, 2)
        add_to_cart(buyer, milk, 1)
        order_id = client.post("/cart/checkout", headers=auth(buyer)).json()["order_id"]

        orders = client.get("/producer/orders", headers=auth(farmer)).json()
        detail = client.get(f"/producer/orders/{order_id}", headers=auth(farmer)).json()

        assert [o["order_id"] for o in orders] == [order_id]
        assert orders[0]["consumer_id"] == buyer
        assert Decimal(str(detail["order"]["total_amount"])) == Decimal("46.00")
        assert detail["consumer"]["user_id"] == buyer
        assert [i["product_name"] for i in detail["items"]] == ["Spinach"]

    def test_order_without_own_items_is_forbidden(self, client, make_user, make_product, add_to_cart):
        seller = make_user("Producer")
        bystander = make_user("Producer")
        buyer = make_user()
        add_to_cart(buyer, make_product(producer_id=seller), 1)
        order_id = client.post("/cart/checkout", headers=auth(buyer)).json()["order_id"]

        response = client.get(f"/producer/orders/{order_id}", headers=auth(bystander))

        assert response.status_code == 403

    def test_missing_order(self, client, producer):
        assert client.get("/producer/orders/999", headers=auth(producer)).status_code == 404


class TestFavoritesAndDashboard:
    def test_favorites_and_counts(self, client, producer, make_user, make_product, add_to_cart):
        first = make_user()
        second = make_user()
        a = make_product(name="a")
        b = make_product(name="b")
        for consumer_id in (first, second):
            client.post("/favorites", json={"product_id": a}, headers=auth(consumer_id))
        client.post("/favorites", json={"product_id": b}, headers=auth(first))
        add_to_cart(first, a, 1)
        client.post("/cart/checkout", headers=auth(first))

        favorites = client.get("/producer/favorites", headers=auth(producer)).json()
        stats = client.get("/producer/dashboard", headers=auth(producer)).json()

        assert len(favorites) == 3
        assert {f["consumer_id"] for f in favorites} == {first, second}
        assert stats == {"product_count": 2, "orders_count": 1, "fav_count": 2}

    def test_profile(self, client, producer):
        profile = client.get("/producer/profile", headers=auth(producer)).json()

        assert profile["user_id"] == producer
        assert profile["role"] == "Producer"
