"""Cart endpoints: add/increment, update, remove, listing."""

import threading

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from freshconnect.data.models import CartItemModel, CartModel
from freshconnect.services.cart_service import CartService
from helpers import auth


class TestAddItem:
    def test_first_add_creates_cart_and_line(self, client, consumer, make_product, add_to_cart, count_rows):
        product_id = make_product(quantity=5)

        response = add_to_cart(consumer, product_id, 2)

        assert response.status_code == 201
        body = response.json()
        assert body["product_id"] == product_id
        assert body["quantity"] == 2
        assert count_rows(CartModel) == 1

    def test_adding_twice_sums_into_one_line(self, client, consumer, make_product, add_to_cart, count_rows):
        product_id = make_product(quantity=5)
        first = add_to_cart(consumer, product_id, 2).json()

        response = add_to_cart(consumer, product_id, 1)

        assert response.status_code == 200
        assert response.json() == {"cart_item_id": first["cart_item_id"], "product_id": product_id, "quantity": 3}
        assert count_rows(CartItemModel) == 1
        assert count_rows(CartModel) == 1

    def test_unknown_product(self, consumer, add_to_cart):
        response = add_to_cart(consumer, 999, 1)

        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_more_than_stock(self, consumer, make_product, add_to_cart, count_rows):
        product_id = make_product(quantity=2)

        response = add_to_cart(consumer, product_id, 3)

        assert response.status_code == 400
        assert response.json()["error"] == f"Insufficient stock for product_id={product_id}"
        assert count_rows(CartItemModel) == 0

    def test_quantity_must_be_positive_integer(self, consumer, make_product, add_to_cart):
        product_id = make_product()

        for bad in (0, -1, 1.5, "2"):
            response = add_to_cart(consumer, product_id, bad)
            assert response.status_code == 400, bad
            assert response.json()["error"] == "Invalid request"

    def test_missing_product_id(self, client, consumer):
        response = client.post("/cart/items", json={"quantity": 1}, headers=auth(consumer))

        assert response.status_code == 400


class TestUpdateItem:
    def test_set_quantity(self, client, consumer, make_product, add_to_cart):
        product_id = make_product(quantity=5)
        item_id = add_to_cart(consumer, product_id, 1).json()["cart_item_id"]

        response = client.patch(f"/cart/items/{item_id}", json={"quantity": 4}, headers=auth(consumer))

        assert response.status_code == 200
        assert response.json()["quantity"] == 4

    def test_zero_removes_line(self, client, consumer, make_product, add_to_cart, count_rows):
        item_id = add_to_cart(consumer, make_product(), 2).json()["cart_item_id"]

        response = client.patch(f"/cart/items/{item_id}", json={"quantity": 0}, headers=auth(consumer))

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert count_rows(CartItemModel) == 0

    def test_above_stock(self, client, consumer, make_product, add_to_cart):
        product_id = make_product(quantity=3)
        item_id = add_to_cart(consumer, product_id, 1).json()["cart_item_id"]

        response = client.patch(f"/cart/items/{item_id}", json={"quantity": 4}, headers=auth(consumer))

        assert response.status_code == 400
        assert response.json()["error"] == f"Insufficient stock for product_id={product_id}"

    def test_negative_quantity(self, client, consumer, make_product, add_to_cart):
        item_id = add_to_cart(consumer, make_product(), 1).json()["cart_item_id"]

        response = client.patch(f"/cart/items/{item_id}", json={"quantity": -1}, headers=auth(consumer))

        assert response.status_code == 400

    def test_other_consumers_line(self, client, make_user, make_product, add_to_cart):
        owner = make_user()
        stranger = make_user()
        item_id = add_to_cart(owner, make_product(), 1).json()["cart_item_id"]

        response = client.patch(f"/cart/items/{item_id}", json={"quantity": 2}, headers=auth(stranger))

        assert response.status_code == 404
        assert response.json() == {"error": "Cart item not found"}


class TestRemoveItem:
    def test_remove(self, client, consumer, make_product, add_to_cart, count_rows):
        item_id = add_to_cart(consumer, make_product(), 1).json()["cart_item_id"]

        response = client.delete(f"/cart/items/{item_id}", headers=auth(consumer))

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert count_rows(CartItemModel) == 0

    def test_requires_ownership(self, client, make_user, make_product, add_to_cart, count_rows):
        owner = make_user()
        stranger = make_user()
        item_id = add_to_cart(owner, make_product(), 1).json()["cart_item_id"]

        response = client.delete(f"/cart/items/{item_id}", headers=auth(stranger))

        assert response.status_code == 404
        assert count_rows(CartItemModel) == 1

    def test_unknown_line(self, client, consumer):
        assert client.delete("/cart/items/12345", headers=auth(consumer)).status_code == 404


class TestListCart:
    def test_lines_with_product_details(self, client, consumer, producer, make_product, add_to_cart):
        product_id = make_product(name="Curry leaves", price="2.00", quantity=7)
        add_to_cart(consumer, product_id, 3)

        response = client.get("/cart", headers=auth(consumer))

        assert response.status_code == 200
        [line] = response.json()
        assert line["product_id"] == product_id
        assert line["name"] == "Curry leaves"
        assert line["quantity"] == 3
        assert line["product_stock"] == 7
        assert line["producer_id"] == producer
        assert line["taluk_name"] == "Lalgudi"

    def test_empty(self, client, consumer):
        assert client.get("/cart", headers=auth(consumer)).json() == []

    def test_requires_authentication(self, client):
        response = client.get("/cart")

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_unknown_user(self, client):
        assert client.get("/cart", headers=auth(424242)).status_code == 401


def _add_concurrently(session_factory, consumer_id, requests):
    """Run CartService.add_item for each (product_id, quantity) in its own thread and session."""
    barrier = threading.Barrier(len(requests))
    errors = []

    def run(product_id, quantity):
        with session_factory() as db:
            barrier.wait()
            try:
                CartService(db).add_item(consumer_id, product_id, quantity)
            except Exception as e:
                errors.append(e)

    threads = [threading.Thread(target=run, args=r) for r in requests]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)

    return errors


class TestConcurrentAdds:
    def test_first_adds_share_one_cart(self, client, consumer, make_product, session_factory, count_rows):
        okra = make_product(name="Okra", quantity=5)
        beans = make_product(name="Beans", quantity=5)

        errors = _add_concurrently(session_factory, consumer, [(okra, 1), (beans, 1)])

        assert errors == []
        assert count_rows(CartModel) == 1
        assert count_rows(CartItemModel) == 2
        lines = client.get("/cart", headers=auth(consumer)).json()
        assert {line["product_id"] for line in lines} == {okra, beans}
        assert len({line["cart_id"] for line in lines}) == 1

    def test_checkout_takes_every_line_after_concurrent_adds(
        self, client, consumer, make_product, session_factory, count_rows
    ):
        okra = make_product(name="Okra", quantity=5)
        beans = make_product(name="Beans", quantity=5)
        _add_concurrently(session_factory, consumer, [(okra, 1), (beans, 1)])

        response = client.post("/cart/checkout", headers=auth(consumer))

        assert response.status_code == 200
        assert client.get("/cart", headers=auth(consumer)).json() == []
        assert count_rows(CartItemModel) == 0

    def test_same_product_increments_are_not_lost(self, consumer, make_product, add_to_cart, session_factory):
        product_id = make_product(quantity=10)
        add_to_cart(consumer, product_id, 1)

        errors = _add_concurrently(session_factory, consumer, [(product_id, 2), (product_id, 3)])

        assert errors == []
        with session_factory() as s:
            quantities = s.execute(select(CartItemModel.quantity)).scalars().all()
        assert quantities == [6]

    def test_same_product_on_a_new_cart(self, consumer, make_product, session_factory, count_rows):
        product_id = make_product(quantity=10)

        errors = _add_concurrently(session_factory, consumer, [(product_id, 2), (product_id, 2)])

        assert errors == []
        assert count_rows(CartModel) == 1
        with session_factory() as s:
            quantities = s.execute(select(CartItemModel.quantity)).scalars().all()
        assert quantities == [4]


class TestSingleCartPerConsumer:
    def test_second_cart_row_is_rejected(self, consumer, session_factory):
        with session_factory() as s:
            s.add(CartModel(consumer_id=consumer))
            s.commit()
            s.add(CartModel(consumer_id=consumer))
            with pytest.raises(IntegrityError):
                s.commit()
