import itertools
from collections import defaultdict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from freshconnect.api import create_app
from freshconnect.utils.settings import Settings
from helpers import LALGUDI, PERISHABLE, VEGETABLES, auth


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'freshconnect.db'}",
        log_level="WARNING",
        checkout_retry_attempts=3,
        celery_broker_url="memory://",
        celery_result_backend="cache+memory://",
        celery_task_always_eager=True,
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def session_factory(app, client):
    # client fixture has run the lifespan, tables exist
    return app.state.database.SessionLocal


@pytest.fixture()
def count_rows(session_factory):
    def _count(model):
        with session_factory() as s:
            return s.execute(select(func.count()).select_from(model)).scalar_one()

    return _count


@pytest.fixture()
def make_user(client):
    counters = defaultdict(lambda: itertools.count(1))

    def _make(role="Consumer", taluk_id=LALGUDI):
        n = next(counters[role])
        response = client.post(
            "/users",
            json={
                "name": f"{role} {n}",
                "email": f"{role.lower()}{n}@example.com",
                "role": role,
                "taluk_id": taluk_id,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["user_id"]

    return _make


@pytest.fixture()
def producer(make_user):
    return make_user("Producer")


@pytest.fixture()
def consumer(make_user):
    return make_user("Consumer")


@pytest.fixture()
def make_product(client, producer):
    def _make(
        name="Tomato",
        price="10.00",
        quantity=5,
        description=None,
        category_id=VEGETABLES,
        expiry_type_id=PERISHABLE,
        taluk_id=LALGUDI,
        producer_id=None,
    ):
        response = client.post(
            "/producer/products",
            json={
                "name": name,
                "description": description,
                "price": price,
                "quantity": quantity,
                "category_id": category_id,
                "expiry_type_id": expiry_type_id,
                "taluk_id": taluk_id,
            },
            headers=auth(producer_id or producer),
        )
        assert response.status_code == 201, response.text
        return response.json()["product_id"]

    return _make


@pytest.fixture()
def stock_of(client, producer):
    def _stock(product_id, producer_id=None):
        response = client.get(
            f"/producer/products/{product_id}",
            headers=auth(producer_id or producer),
        )
        assert response.status_code == 200, response.text
        return response.json()["quantity"]

    return _stock


@pytest.fixture()
def add_to_cart(client):
    def _add(consumer_id, product_id, quantity):
        return client.post(
            "/cart/items",
            json={"product_id": product_id, "quantity": quantity},
            headers=auth(consumer_id),
        )

    return _add
