# freshconnect/services/producer_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from freshconnect.data.models import ProductModel
from freshconnect.domain.errors import Conflict, Forbidden, NotFound, ValidationError
from freshconnect.domain.schemas import ProductCreate, ProductUpdate
from freshconnect.repos.favorite_repo import FavoriteRepo
from freshconnect.repos.lookup_repo import LookupRepo
from freshconnect.repos.order_repo import OrderRepo
from freshconnect.repos.product_repo import ProductRepo
from freshconnect.repos.user_repo import UserRepo
from freshconnect.services.product_service import product_row_to_dict
from freshconnect.utils.logging import get_logger

logger = get_logger(__name__)


class ProducerService:
    """
    Producer dashboard: lookups, own product CRUD and stock, orders and
    favorites touching the producer's products, and summary counts.
    """

    def __init__(self, db: Session):
        self.products = ProductRepo(db)
        self.orders = OrderRepo(db)
        self.favorites = FavoriteRepo(db)
        self.lookups = LookupRepo(db)
        self.users = UserRepo(db)

    # lookups

    def list_categories(self):
        return self.lookups.list_categories()

    def list_expiry_types(self):
        return self.lookups.list_expiry_types()

    def list_taluks(self):
        return self.lookups.list_taluks()

    def _check_references(self, values: Dict[str, Any]) -> None:
        if "category_id" in values and not self.lookups.category_exists(values["category_id"]):
            raise ValidationError("Unknown category_id")
        if "expiry_type_id" in values and not self.lookups.expiry_type_exists(values["expiry_type_id"]):
            raise ValidationError("Unknown expiry_type_id")
        if "taluk_id" in values and not self.lookups.taluk_exists(values["taluk_id"]):
            raise ValidationError("Unknown taluk_id")

    # products

    def create_product(self, producer_id: int, payload: ProductCreate) -> Dict[str, Any]:
        values = payload.model_dump()
        self._check_references(values)

        product = self.products.add(ProductModel(producer_id=producer_id, **values))
        self.products.commit()

        logger.info("Product created", producer_id=producer_id, product_id=product.product_id)
        return self.get_product(producer_id, product.product_id)

    def list_products(self, producer_id: int) -> List[Dict[str, Any]]:
        return [product_row_to_dict(row) for row in self.products.list_for_producer(producer_id)]

    def get_product(self, producer_id: int, product_id: int) -> Dict[str, Any]:
        row = self.products.get_row(product_id, producer_id=producer_id)
        if not row:
            raise NotFound("Product not found")
        return product_row_to_dict(row)

    def update_product(self, producer_id: int, product_id: int, payload: ProductUpdate) -> Dict[str, Any]:
        values = payload.model_dump(exclude_unset=True)
        if not values:
            raise ValidationError("No updatable fields provided")

        for key in ("name", "price", "quantity", "category_id", "expiry_type_id", "taluk_id"):
            if key in values and values[key] is None:
                raise ValidationError(f"{key} cannot be null")

        self._check_references(values)

        if self.products.update_fields(product_id, producer_id, values) == 0:
            self.products.rollback()
            raise NotFound("Product not found or not owned by you")

        self.products.commit()
        return self.get_product(producer_id, product_id)

    def set_quantity(self, producer_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        if self.products.update_fields(product_id, producer_id, {"quantity": quantity}) == 0:
            self.products.rollback()
            raise NotFound("Product not found or not owned by you")

        self.products.commit()
        logger.info("Stock updated", producer_id=producer_id, product_id=product_id, quantity=quantity)
        return {"product_id": product_id, "quantity": quantity}

    def delete_product(self, producer_id: int, product_id: int) -> None:
        if not self.products.get_row(product_id, producer_id=producer_id):
            raise NotFound("Product not found or not owned by you")

        # order items keep referencing sold products
        if self.products.has_orders(product_id):
            raise Conflict("Product has orders and cannot be deleted")

        self.products.delete(product_id, producer_id)
        self.products.commit()
        logger.info("Product deleted", producer_id=producer_id, product_id=product_id)

    # orders & favorites

    def list_orders(self, producer_id: int) -> List[Dict[str, Any]]:
        return [dict(row._mapping) for row in self.orders.list_producer_orders(producer_id)]

    def get_order(self, producer_id: int, order_id: int) -> Dict[str, Any]:
        order = self.orders.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        items = self.orders.list_items(order_id, producer_id=producer_id)
        if not items:
            raise Forbidden("This order does not contain any item from you")

        consumer = self.users.get_user(order.consumer_id)

        return {
            "order": {
                "order_id": order.order_id,
                "order_date": order.order_date,
                "total_amount": order.total_amount,
                "consumer_id": order.consumer_id,
                "consumer_name": consumer.name if consumer else None,
                "consumer_email": consumer.email if consumer else None,
            },
            "consumer": consumer and {
                "user_id": consumer.user_id,
                "name": consumer.name,
                "email": consumer.email,
            },
            "items": [dict(row._mapping) for row in items],
        }

    def list_favorites(self, producer_id: int) -> List[Dict[str, Any]]:
        return [dict(row._mapping) for row in self.favorites.list_for_producer(producer_id)]

    # stats

    def dashboard(self, producer_id: int) -> Dict[str, int]:
        return {
            "product_count": self.products.count_for_producer(producer_id),
            "orders_count": self.orders.count_producer_orders(producer_id),
            "fav_count": self.favorites.count_consumers_for_producer(producer_id),
        }
