# freshconnect/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from freshconnect.data.models import OrderModel, OrderItemModel
from freshconnect.domain.errors import (
    CartNotFound,
    EmptyCart,
    InsufficientStock,
    InternalError,
    NotFound,
)
from freshconnect.repos.cart_repo import CartRepo
from freshconnect.repos.order_repo import OrderRepo
from freshconnect.repos.product_repo import ProductRepo
from freshconnect.services.notification_service import NotificationService
from freshconnect.utils.logging import get_logger
from freshconnect.utils.retry import db_retry

logger = get_logger(__name__)


class OrderService:
    """
    Orders domain: checkout (cart -> order) and the consumer's order history.
    """

    def __init__(
        self,
        db: Session,
        notification_service: NotificationService | None = None,
        retry_attempts: int = 3,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.product_repo = ProductRepo(db)
        self.notification_service = notification_service or NotificationService()
        self.retry_attempts = retry_attempts

    # commands

    def checkout(self, consumer_id: int, cart_id: int | None = None) -> Dict[str, Any]:
        """
        Use case: turn the consumer's cart into an order.

        Runs as one transaction. Cart lines and their products are read with
        a locking read, every line is validated against the locked stock, the
        order and its items are written with the locked unit prices, stock is
        decremented and the cart is deleted. Any failure rolls everything back.
        Lock timeouts and deadlocks retry the whole transaction.
        """
        try:
            result = db_retry(self.retry_attempts)(self._checkout_once)(consumer_id, cart_id)
        except SQLAlchemyError as e:
            logger.error("Checkout failed", consumer_id=consumer_id, exc_info=e)
            raise InternalError("DB error during checkout") from e

        # the order is committed at this point
        try:
            self.notification_service.send_order_notification(
                consumer_id,
                result["order_id"],
                result["total_amount"],
                result["item_count"],
            )
        except Exception as e:
            logger.warning(
                "Failed to queue order notification",
                order_id=result["order_id"],
                error=str(e),
            )

        return result

    def _checkout_once(self, consumer_id: int, cart_id: int | None) -> Dict[str, Any]:
        try:
            if cart_id is None:
                cart = self.cart_repo.get_latest_cart(consumer_id, for_update=True)
            else:
                cart = self.cart_repo.get_cart(cart_id, consumer_id, for_update=True)

            if not cart:
                raise CartNotFound()

            lines = self.cart_repo.lock_checkout_lines(cart.cart_id)
            if not lines:
                raise EmptyCart()

            for item, product in lines:
                if item.quantity > product.quantity:
                    raise InsufficientStock(product.product_id)

            # prices as read under the lock
            total = sum(
                (product.price * item.quantity for item, product in lines),
                Decimal("0.00"),
            )

            order = self.repo.create_order(OrderModel(consumer_id=consumer_id, total_amount=total))

            for item, product in lines:
                self.repo.add_order_item(
                    OrderItemModel(
                        order_id=order.order_id,
                        product_id=product.product_id,
                        quantity=item.quantity,
                        unit_price=product.price,
                    )
                )
                if not self.product_repo.decrement_stock(product.product_id, item.quantity):
                    raise InsufficientStock(product.product_id)

            self.cart_repo.delete_cart(cart.cart_id)
            self.db.commit()

        except Exception:
            self._rollback()
            raise

        logger.info(
            "Order created",
            order_id=order.order_id,
            cart_id=cart.cart_id,
            consumer_id=consumer_id,
            total_amount=str(total),
        )

        return {
            "success": True,
            "order_id": order.order_id,
            "total_amount": total,
            "item_count": len(lines),
        }

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            # nothing left to undo if the connection itself is gone
            logger.warning("Rollback failed", error=str(e))

    # queries

    def list_orders(self, consumer_id: int) -> List[OrderModel]:
        return self.repo.list_consumer_orders(consumer_id)

    def get_order(self, consumer_id: int, order_id: int) -> Dict[str, Any]:
        order = self.repo.get_consumer_order(order_id, consumer_id)

        if not order:
            raise NotFound("Order not found")

        items = self.repo.list_items(order.order_id)

        return {
            "order": order,
            "items": [dict(row._mapping) for row in items],
        }
