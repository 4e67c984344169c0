# freshconnect/services/cart_service.py
from typing import Any, Dict, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freshconnect.data.models import CartModel, CartItemModel
from freshconnect.domain.errors import InsufficientStock, NotFound
from freshconnect.repos.cart_repo import CartRepo
from freshconnect.repos.product_repo import ProductRepo
from freshconnect.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases: commands (add, update, remove) change the consumer's
    cart, the query (list_items) only reads it. Stock checks here are best
    effort; checkout validates again under lock.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.product_repo = ProductRepo(db)

    # query

    def list_items(self, consumer_id: int) -> List[Dict[str, Any]]:
        return [dict(row._mapping) for row in self.repo.list_lines(consumer_id)]

    # commands

    def _get_or_create_cart(self, consumer_id: int) -> CartModel:
        cart = self.repo.get_latest_cart(consumer_id)
        if cart:
            return cart

        try:
            created = self.repo.create_cart(CartModel(consumer_id=consumer_id))
        except IntegrityError:
            # a concurrent request created it first
            self.repo.rollback()
            return self.repo.get_latest_cart(consumer_id)

        logger.info("Cart created", cart_id=created.cart_id, consumer_id=consumer_id)
        return created

    def add_item(self, consumer_id: int, product_id: int, quantity: int) -> Tuple[CartItemModel, bool]:
        """
        Add a product or increase the quantity of its existing line.
        Returns the line and whether it was newly created.
        """
        product = self.product_repo.get(product_id)

        if not product:
            raise NotFound("Product not found")

        if product.quantity < quantity:
            raise InsufficientStock(product_id)

        cart = self._get_or_create_cart(consumer_id)
        item = self.repo.get_cart_item(cart.cart_id, product_id)
        created = item is None

        if created:
            try:
                item = self.repo.add_cart_item(
                    CartItemModel(
                        cart_id=cart.cart_id,
                        product_id=product_id,
                        quantity=quantity,
                    )
                )
            except IntegrityError:
                # same product added concurrently, fall back to incrementing
                self.repo.rollback()
                cart = self.repo.get_latest_cart(consumer_id)
                item = self.repo.get_cart_item(cart.cart_id, product_id)
                created = False

        if not created:
            self.repo.increment_item(item.cart_item_id, quantity)

        self.repo.commit()
        self.repo.refresh(item)

        logger.info(
            "Cart line added" if created else "Cart line incremented",
            cart_id=cart.cart_id,
            product_id=product_id,
            quantity=item.quantity,
        )
        return item, created

    def update_item(self, consumer_id: int, cart_item_id: int, quantity: int) -> CartItemModel | None:
        """Set the line quantity. 0 removes the line and returns None."""
        row = self.repo.get_owned_item(cart_item_id, consumer_id)

        if not row:
            raise NotFound("Cart item not found")

        item, product = row

        if quantity > product.quantity:
            raise InsufficientStock(product.product_id)

        if quantity == 0:
            self.repo.delete_cart_item(item)
            self.repo.commit()
            logger.info("Cart line removed", cart_item_id=cart_item_id, consumer_id=consumer_id)
            return None

        item.quantity = quantity
        self.repo.commit()
        return item

    def remove_item(self, consumer_id: int, cart_item_id: int) -> None:
        row = self.repo.get_owned_item(cart_item_id, consumer_id)

        if not row:
            raise NotFound("Cart item not found")

        self.repo.delete_cart_item(row[0])
        self.repo.commit()
        logger.info("Cart line removed", cart_item_id=cart_item_id, consumer_id=consumer_id)
