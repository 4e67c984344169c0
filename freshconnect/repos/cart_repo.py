# freshconnect/repos/cart_repo.py
from sqlalchemy import select, delete, update
from sqlalchemy.orm import Session

from freshconnect.data.models import (
    CartModel,
    CartItemModel,
    ProductModel,
    TalukModel,
)


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    # carts

    def get_latest_cart(self, consumer_id: int, for_update: bool = False) -> CartModel | None:
        stmt = (
            select(CartModel)
            .where(CartModel.consumer_id == consumer_id)
            .order_by(CartModel.created_at.desc(), CartModel.cart_id.desc())
            .limit(1)
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_cart(self, cart_id: int, consumer_id: int, for_update: bool = False) -> CartModel | None:
        stmt = select(CartModel).where(
            CartModel.cart_id == cart_id,
            CartModel.consumer_id == consumer_id,
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def delete_cart(self, cart_id: int) -> None:
        self.db.execute(delete(CartItemModel).where(CartItemModel.cart_id == cart_id))
        self.db.execute(delete(CartModel).where(CartModel.cart_id == cart_id))

    # items

    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def get_owned_item(self, cart_item_id: int, consumer_id: int):
        """(CartItemModel, ProductModel) when the line belongs to the consumer."""
        return self.db.execute(
            select(CartItemModel, ProductModel)
            .join(CartModel, CartItemModel.cart_id == CartModel.cart_id)
            .join(ProductModel, CartItemModel.product_id == ProductModel.product_id)
            .where(
                CartItemModel.cart_item_id == cart_item_id,
                CartModel.consumer_id == consumer_id,
            )
        ).first()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def increment_item(self, cart_item_id: int, quantity: int) -> None:
        """quantity = quantity + n as a single UPDATE."""
        self.db.execute(
            update(CartItemModel)
            .where(CartItemModel.cart_item_id == cart_item_id)
            .values(quantity=CartItemModel.quantity + quantity)
            .execution_options(synchronize_session=False)
        )

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def list_lines(self, consumer_id: int):
        return self.db.execute(
            select(
                CartItemModel.cart_item_id,
                CartItemModel.cart_id,
                CartItemModel.product_id,
                CartItemModel.quantity,
                ProductModel.name,
                ProductModel.price,
                ProductModel.quantity.label("product_stock"),
                ProductModel.producer_id,
                TalukModel.name.label("taluk_name"),
            )
            .join(CartModel, CartItemModel.cart_id == CartModel.cart_id)
            .join(ProductModel, CartItemModel.product_id == ProductModel.product_id)
            .outerjoin(TalukModel, ProductModel.taluk_id == TalukModel.taluk_id)
            .where(CartModel.consumer_id == consumer_id)
            .order_by(CartItemModel.cart_item_id)
        ).all()

    def lock_checkout_lines(self, cart_id: int) -> list[tuple[CartItemModel, ProductModel]]:
        """
        Cart lines with their products, read with FOR UPDATE so the stock and
        price stay fixed until the transaction ends. populate_existing makes
        sure the locked values replace anything already in the session.
        """
        rows = self.db.execute(
            select(CartItemModel, ProductModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.product_id)
            .where(CartItemModel.cart_id == cart_id)
            .order_by(ProductModel.product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).all()
        return [(item, product) for item, product in rows]

    def refresh(self, item: CartItemModel) -> CartItemModel:
        self.db.refresh(item)
        return item

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
