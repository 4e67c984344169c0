# freshconnect/repos/product_repo.py
from sqlalchemy import Select, select, update, delete, or_, func
from sqlalchemy.orm import Session

from freshconnect.data.models import (
    ProductModel,
    ProductCategoryModel,
    ExpiryTypeModel,
    TalukModel,
    UserModel,
    CartModel,
    CartItemModel,
    FavoriteModel,
    OrderItemModel,
)
from freshconnect.domain.schemas import ProductSort

_ORDERING = {
    ProductSort.NEWEST: (ProductModel.product_id.desc(),),
    ProductSort.PRICE_ASC: (ProductModel.price.asc(), ProductModel.product_id.desc()),
    ProductSort.PRICE_DESC: (ProductModel.price.desc(), ProductModel.product_id.desc()),
}


def product_select() -> Select:
    """Product joined with its category, expiry type, taluk and producer."""
    return (
        select(
            ProductModel,
            ProductCategoryModel.name.label("category_name"),
            ExpiryTypeModel.name.label("expiry_name"),
            TalukModel.name.label("taluk_name"),
            UserModel.name.label("producer_name"),
            UserModel.email.label("producer_email"),
        )
        .outerjoin(ProductCategoryModel, ProductModel.category_id == ProductCategoryModel.category_id)
        .outerjoin(ExpiryTypeModel, ProductModel.expiry_type_id == ExpiryTypeModel.expiry_type_id)
        .outerjoin(TalukModel, ProductModel.taluk_id == TalukModel.taluk_id)
        .outerjoin(UserModel, ProductModel.producer_id == UserModel.user_id)
    )


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    # reads

    def get(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_row(self, product_id: int, producer_id: int | None = None):
        stmt = product_select().where(ProductModel.product_id == product_id)
        if producer_id is not None:
            stmt = stmt.where(ProductModel.producer_id == producer_id)
        return self.db.execute(stmt).first()

    def search(
        self,
        *,
        q: str | None,
        category_id: int | None,
        expiry_type_id: int | None,
        taluk_id: int | None,
        sort: ProductSort,
        limit: int,
        offset: int,
    ):
        # only available items
        stmt = product_select().where(ProductModel.quantity > 0)

        if taluk_id is not None:
            stmt = stmt.where(ProductModel.taluk_id == taluk_id)
        if q:
            pattern = f"%{q}%"
            stmt = stmt.where(
                or_(ProductModel.name.ilike(pattern), ProductModel.description.ilike(pattern))
            )
        if category_id is not None:
            stmt = stmt.where(ProductModel.category_id == category_id)
        if expiry_type_id is not None:
            stmt = stmt.where(ProductModel.expiry_type_id == expiry_type_id)

        stmt = stmt.order_by(*_ORDERING[sort]).limit(limit).offset(offset)
        return self.db.execute(stmt).all()

    def list_for_producer(self, producer_id: int):
        stmt = (
            product_select()
            .where(ProductModel.producer_id == producer_id)
            .order_by(ProductModel.product_id.desc())
        )
        return self.db.execute(stmt).all()

    def favorite_ids(self, consumer_id: int, product_ids: list[int]) -> set[int]:
        if not product_ids:
            return set()
        rows = self.db.execute(
            select(FavoriteModel.product_id).where(
                FavoriteModel.consumer_id == consumer_id,
                FavoriteModel.product_id.in_(product_ids),
            )
        ).scalars()
        return set(rows)

    def cart_quantities(self, consumer_id: int, product_ids: list[int]) -> dict[int, int]:
        """Quantity of each product across all of the consumer's carts."""
        if not product_ids:
            return {}
        rows = self.db.execute(
            select(CartItemModel.product_id, func.sum(CartItemModel.quantity))
            .join(CartModel, CartItemModel.cart_id == CartModel.cart_id)
            .where(
                CartModel.consumer_id == consumer_id,
                CartItemModel.product_id.in_(product_ids),
            )
            .group_by(CartItemModel.product_id)
        ).all()
        return {product_id: int(qty) for product_id, qty in rows}

    def contact(self, product_id: int):
        return self.db.execute(
            select(
                UserModel.user_id.label("producer_id"),
                UserModel.name.label("producer_name"),
                UserModel.email.label("producer_email"),
                TalukModel.taluk_id,
                TalukModel.name.label("taluk_name"),
            )
            .select_from(ProductModel)
            .join(UserModel, ProductModel.producer_id == UserModel.user_id)
            .outerjoin(TalukModel, ProductModel.taluk_id == TalukModel.taluk_id)
            .where(ProductModel.product_id == product_id)
        ).first()

    def has_orders(self, product_id: int) -> bool:
        return self.db.execute(
            select(OrderItemModel.order_item_id).where(OrderItemModel.product_id == product_id).limit(1)
        ).first() is not None

    def count_for_producer(self, producer_id: int) -> int:
        return self.db.execute(
            select(func.count()).select_from(ProductModel).where(ProductModel.producer_id == producer_id)
        ).scalar_one()

    # writes

    def add(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def update_fields(self, product_id: int, producer_id: int, values: dict) -> int:
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.product_id == product_id, ProductModel.producer_id == producer_id)
            .values(**values)
        )
        return result.rowcount

    def delete(self, product_id: int, producer_id: int) -> int:
        self.db.execute(delete(CartItemModel).where(CartItemModel.product_id == product_id))
        self.db.execute(delete(FavoriteModel).where(FavoriteModel.product_id == product_id))
        result = self.db.execute(
            delete(ProductModel)
            .where(ProductModel.product_id == product_id, ProductModel.producer_id == producer_id)
        )
        return result.rowcount

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """
        Guarded decrement: the row is only touched while enough stock remains,
        so quantity can never go below zero. False means nothing was updated.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.product_id == product_id, ProductModel.quantity >= quantity)
            .values(quantity=ProductModel.quantity - quantity)
        )
        return result.rowcount == 1

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
