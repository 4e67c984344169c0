# freshconnect/repos/order_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from freshconnect.data.models import OrderModel, OrderItemModel, ProductModel, UserModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        # flush only, the caller owns the transaction
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_consumer_order(self, order_id: int, consumer_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(
                OrderModel.order_id == order_id,
                OrderModel.consumer_id == consumer_id,
            )
        ).scalar_one_or_none()

    def list_consumer_orders(self, consumer_id: int) -> list[OrderModel]:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.consumer_id == consumer_id)
            .order_by(OrderModel.order_date.desc(), OrderModel.order_id.desc())
        ).scalars().all()

    def list_items(self, order_id: int, producer_id: int | None = None):
        stmt = (
            select(
                OrderItemModel.order_item_id,
                OrderItemModel.product_id,
                OrderItemModel.quantity,
                OrderItemModel.unit_price,
                ProductModel.name.label("product_name"),
                ProductModel.producer_id,
            )
            .join(ProductModel, OrderItemModel.product_id == ProductModel.product_id)
            .where(OrderItemModel.order_id == order_id)
            .order_by(OrderItemModel.order_item_id)
        )
        if producer_id is not None:
            stmt = stmt.where(ProductModel.producer_id == producer_id)
        return self.db.execute(stmt).all()

    # producer side

    def _producer_order_ids(self, producer_id: int):
        return (
            select(OrderItemModel.order_id)
            .join(ProductModel, OrderItemModel.product_id == ProductModel.product_id)
            .where(ProductModel.producer_id == producer_id)
        )

    def list_producer_orders(self, producer_id: int, limit: int = 200):
        return self.db.execute(
            select(
                OrderModel.order_id,
                OrderModel.order_date,
                OrderModel.total_amount,
                OrderModel.consumer_id,
                UserModel.name.label("consumer_name"),
                UserModel.email.label("consumer_email"),
            )
            .outerjoin(UserModel, OrderModel.consumer_id == UserModel.user_id)
            .where(OrderModel.order_id.in_(self._producer_order_ids(producer_id)))
            .order_by(OrderModel.order_date.desc(), OrderModel.order_id.desc())
            .limit(limit)
        ).all()

    def count_producer_orders(self, producer_id: int) -> int:
        return self.db.execute(
            select(func.count(func.distinct(OrderItemModel.order_id)))
            .select_from(OrderItemModel)
            .join(ProductModel, OrderItemModel.product_id == ProductModel.product_id)
            .where(ProductModel.producer_id == producer_id)
        ).scalar_one()
