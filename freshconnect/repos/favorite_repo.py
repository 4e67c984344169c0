# freshconnect/repos/favorite_repo.py
from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from freshconnect.data.models import FavoriteModel, ProductModel, TalukModel, UserModel


class FavoriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, consumer_id: int, product_id: int) -> FavoriteModel | None:
        return self.db.get(FavoriteModel, (consumer_id, product_id))

    def add(self, favorite: FavoriteModel) -> FavoriteModel:
        self.db.add(favorite)
        self.db.flush()
        return favorite

    def delete(self, consumer_id: int, product_id: int) -> int:
        result = self.db.execute(
            delete(FavoriteModel).where(
                FavoriteModel.consumer_id == consumer_id,
                FavoriteModel.product_id == product_id,
            )
        )
        return result.rowcount

    def list_for_consumer(self, consumer_id: int):
        return self.db.execute(
            select(
                FavoriteModel.product_id,
                ProductModel.name,
                ProductModel.price,
                ProductModel.quantity,
                ProductModel.taluk_id,
                TalukModel.name.label("taluk_name"),
                ProductModel.producer_id,
                FavoriteModel.added_at,
            )
            .join(ProductModel, FavoriteModel.product_id == ProductModel.product_id)
            .outerjoin(TalukModel, ProductModel.taluk_id == TalukModel.taluk_id)
            .where(FavoriteModel.consumer_id == consumer_id)
            .order_by(FavoriteModel.added_at.desc())
        ).all()

    def list_for_producer(self, producer_id: int, limit: int = 500):
        return self.db.execute(
            select(
                FavoriteModel.consumer_id,
                UserModel.name.label("consumer_name"),
                UserModel.email.label("consumer_email"),
                FavoriteModel.product_id,
                ProductModel.name.label("product_name"),
                FavoriteModel.added_at,
            )
            .join(ProductModel, FavoriteModel.product_id == ProductModel.product_id)
            .join(UserModel, FavoriteModel.consumer_id == UserModel.user_id)
            .where(ProductModel.producer_id == producer_id)
            .order_by(FavoriteModel.added_at.desc())
            .limit(limit)
        ).all()

    def count_consumers_for_producer(self, producer_id: int) -> int:
        return self.db.execute(
            select(func.count(func.distinct(FavoriteModel.consumer_id)))
            .select_from(FavoriteModel)
            .join(ProductModel, FavoriteModel.product_id == ProductModel.product_id)
            .where(ProductModel.producer_id == producer_id)
        ).scalar_one()

    def commit(self) -> None:
        self.db.commit()
