# freshconnect/services/favorite_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from freshconnect.data.models import FavoriteModel
from freshconnect.domain.errors import NotFound, ValidationError
from freshconnect.repos.favorite_repo import FavoriteRepo
from freshconnect.repos.product_repo import ProductRepo
from freshconnect.utils.logging import get_logger

logger = get_logger(__name__)


class FavoriteService:
    def __init__(self, db: Session):
        self.repo = FavoriteRepo(db)
        self.product_repo = ProductRepo(db)

    def add(self, consumer_id: int, product_id: int) -> bool:
        """Insert if absent. Returns False when it was already a favorite."""
        if not self.product_repo.get(product_id):
            raise ValidationError("product_id does not reference an existing product")

        if self.repo.get(consumer_id, product_id):
            return False

        self.repo.add(FavoriteModel(consumer_id=consumer_id, product_id=product_id))
        self.repo.commit()
        logger.info("Favorite added", consumer_id=consumer_id, product_id=product_id)
        return True

    def remove(self, consumer_id: int, product_id: int) -> None:
        if self.repo.delete(consumer_id, product_id) == 0:
            raise NotFound("Not found in favorites")
        self.repo.commit()

    def list_favorites(self, consumer_id: int) -> List[Dict[str, Any]]:
        return [dict(row._mapping) for row in self.repo.list_for_consumer(consumer_id)]
