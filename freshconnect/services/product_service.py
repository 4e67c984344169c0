# freshconnect/services/product_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from freshconnect.data.models import UserModel
from freshconnect.domain.errors import NotFound
from freshconnect.domain.schemas import ProductSort
from freshconnect.repos.product_repo import ProductRepo


def product_row_to_dict(row) -> Dict[str, Any]:
    product = row.ProductModel
    return {
        "product_id": product.product_id,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "quantity": product.quantity,
        "category_id": product.category_id,
        "category_name": row.category_name,
        "expiry_type_id": product.expiry_type_id,
        "expiry_name": row.expiry_name,
        "taluk_id": product.taluk_id,
        "taluk_name": row.taluk_name,
        "producer_id": product.producer_id,
        "producer_name": row.producer_name,
        "producer_email": row.producer_email,
    }


class ProductService:
    """Consumer-facing product feed, detail and producer contact."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def search(
        self,
        user: UserModel,
        *,
        q: str | None = None,
        category_id: int | None = None,
        expiry_type_id: int | None = None,
        taluk_id: int | None = None,
        include_other: bool = False,
        page: int = 1,
        limit: int = 20,
        sort: ProductSort = ProductSort.NEWEST,
    ) -> Dict[str, Any]:
        # without include_other the feed stays in one taluk: the requested
        # one, else the consumer's own; with it only an explicit taluk filters
        if include_other:
            taluk_filter = taluk_id
        else:
            taluk_filter = taluk_id or user.taluk_id

        rows = self.repo.search(
            q=q,
            category_id=category_id,
            expiry_type_id=expiry_type_id,
            taluk_id=taluk_filter,
            sort=sort,
            limit=limit,
            offset=(page - 1) * limit,
        )

        results = [product_row_to_dict(row) for row in rows]
        self._enrich(user.user_id, results)

        return {"page": page, "limit": limit, "results": results}

    def detail(self, user: UserModel, product_id: int) -> Dict[str, Any]:
        row = self.repo.get_row(product_id)

        if not row:
            raise NotFound("Product not found")

        product = product_row_to_dict(row)
        self._enrich(user.user_id, [product])
        return product

    def producer_contact(self, product_id: int) -> Dict[str, Any]:
        row = self.repo.contact(product_id)

        if not row:
            raise NotFound("Product/Producer not found")

        return dict(row._mapping)

    def _enrich(self, consumer_id: int, products: list) -> None:
        ids = [p["product_id"] for p in products]
        favorites = self.repo.favorite_ids(consumer_id, ids)
        in_cart = self.repo.cart_quantities(consumer_id, ids)

        for p in products:
            p["is_favorite"] = p["product_id"] in favorites
            p["in_cart_quantity"] = in_cart.get(p["product_id"], 0)
