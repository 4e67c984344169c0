# freshconnect/api/routers/products.py
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from freshconnect.api.deps import require_consumer
from freshconnect.data.database import get_db
from freshconnect.data.models.user import UserModel
from freshconnect.domain.errors import ValidationError
from freshconnect.domain.schemas import (
    ConsumerProductOut,
    ProducerContactOut,
    ProductFeedOut,
    ProductSort,
)
from freshconnect.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductFeedOut)
def search_products(
    request: Request,
    q: str | None = Query(None, max_length=200),
    category_id: int | None = Query(None, gt=0),
    expiry_type_id: int | None = Query(None, gt=0),
    taluk_id: int | None = Query(None, gt=0),
    include_other: bool = False,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    sort: ProductSort = ProductSort.NEWEST,
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    """Product feed for the consumer: search, filters, taluk scope, paging."""
    settings = request.app.state.settings
    if limit is None:
        limit = settings.default_page_size
    if limit > settings.max_page_size:
        raise ValidationError(f"limit must be at most {settings.max_page_size}")

    return ProductService(db).search(
        user,
        q=q,
        category_id=category_id,
        expiry_type_id=expiry_type_id,
        taluk_id=taluk_id,
        include_other=include_other,
        page=page,
        limit=limit,
        sort=sort,
    )


@router.get("/{product_id}", response_model=ConsumerProductOut)
def get_product(
    product_id: int,
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    return ProductService(db).detail(user, product_id)


@router.get("/{product_id}/contact", response_model=ProducerContactOut)
def get_producer_contact(
    product_id: int,
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    return ProductService(db).producer_contact(product_id)
