# freshconnect/api/routers/producer.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freshconnect.api.deps import require_producer
from freshconnect.data.database import get_db
from freshconnect.data.models.user import UserModel
from freshconnect.domain.schemas import (
    CategoryOut,
    DashboardOut,
    DeletedOut,
    ExpiryTypeOut,
    ProducerFavoriteOut,
    ProducerOrderDetailOut,
    ProducerOrderOut,
    ProductCreate,
    ProductOut,
    ProductUpdate,
    QuantityIn,
    StockOut,
    TalukOut,
    UserRead,
)
from freshconnect.services.producer_service import ProducerService

router = APIRouter(prefix="/producer", tags=["producer"])


def get_service(db: Session = Depends(get_db)) -> ProducerService:
    return ProducerService(db)


# lookups

@router.get("/lookups/categories", response_model=List[CategoryOut])
def list_categories(user: UserModel = Depends(require_producer), svc: ProducerService = Depends(get_service)):
    return svc.list_categories()


@router.get("/lookups/expiry-types", response_model=List[ExpiryTypeOut])
def list_expiry_types(user: UserModel = Depends(require_producer), svc: ProducerService = Depends(get_service)):
    return svc.list_expiry_types()


@router.get("/lookups/taluks", response_model=List[TalukOut])
def list_taluks(user: UserModel = Depends(require_producer), svc: ProducerService = Depends(get_service)):
    return svc.list_taluks()


# products

@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    user: UserModel = Depends(require_producer),
    svc: ProducerService = Depends(get_service),
):
    return svc.create_product(user.user_id, payload)


@router.get("/products", response_model=List[ProductOut])
def list_products(user: UserModel = Depends(require_producer), svc: ProducerService = Depends(get_service)):
    return svc.list_products(user.user_id)


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(
    product_id: int,
    user: UserModel = Depends(require_producer),
    svc: ProducerService = Depends(get_service),
):
    return svc.get_product(user.user_id, product_id)


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    user: UserModel = Depends(require_producer),
    svc: ProducerService = Depends(get_service),
):
    return svc.update_product(user.user_id, product_id, payload)


@router.delete("/products/{product_id}", response_model=DeletedOut)
def delete_product(
    product_id: int,
    user: UserModel = Depends(require_producer),
    svc: ProducerService = Depends(get_service),
):
    svc.delete_product(user.user_id, product_id)
    return DeletedOut(deleted=product_id)


@router.patch("/products/{product_id}/quantity", response_model=StockOut)
def set_quantity(
    product_id: int,
    payload: QuantityIn,
    user: UserModel = Depends(require_producer),
    svc: ProducerService = Depends(get_service),
):
    return svc.set_quantity(user.user_id, product_id, payload.quantity)


# orders & favorites

@router.get("/orders", response_model=List[ProducerOrderOut])
def list_orders(user: UserModel = Depends(require_producer), svc: ProducerService = Depends(get_service)):
    """Orders that contain at least one of the producer's products."""
    return svc.list_orders(user.user_id)


@router.get("/orders/{order_id}", response_model=ProducerOrderDetailOut)
def get_order(
    order_id: int,
    user: UserModel = Depends(require_producer),
    svc: ProducerService = Depends(get_service),
):
    return svc.get_order(user.user_id, order_id)


@router.get("/favorites", response_model=List[ProducerFavoriteOut])
def list_favorites(user: UserModel = Depends(require_producer), svc: ProducerService = Depends(get_service)):
    return svc.list_favorites(user.user_id)


# profile & stats

@router.get("/profile", response_model=UserRead)
def profile(user: UserModel = Depends(require_producer)):
    return user


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(user: UserModel = Depends(require_producer), svc: ProducerService = Depends(get_service)):
    return svc.dashboard(user.user_id)
