#freshconnect/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Body, Depends, Request, Response
from sqlalchemy.orm import Session

from freshconnect.api.deps import require_consumer
from freshconnect.data.database import get_db
from freshconnect.data.models.user import UserModel
from freshconnect.domain.schemas import (
    CartItemIn,
    CartItemOut,
    CartItemUpdate,
    CartLineOut,
    CheckoutIn,
    CheckoutOut,
    SuccessOut,
)
from freshconnect.services.cart_service import CartService
from freshconnect.services.order_service import OrderService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=List[CartLineOut])
def list_cart(
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    return CartService(db).list_items(user.user_id)


@router.post("/items", response_model=CartItemOut, status_code=201)
def add_item(
    payload: CartItemIn,
    response: Response,
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    """201 for a new line, 200 when an existing line was incremented."""
    item, created = CartService(db).add_item(user.user_id, payload.product_id, payload.quantity)
    if not created:
        response.status_code = 200
    return item


@router.patch("/items/{cart_item_id}", response_model=CartItemOut | SuccessOut)
def update_item(
    cart_item_id: int,
    payload: CartItemUpdate,
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    item = CartService(db).update_item(user.user_id, cart_item_id, payload.quantity)
    if item is None:
        return SuccessOut()
    return CartItemOut.model_validate(item)


@router.delete("/items/{cart_item_id}", response_model=SuccessOut)
def remove_item(
    cart_item_id: int,
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    CartService(db).remove_item(user.user_id, cart_item_id)
    return SuccessOut()


@router.post("/checkout", response_model=CheckoutOut)
def checkout(
    request: Request,
    payload: CheckoutIn | None = Body(None),
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    """Converts the cart (given or most recent) into an order in one transaction."""
    svc = OrderService(db, retry_attempts=request.app.state.settings.checkout_retry_attempts)
    cart_id = payload.cart_id if payload else None
    return svc.checkout(user.user_id, cart_id)
