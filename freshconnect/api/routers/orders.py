# freshconnect/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freshconnect.api.deps import require_consumer
from freshconnect.data.database import get_db
from freshconnect.data.models.user import UserModel
from freshconnect.domain.schemas import OrderDetailOut, OrderSummaryOut
from freshconnect.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[OrderSummaryOut])
def list_orders(
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    return OrderService(db).list_orders(user.user_id)


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    """Order with its line items; other consumers' orders are reported as missing."""
    return OrderService(db).get_order(user.user_id, order_id)
