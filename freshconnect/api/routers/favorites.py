# freshconnect/api/routers/favorites.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freshconnect.api.deps import require_consumer
from freshconnect.data.database import get_db
from freshconnect.data.models.user import UserModel
from freshconnect.domain.schemas import FavoriteAdded, FavoriteIn, FavoriteOut, SuccessOut
from freshconnect.services.favorite_service import FavoriteService

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.post("", response_model=FavoriteAdded)
def add_favorite(
    payload: FavoriteIn,
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    created = FavoriteService(db).add(user.user_id, payload.product_id)
    return FavoriteAdded(created=created)


@router.delete("/{product_id}", response_model=SuccessOut)
def remove_favorite(
    product_id: int,
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    FavoriteService(db).remove(user.user_id, product_id)
    return SuccessOut()


@router.get("", response_model=List[FavoriteOut])
def list_favorites(
    user: UserModel = Depends(require_consumer),
    db: Session = Depends(get_db),
):
    return FavoriteService(db).list_favorites(user.user_id)
