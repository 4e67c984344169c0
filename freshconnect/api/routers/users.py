from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freshconnect.data.database import get_db
from freshconnect.domain.schemas import UserCreate, UserCreated, UserRead
from freshconnect.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserCreated, status_code=201)
def register_user(payload: UserCreate, db: Session = Depends(get_db)):
    return UserService(db).register(payload)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return UserService(db).get_user(user_id)
