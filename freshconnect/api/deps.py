# freshconnect/api/deps.py
from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from freshconnect.data.database import get_db
from freshconnect.data.models.user import UserModel, ROLE_CONSUMER, ROLE_PRODUCER
from freshconnect.domain.errors import Forbidden
from freshconnect.repos.user_repo import UserRepo


def get_current_user(
    x_user_id: int | None = Header(None),
    db: Session = Depends(get_db),
) -> UserModel:
    """
    The authentication layer in front of the API resolves the token and
    forwards the user id as X-User-Id; role and taluk come from the database.
    """
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")

    user = UserRepo(db).get_user(x_user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


def require_consumer(user: UserModel = Depends(get_current_user)) -> UserModel:
    if user.role != ROLE_CONSUMER:
        raise Forbidden("Access allowed for consumers only")
    return user


def require_producer(user: UserModel = Depends(get_current_user)) -> UserModel:
    if user.role != ROLE_PRODUCER:
        raise Forbidden("Access allowed for producers only")
    return user
