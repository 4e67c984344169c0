from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freshconnect.data.models.user import UserModel
from freshconnect.domain.errors import Conflict, NotFound, ValidationError
from freshconnect.domain.schemas import UserCreate, UserCreated, UserRead
from freshconnect.repos.lookup_repo import LookupRepo
from freshconnect.repos.user_repo import UserRepo
from freshconnect.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)
        self.lookups = LookupRepo(db)

    def register(self, payload: UserCreate) -> UserCreated:
        if self.repo.get_by_email(payload.email):
            raise Conflict("Email already registered")

        if not self.lookups.taluk_exists(payload.taluk_id):
            raise ValidationError("Unknown taluk_id")

        user = UserModel(
            name=payload.name,
            email=payload.email,
            role=payload.role,
            taluk_id=payload.taluk_id,
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError as e:
            # lost a race on the unique email
            self.db.rollback()
            raise Conflict("Email already registered") from e

        logger.info("User registered", user_id=created.user_id, role=created.role)
        return UserCreated(user_id=created.user_id, email=created.email)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return UserRead.model_validate(user)
