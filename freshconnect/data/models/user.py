from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from freshconnect.data.database import Base

ROLE_CONSUMER = "Consumer"
ROLE_PRODUCER = "Producer"


class UserModel(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(20), nullable=False)  # Consumer, Producer
    taluk_id = Column(Integer, ForeignKey("taluks.taluk_id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
