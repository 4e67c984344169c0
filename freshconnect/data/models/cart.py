#freshconnect/data/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship

from freshconnect.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    cart_id = Column(Integer, primary_key=True)
    consumer_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
    )

    # one open cart per consumer, checkout deletes it
    __table_args__ = (
        UniqueConstraint("consumer_id", name="u_cart_consumer"),
    )
