from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, DateTime, Numeric
from sqlalchemy.orm import relationship

from freshconnect.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    order_id = Column(Integer, primary_key=True)
    consumer_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)

    total_amount = Column(Numeric(10, 2), nullable=False)
    order_date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship("OrderItemModel", back_populates="order")
