from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, DateTime

from freshconnect.data.database import Base


class FavoriteModel(Base):
    __tablename__ = "favorites"

    consumer_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True)
    product_id = Column(Integer, ForeignKey("products.product_id", ondelete="CASCADE"), primary_key=True)
    added_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
