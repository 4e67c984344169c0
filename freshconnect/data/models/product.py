# freshconnect/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, CheckConstraint

from freshconnect.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True)
    producer_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)

    category_id = Column(Integer, ForeignKey("product_categories.category_id"), nullable=False)
    expiry_type_id = Column(Integer, ForeignKey("expiry_types.expiry_type_id"), nullable=False)
    taluk_id = Column(Integer, ForeignKey("taluks.taluk_id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
    )
