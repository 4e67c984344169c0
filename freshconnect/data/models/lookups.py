# freshconnect/data/models/lookups.py
from sqlalchemy import Column, Integer, String

from freshconnect.data.database import Base


class TalukModel(Base):
    __tablename__ = "taluks"

    taluk_id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)


class ProductCategoryModel(Base):
    __tablename__ = "product_categories"

    category_id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)


class ExpiryTypeModel(Base):
    __tablename__ = "expiry_types"

    expiry_type_id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
