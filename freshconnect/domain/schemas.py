# freshconnect/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# rendered as a JSON number instead of pydantic's decimal string
JsonAmount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# Users

class UserCreate(BaseModel):
    """Registration payload; credentials are handled by the auth layer."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    role: Literal["Consumer", "Producer"] = "Consumer"
    taluk_id: int = Field(..., gt=0)


class UserCreated(BaseModel):
    user_id: int
    email: str


class UserRead(BaseModel):
    user_id: int
    name: str
    email: str
    role: str
    taluk_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


# Lookups

class TalukOut(BaseModel):
    taluk_id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CategoryOut(BaseModel):
    category_id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ExpiryTypeOut(BaseModel):
    expiry_type_id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


# Products

class ProductSort(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"


class ProductOut(BaseModel):
    """Product row with lookup names and producer contact."""

    product_id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    quantity: int
    category_id: int
    category_name: Optional[str] = None
    expiry_type_id: int
    expiry_name: Optional[str] = None
    taluk_id: int
    taluk_name: Optional[str] = None
    producer_id: int
    producer_name: Optional[str] = None
    producer_email: Optional[str] = None


class ConsumerProductOut(ProductOut):
    is_favorite: bool = False
    in_cart_quantity: int = 0


class ProductFeedOut(BaseModel):
    page: int
    limit: int
    results: List[ConsumerProductOut]


class ProducerContactOut(BaseModel):
    producer_id: int
    producer_name: str
    producer_email: str
    taluk_id: Optional[int] = None
    taluk_name: Optional[str] = None


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    quantity: int = Field(0, ge=0, strict=True)
    category_id: int = Field(..., gt=0)
    expiry_type_id: int = Field(..., gt=0)
    taluk_id: int = Field(..., gt=0)


class ProductUpdate(BaseModel):
    """Partial update; only the fields present in the body are written."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity: Optional[int] = Field(None, ge=0, strict=True)
    category_id: Optional[int] = Field(None, gt=0)
    expiry_type_id: Optional[int] = Field(None, gt=0)
    taluk_id: Optional[int] = Field(None, gt=0)

    model_config = ConfigDict(extra="forbid")


class QuantityIn(BaseModel):
    quantity: int = Field(..., ge=0, strict=True)


class StockOut(BaseModel):
    product_id: int
    quantity: int


# Favorites

class FavoriteIn(BaseModel):
    product_id: int = Field(..., gt=0, strict=True)


class FavoriteAdded(BaseModel):
    success: bool = True
    created: bool


class FavoriteOut(BaseModel):
    product_id: int
    name: str
    price: Decimal
    quantity: int
    taluk_id: int
    taluk_name: Optional[str] = None
    producer_id: int
    added_at: datetime


# Cart

class CartItemIn(BaseModel):
    """Schema for adding a product to the cart."""

    product_id: int = Field(..., gt=0, strict=True)
    quantity: int = Field(..., gt=0, strict=True)


class CartItemUpdate(BaseModel):
    """Quantity 0 removes the line."""

    quantity: int = Field(..., ge=0, strict=True)


class CartItemOut(BaseModel):
    cart_item_id: int
    product_id: int
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class CartLineOut(BaseModel):
    cart_item_id: int
    cart_id: int
    product_id: int
    quantity: int
    name: str
    price: Decimal
    product_stock: int
    producer_id: int
    taluk_name: Optional[str] = None


class CheckoutIn(BaseModel):
    cart_id: Optional[int] = Field(None, gt=0)


class CheckoutOut(BaseModel):
    success: bool = True
    order_id: int
    total_amount: JsonAmount


# Orders

class OrderSummaryOut(BaseModel):
    order_id: int
    order_date: datetime
    total_amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderItemOut(BaseModel):
    order_item_id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    product_name: Optional[str] = None
    producer_id: Optional[int] = None


class OrderDetailOut(BaseModel):
    order: OrderSummaryOut
    items: List[OrderItemOut]


# Producer dashboard

class ProducerOrderOut(BaseModel):
    order_id: int
    order_date: datetime
    total_amount: Decimal
    consumer_id: int
    consumer_name: Optional[str] = None
    consumer_email: Optional[str] = None


class ConsumerContactOut(BaseModel):
    user_id: int
    name: str
    email: str


class ProducerOrderDetailOut(BaseModel):
    order: ProducerOrderOut
    consumer: Optional[ConsumerContactOut] = None
    items: List[OrderItemOut]


class ProducerFavoriteOut(BaseModel):
    consumer_id: int
    consumer_name: str
    consumer_email: str
    product_id: int
    product_name: str
    added_at: datetime


class DashboardOut(BaseModel):
    product_count: int
    orders_count: int
    fav_count: int


# Generic

class SuccessOut(BaseModel):
    success: bool = True


class DeletedOut(BaseModel):
    success: bool = True
    deleted: int
