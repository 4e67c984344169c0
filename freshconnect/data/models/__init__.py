# all models imported here so SQLAlchemy registers them in Base.metadata

from freshconnect.data.models.lookups import TalukModel, ProductCategoryModel, ExpiryTypeModel
from freshconnect.data.models.user import UserModel
from freshconnect.data.models.product import ProductModel
from freshconnect.data.models.cart import CartModel
from freshconnect.data.models.cart_item import CartItemModel
from freshconnect.data.models.order import OrderModel
from freshconnect.data.models.order_item import OrderItemModel
from freshconnect.data.models.favorite import FavoriteModel

__all__ = [
    "TalukModel",
    "ProductCategoryModel",
    "ExpiryTypeModel",
    "UserModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "FavoriteModel",
]
