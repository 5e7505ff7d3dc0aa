#import all models so SQLAlchemy registers them in Base.metadata

from app.data.models.user import UserModel
from app.data.models.product import ProductModel
from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel

__all__ = ["UserModel", "ProductModel", "OrderModel", "OrderItemModel"]
