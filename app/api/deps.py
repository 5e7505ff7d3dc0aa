# app/api/deps.py
import redis
from fastapi import Depends
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.data.redis_client import get_redis
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.services.notification_service import NotificationService
from app.services.order_service import OrderService
from app.services.user_service import UserService


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_cart_service(
    db: Session = Depends(get_db),
    client: redis.Redis = Depends(get_redis),
) -> CartService:
    return CartService(repo=CartRepo(client), products=ProductRepo(db))


def get_checkout_service(
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
) -> CheckoutService:
    return CheckoutService(db, notification_service=notification_service)


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)
