# app/services/order_service.py
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.data.models.product import ProductModel
from app.domain.schemas import (
    AdminOrderDetails,
    AdminOrderReport,
    OrderDetails,
    OrderItemDetail,
)
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.repos.user_repo import UserRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)

UNKNOWN_PRODUCT_NAME = "Unknown Product"
UNKNOWN_PRODUCT_IMAGE = "default.jpg"
UNKNOWN_USER_NAME = "Unknown User"


class OrderService:
    """
    Read side of the order ledger: order history and the admin report.

    Totals use the current product price (items carry no price of their own),
    so a price change also changes the totals of past orders.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    def orders_with_details(self, user_id: str) -> List[OrderDetails]:
        orders = self.repo.orders_by_user(user_id)
        return [self._details(order) for order in orders]

    def all_orders_with_details(self) -> AdminOrderReport:
        orders = self.repo.all_orders()
        users = self.users.get_users(o.user_id for o in orders)

        report = []
        for order in orders:
            details = self._details(order)
            user = users.get(order.user_id)
            if user:
                display_name = f"{user.first_name} {user.last_name}".strip() or user.username
                username, email = user.username, user.email
            else:
                display_name = username = UNKNOWN_USER_NAME
                email = ""

            report.append(
                AdminOrderDetails(
                    **details.model_dump(),
                    username=username,
                    display_name=display_name,
                    email=email,
                )
            )

        grand_total = sum((o.total for o in report), Decimal("0.00"))
        logger.info(f"Admin report: {len(report)} orders, total revenue {grand_total}")

        return AdminOrderReport(orders=report, grand_total=grand_total)

    def get_order(self, order_id: str, user_id: str) -> OrderDetails:
        order = self.repo.get_order(order_id)

        if not order:
            raise ValueError("Order does not exist")

        if order.user_id != user_id:
            raise PermissionError("No access to this order")

        return self._details(order)

    def delete_order(self, order_id: str) -> None:
        """Admin only. Items go with the order."""
        if not self.repo.delete_order(order_id):
            raise ValueError("Order does not exist")
        logger.info(f"Order {order_id} deleted")

    def _details(self, order: OrderModel) -> OrderDetails:
        items = self.repo.items_by_order(order.id)
        products = self.products.get_products(i.product_id for i in items)

        lines = []
        for item in items:
            product = products.get(item.product_id) or self._placeholder(item.product_id)
            price = Decimal(product.price)
            lines.append(
                OrderItemDetail(
                    product_id=item.product_id,
                    name=product.name,
                    price=price,
                    image_url=product.image_url or "",
                    quantity=item.quantity,
                    line_total=price * item.quantity,
                )
            )

        total = sum((line.line_total for line in lines), Decimal("0.00"))

        return OrderDetails(
            order_id=order.id,
            user_id=order.user_id,
            created_at=order.created_at,
            items=lines,
            total=total,
        )

    @staticmethod
    def _placeholder(product_id: str) -> ProductModel:
        logger.warning(f"Product {product_id} referenced by an order no longer exists")
        # transient, never added to the session
        return ProductModel(
            id=product_id,
            name=UNKNOWN_PRODUCT_NAME,
            price=Decimal("0.00"),
            quantity=0,
            image_url=UNKNOWN_PRODUCT_IMAGE,
        )
