# app/repos/order_repo.py
from datetime import datetime
from typing import List

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    # writes run inside the caller's transaction, nothing is committed here
    def insert_order(self, order_id: str, user_id: str, created_at: datetime) -> int:
        result = self.db.execute(
            insert(OrderModel.__table__).values(
                id=order_id,
                user_id=user_id,
                created_at=created_at,
            )
        )
        return result.rowcount

    def insert_order_item(self, item_id: str, order_id: str, product_id: str, quantity: int, line_no: int) -> int:
        result = self.db.execute(
            insert(OrderItemModel.__table__).values(
                id=item_id,
                order_id=order_id,
                product_id=product_id,
                quantity=quantity,
                line_no=line_no,
            )
        )
        return result.rowcount

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def orders_by_user(self, user_id: str) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc(), OrderModel.id)
            ).scalars().all()
        )

    def all_orders(self) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).order_by(OrderModel.created_at.desc(), OrderModel.id)
            ).scalars().all()
        )

    def items_by_order(self, order_id: str) -> List[OrderItemModel]:
        return list(
            self.db.execute(
                select(OrderItemModel)
                .where(OrderItemModel.order_id == order_id)
                .order_by(OrderItemModel.line_no)
            ).scalars().all()
        )

    def delete_order(self, order_id: str) -> bool:
        order = self.get_order(order_id)
        if not order:
            return False
        # cascade="all, delete-orphan" removes the items too
        self.db.delete(order)
        self.db.commit()
        return True
