# app/services/checkout_service.py
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List

from sqlalchemy.exc import SQLAlchemyError, IntegrityError, OperationalError, InterfaceError
from sqlalchemy.orm import Session

from app.domain.errors import (
    ShopError,
    CheckoutError,
    ItemInsertFailed,
    InsufficientStock,
    OrderCreationFailed,
    StorageUnavailable,
)
from app.domain.schemas import CartLine
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.services.cart_service import CartService
from app.services.notification_service import NotificationService
from app.utils.logging import get_logger

logger = get_logger(__name__)


def _coalesce(lines: Iterable[CartLine]) -> List[CartLine]:
    # one order item per product, first occurrence keeps its position
    merged: "OrderedDict[str, CartLine]" = OrderedDict()
    for line in lines:
        if line.product_id in merged:
            merged[line.product_id] = merged[line.product_id].model_copy(
                update={"quantity": merged[line.product_id].quantity + line.quantity}
            )
        else:
            merged[line.product_id] = line
    return list(merged.values())


class CheckoutService:
    """
    Turns a cart snapshot into an order.

    The order row, its items and every stock decrement share one transaction
    on the session. Stock is guarded by a conditional UPDATE (no row locks):
    of two checkouts racing for the last unit exactly one matches the
    WHERE quantity >= n clause. Any failure rolls back the whole unit and
    surfaces as a CheckoutError subclass.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)
        self.notification_service = notification_service or NotificationService()

    def checkout(self, user_id: str, lines: Iterable[CartLine]) -> str | None:
        lines = _coalesce(lines)
        if not lines:
            logger.warning(f"Checkout called with an empty cart for user {user_id}, nothing to do")
            return None

        order_id = str(uuid.uuid4())
        created_at = datetime.now(timezone.utc)

        logger.info(f"Checkout of {len(lines)} lines for user {user_id}, order {order_id}")

        # product of the item being inserted, None while the order row is written
        item_product = None
        try:
            if self.orders.insert_order(order_id, user_id, created_at) == 0:
                raise OrderCreationFailed(order_id)

            for line_no, line in enumerate(lines):
                item_product = line.product_id
                inserted = self.orders.insert_order_item(
                    item_id=str(uuid.uuid4()),
                    order_id=order_id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    line_no=line_no,
                )
                if inserted == 0:
                    raise ItemInsertFailed(order_id, line.product_id)

                item_product = None
                if not self.products.decrement_stock(line.product_id, line.quantity):
                    raise InsufficientStock(line.product_id, line.quantity)

            self.db.commit()

        except CheckoutError as e:
            self.db.rollback()
            logger.warning(f"Checkout for user {user_id} rolled back: {e}")
            raise

        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Checkout for user {user_id} rejected by the ledger: {e}")
            if item_product is not None:
                raise ItemInsertFailed(order_id, item_product) from e
            raise OrderCreationFailed(order_id) from e

        except (OperationalError, InterfaceError) as e:
            self.db.rollback()
            logger.error(f"Storage failure during checkout for user {user_id}: {e}")
            raise StorageUnavailable("Order storage is unavailable") from e

        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Checkout for user {user_id} failed: {e}")
            raise OrderCreationFailed(order_id) from e

        except BaseException:
            # nothing from this call may stay in the session
            self.db.rollback()
            raise

        logger.info(f"Order {order_id} committed for user {user_id}")
        return order_id

    def checkout_cart(self, user_id: str, cart_service: CartService) -> str | None:
        """
        Use case: checkout of the user's current cart.

        The checked-out quantities leave the cart only after the order is
        committed, lines added meanwhile from another tab stay. On failure
        the cart is left exactly as it was so the user can adjust and retry.
        """
        lines = cart_service.snapshot(user_id)
        if not lines:
            return None

        order_id = self.checkout(user_id, lines)

        try:
            cart_service.remove_lines(user_id, lines)
        except ShopError as e:
            # the order is committed, a stale cart must not turn it into a failure
            logger.error(f"Order {order_id} placed but cart of {user_id} was not cleared: {e}")

        order_value = self._order_value(lines)
        try:
            self.notification_service.send_order_notification(
                user_id, order_id, item_count=len(lines), order_value=str(order_value)
            )
        except Exception as e:
            # the order is already committed, a lost notification is not a checkout failure
            logger.warning(f"Failed to enqueue notification for order {order_id}: {e}")

        return order_id

    def _order_value(self, lines: List[CartLine]) -> Decimal:
        # priced like the stored order: current catalogue price, 0 for a vanished product
        products = self.products.get_products(line.product_id for line in lines)
        return sum(
            (
                Decimal(products[line.product_id].price) * line.quantity
                for line in lines
                if line.product_id in products
            ),
            Decimal("0.00"),
        )
