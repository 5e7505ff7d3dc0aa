from decimal import Decimal
from typing import Dict, Any, List, Iterable

from app.domain.schemas import CartLine, CartState
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


def _find_line(state: CartState, product_id: str) -> CartLine | None:
    for line in state.lines:
        if line.product_id == product_id:
            return line
    return None


class CartService:
    """
    Cart use cases on top of the session store.
    commands (add, remove, update_quantity, clear, remove_lines, replace) write the whole cart back
    queries (get_cart, snapshot) only read
    """

    def __init__(self, repo: CartRepo, products: ProductRepo):
        self.repo = repo
        self.products = products

    #query
    def snapshot(self, user_id: str) -> List[CartLine]:
        return list(self.repo.get(user_id).lines)

    def get_cart(self, user_id: str) -> Dict[str, Any]:
        state = self.repo.get(user_id)
        return self._to_dict(user_id, state)

    #commands
    def add_product(self, user_id: str, product_id: str, quantity: int = 1) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        # stock is not checked here, only at checkout
        def apply(state: CartState) -> int:
            line = _find_line(state, product_id)
            if line:
                line.quantity += quantity
                return line.quantity

            # catalogue data is only needed for a new line
            product = self.products.get_product(product_id)
            if not product:
                raise ValueError(f"Product {product_id} does not exist")
            state.lines.append(
                CartLine(
                    product_id=product.id,
                    quantity=quantity,
                    name=product.name,
                    price=Decimal(product.price),
                    image_url=product.image_url or "",
                )
            )
            return quantity

        new_quantity, state = self.repo.mutate(user_id, apply)

        logger.info(
            f"Product {product_id} in cart of {user_id}: quantity {new_quantity}, "
            f"version {state.version}"
        )
        return self._to_dict(user_id, state)

    def remove_product(self, user_id: str, product_id: str, amount: int = 1) -> Dict[str, Any]:
        if amount <= 0:
            raise ValueError("Amount must be greater than 0")

        _, state = self.repo.mutate(user_id, lambda s: self._decrement(s, product_id, amount))
        return self._to_dict(user_id, state)

    def update_quantity(self, user_id: str, product_id: str, action: str) -> int:
        """
        Interactive +/- on a single line.
        Returns the resulting quantity, 0 when the line is gone.
        """
        if action == "add":
            cart = self.add_product(user_id, product_id, 1)
            for item in cart["items"]:
                if item.product_id == product_id:
                    return item.quantity
            return 0

        if action == "remove":
            quantity, _ = self.repo.mutate(user_id, lambda s: self._decrement(s, product_id, 1))
            return quantity

        raise ValueError(f"Unknown action {action!r}")

    def clear(self, user_id: str) -> Dict[str, Any]:
        def apply(state: CartState) -> int:
            removed = len(state.lines)
            state.lines = []
            return removed

        removed, state = self.repo.mutate(user_id, apply)
        logger.info(f"Cleared cart of {user_id} ({removed} lines)")
        return self._to_dict(user_id, state)

    def remove_lines(self, user_id: str, lines: Iterable[CartLine]) -> Dict[str, Any]:
        """
        Takes the given quantities out of the current cart, leaving anything
        added since the lines were read.
        """
        lines = list(lines)

        def apply(state: CartState) -> None:
            for line in lines:
                self._decrement(state, line.product_id, line.quantity)

        _, state = self.repo.mutate(user_id, apply)
        logger.info(f"Removed {len(lines)} checked-out lines from cart of {user_id}")
        return self._to_dict(user_id, state)

    def replace(self, user_id: str, lines: Iterable[CartLine]) -> Dict[str, Any]:
        merged: Dict[str, CartLine] = {}
        for line in lines:
            if line.product_id in merged:
                merged[line.product_id].quantity += line.quantity
            else:
                merged[line.product_id] = line.model_copy()

        def apply(state: CartState) -> None:
            state.lines = list(merged.values())

        _, state = self.repo.mutate(user_id, apply)
        return self._to_dict(user_id, state)

    @staticmethod
    def _decrement(state: CartState, product_id: str, amount: int) -> int:
        line = _find_line(state, product_id)
        if not line:
            #removing a missing line is a no-op
            return 0

        line.quantity -= amount
        if line.quantity <= 0:
            state.lines.remove(line)
            logger.info(f"Removed product {product_id} from cart")
            return 0
        return line.quantity

    @staticmethod
    def _to_dict(user_id: str, state: CartState) -> Dict[str, Any]:
        total = sum((line.line_total for line in state.lines), Decimal("0.00"))
        return {
            "user_id": user_id,
            "version": state.version,
            "items": list(state.lines),
            "total": total,
        }
