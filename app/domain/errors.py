# app/domain/errors.py


class ShopError(Exception):
    """Base class for storefront errors raised by the service layer."""


class CheckoutError(ShopError):
    """
    Checkout failed and the unit of work was rolled back.
    Nothing from the attempt (order, items, stock changes) is visible.
    """


class OrderCreationFailed(CheckoutError):
    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} could not be created")
        self.order_id = order_id


class ItemInsertFailed(CheckoutError):
    def __init__(self, order_id: str, product_id: str):
        super().__init__(f"Item for product {product_id} could not be added to order {order_id}")
        self.order_id = order_id
        self.product_id = product_id


class InsufficientStock(CheckoutError):
    """Business failure: the product does not have enough units left."""

    def __init__(self, product_id: str, requested: int):
        super().__init__(f"Product {product_id} is out of stock (requested {requested})")
        self.product_id = product_id
        self.requested = requested


class StorageUnavailable(CheckoutError):
    """Connection or transport failure of a backing store. Never retried automatically."""


class CartConflict(ShopError):
    """The cart kept changing underneath an update; the caller may retry."""
