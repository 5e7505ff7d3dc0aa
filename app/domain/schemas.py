# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal
from decimal import Decimal
from datetime import datetime


class CartLine(BaseModel):
    """Cart line. Product data is for display only, orders are priced at read time."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    name: str = ""
    price: Decimal = Decimal("0.00")
    image_url: str = ""

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class CartState(BaseModel):
    """Blob kept in the session store (redis) under cart:{user_id}."""

    version: int = 0
    lines: List[CartLine] = Field(default_factory=list)


class ItemIn(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0)


class QuantityUpdateIn(BaseModel):
    action: Literal["add", "remove"]


class QuantityOut(BaseModel):
    product_id: str
    quantity: int


class CartOut(BaseModel):
    user_id: str
    version: int
    items: List[CartLine]
    total: Decimal


class ProductOut(BaseModel):
    id: str
    name: str
    manufacturer: str
    description: str
    price: Decimal
    quantity: int
    image_url: str

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    id: str | None = Field(None, min_length=1, max_length=36)
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    first_name: str = Field("", max_length=100)
    last_name: str = Field("", max_length=100)


class UserRead(BaseModel):
    id: str
    username: str
    email: str
    first_name: str
    last_name: str

    model_config = ConfigDict(from_attributes=True)


class CheckoutOut(BaseModel):
    order_id: str


class OrderItemDetail(BaseModel):
    product_id: str
    name: str
    price: Decimal
    image_url: str
    quantity: int
    line_total: Decimal


class OrderDetails(BaseModel):
    """Order with its items and total."""

    order_id: str
    user_id: str
    created_at: datetime
    items: List[OrderItemDetail]
    total: Decimal


class AdminOrderDetails(OrderDetails):
    username: str
    display_name: str
    email: str


class AdminOrderReport(BaseModel):
    orders: List[AdminOrderDetails]
    grand_total: Decimal
