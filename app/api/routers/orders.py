# app/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_cart_service, get_checkout_service, get_order_service
from app.domain.errors import (
    InsufficientStock,
    OrderCreationFailed,
    ItemInsertFailed,
    StorageUnavailable,
)
from app.domain.schemas import CheckoutOut, OrderDetails
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/checkout", response_model=CheckoutOut, status_code=201)
def checkout(
    user_id: str = Query(...),
    cart_svc: CartService = Depends(get_cart_service),
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Places an order from the user's cart. The cart is cleared only on success.
    """
    try:
        order_id = svc.checkout_cart(user_id, cart_svc)
    except InsufficientStock as e:
        raise HTTPException(
            status_code=409,
            detail={"error": "out_of_stock", "product_id": e.product_id, "message": str(e)},
        )
    except (OrderCreationFailed, ItemInsertFailed, StorageUnavailable) as e:
        raise HTTPException(
            status_code=503,
            detail={"error": "try_again", "message": str(e)},
        )

    if order_id is None:
        raise HTTPException(status_code=400, detail="Cart is empty")
    return {"order_id": order_id}


@router.get("/", response_model=List[OrderDetails])
def list_orders(
    user_id: str = Query(...),
    svc: OrderService = Depends(get_order_service),
):
    return svc.orders_with_details(user_id)


@router.get("/{order_id}", response_model=OrderDetails)
def get_order(
    order_id: str,
    user_id: str = Query(...),
    svc: OrderService = Depends(get_order_service),
):
    try:
        return svc.get_order(order_id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
