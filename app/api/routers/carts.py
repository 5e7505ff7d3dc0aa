#app/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_cart_service
from app.domain.errors import CartConflict, StorageUnavailable
from app.domain.schemas import (
    ItemIn,
    CartOut,
    QuantityUpdateIn,
    QuantityOut,
)
from app.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["carts"])


@router.get("/{user_id}", response_model=CartOut)
def get_cart(user_id: str, svc: CartService = Depends(get_cart_service)):
    try:
        return svc.get_cart(user_id)
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/{user_id}/items", response_model=CartOut)
def add_item(
    user_id: str,
    payload: ItemIn,
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_product(user_id, payload.product_id, payload.quantity)
    except CartConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{user_id}/items/{product_id}", response_model=CartOut)
def remove_item(
    user_id: str,
    product_id: str,
    amount: int = Query(1, gt=0),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.remove_product(user_id, product_id, amount)
    except CartConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.patch("/{user_id}/items/{product_id}", response_model=QuantityOut)
def update_item_quantity(
    user_id: str,
    product_id: str,
    payload: QuantityUpdateIn,
    svc: CartService = Depends(get_cart_service),
):
    """
    +/- button: returns only the new quantity of the line (0 when removed).
    """
    try:
        quantity = svc.update_quantity(user_id, product_id, payload.action)
    except CartConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"product_id": product_id, "quantity": quantity}


@router.delete("/{user_id}", response_model=CartOut)
def clear_cart(user_id: str, svc: CartService = Depends(get_cart_service)):
    try:
        return svc.clear(user_id)
    except CartConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
