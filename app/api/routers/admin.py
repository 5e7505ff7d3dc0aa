# app/api/routers/admin.py
from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_order_service
from app.domain.schemas import AdminOrderReport
from app.services.order_service import OrderService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/orders", response_model=AdminOrderReport)
def all_orders(svc: OrderService = Depends(get_order_service)):
    """
    All orders with owner details and the total revenue.
    """
    return svc.all_orders_with_details()


@router.delete("/orders/{order_id}", status_code=204)
def delete_order(order_id: str, svc: OrderService = Depends(get_order_service)):
    try:
        svc.delete_order(order_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
