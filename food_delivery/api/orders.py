"""
Orders API router
"""
from typing import Any
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from food_delivery.api.auth import get_current_user_id
from food_delivery.api.cart import get_cart_store
from food_delivery.core.database import get_db
from food_delivery.models.order import (
    PlaceOrderRequest, PlaceOrderResponse, VerifyOrderRequest,
    OrderStatusUpdate, OrderListResponse
)
from food_delivery.services.cart import CartStore
from food_delivery.services.orders import OrderLedger

router = APIRouter(prefix="/order", tags=["orders"])

def get_ledger(
    request: Request,
    db: Session = Depends(get_db),
    cart: CartStore = Depends(get_cart_store),
) -> OrderLedger:
    settings = request.app.state.settings
    return OrderLedger(
        db,
        cart,
        request.app.state.payment_gateway,
        delivery_fee=settings.DELIVERY_FEE,
        frontend_url=settings.FRONTEND_URL,
    )

@router.post("/place", response_model=PlaceOrderResponse)
def place_order(
    order_data: PlaceOrderRequest,
    user_id: str = Depends(get_current_user_id),
    ledger: OrderLedger = Depends(get_ledger),
) -> Any:
    """Place an order and start checkout"""
    _, session_url = ledger.place_order(
        user_id, order_data.items, order_data.address, amount=order_data.amount
    )
    return {"success": True, "session_url": session_url}

@router.post("/verify")
def verify_order(
    payload: VerifyOrderRequest,
    ledger: OrderLedger = Depends(get_ledger),
) -> Any:
    """Record the payment outcome reported after checkout"""
    message = ledger.verify_order(payload.orderId, payload.success)
    return {"success": True, "message": message}

@router.post("/userorders", response_model=OrderListResponse)
def user_orders(
    user_id: str = Depends(get_current_user_id),
    ledger: OrderLedger = Depends(get_ledger),
) -> Any:
    """Get all orders of the calling user, newest first"""
    return {"success": True, "data": ledger.user_orders(user_id)}

@router.get("/list", response_model=OrderListResponse)
def list_orders(ledger: OrderLedger = Depends(get_ledger)) -> Any:
    """Get every order (admin panel)"""
    return {"success": True, "data": ledger.list_orders()}

@router.post("/status")
def update_status(
    payload: OrderStatusUpdate,
    ledger: OrderLedger = Depends(get_ledger),
) -> Any:
    """Update fulfillment status (admin panel)"""
    ledger.update_status(payload.orderId, payload.status)
    return {"success": True, "message": "Status Updated"}
