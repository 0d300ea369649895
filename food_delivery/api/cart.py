"""
Cart API router
"""
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from food_delivery.api.auth import get_current_user_id
from food_delivery.core.database import get_db
from food_delivery.models.cart import CartItemRequest, CartResponse
from food_delivery.services.cart import CartStore

router = APIRouter(prefix="/cart", tags=["cart"])

def get_cart_store(db: Session = Depends(get_db)) -> CartStore:
    return CartStore(db)

@router.post("/add")
def add_to_cart(
    payload: CartItemRequest,
    user_id: str = Depends(get_current_user_id),
    cart: CartStore = Depends(get_cart_store),
) -> Any:
    cart.add_one(user_id, payload.itemId)
    return {"success": True, "message": "Added To Cart"}

@router.post("/remove")
def remove_from_cart(
    payload: CartItemRequest,
    user_id: str = Depends(get_current_user_id),
    cart: CartStore = Depends(get_cart_store),
) -> Any:
    cart.remove_one(user_id, payload.itemId)
    return {"success": True, "message": "Removed From Cart"}

@router.post("/get", response_model=CartResponse)
def get_cart(
    user_id: str = Depends(get_current_user_id),
    cart: CartStore = Depends(get_cart_store),
) -> Any:
    return {"success": True, "cartData": cart.get_cart(user_id)}
