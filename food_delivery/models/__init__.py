"""
Database models and API schemas
"""
from food_delivery.models.user import User
from food_delivery.models.food import FoodItem
from food_delivery.models.cart import CartItem
from food_delivery.models.order import Order, FulfillmentStatus

__all__ = ["User", "FoodItem", "CartItem", "Order", "FulfillmentStatus"]
