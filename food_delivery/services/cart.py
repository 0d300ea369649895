"""
Cart store: per-user quantities of catalog items
"""
import logging
from typing import Dict
from sqlalchemy import update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from food_delivery.core.errors import NotFound
from food_delivery.models.cart import CartItem
from food_delivery.models.food import FoodItem

logger = logging.getLogger(__name__)

class CartStore:
    """Each change is a single-statement read-modify-write on the row, so
    concurrent requests for the same (user, item) never lose updates."""

    def __init__(self, db: Session):
        self.db = db

    def _increment(self, user_id: str, food_id: str) -> int:
        result = self.db.execute(
            update(CartItem)
            .where(CartItem.user_id == user_id, CartItem.food_id == food_id)
            .values(quantity=CartItem.quantity + 1)
        )
        return result.rowcount

    def add_one(self, user_id: str, food_id: str) -> Dict[str, int]:
        if self.db.get(FoodItem, food_id) is None:
            raise NotFound("Food item not found")

        if not self._increment(user_id, food_id):
            try:
                self.db.add(CartItem(user_id=user_id, food_id=food_id, quantity=1))
                self.db.commit()
            except IntegrityError:
                # Another request created the row first
                self.db.rollback()
                self._increment(user_id, food_id)
                self.db.commit()
        else:
            self.db.commit()
        return self.get_cart(user_id)

    def remove_one(self, user_id: str, food_id: str) -> Dict[str, int]:
        """Decrement, dropping the entry at zero; absent entries are left alone"""
        self.db.execute(
            update(CartItem)
            .where(CartItem.user_id == user_id, CartItem.food_id == food_id, CartItem.quantity > 0)
            .values(quantity=CartItem.quantity - 1)
        )
        self.db.execute(
            delete(CartItem)
            .where(CartItem.user_id == user_id, CartItem.food_id == food_id, CartItem.quantity <= 0)
        )
        self.db.commit()
        return self.get_cart(user_id)

    def get_cart(self, user_id: str) -> Dict[str, int]:
        rows = (
            self.db.query(CartItem.food_id, CartItem.quantity)
            .filter(CartItem.user_id == user_id, CartItem.quantity > 0)
            .all()
        )
        return {food_id: quantity for food_id, quantity in rows}

    def clear(self, user_id: str, commit: bool = True) -> int:
        removed = self.db.execute(delete(CartItem).where(CartItem.user_id == user_id)).rowcount
        if commit:
            self.db.commit()
        return removed
