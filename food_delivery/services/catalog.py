"""
Catalog store: food items available for ordering
"""
import logging
import math
from typing import List
from sqlalchemy.orm import Session
from food_delivery.core.errors import ValidationError, NotFound
from food_delivery.models.food import FoodItem

logger = logging.getLogger(__name__)

class CatalogStore:
    def __init__(self, db: Session):
        self.db = db

    def add_item(self, name: str, description: str, price: float, category: str, image: str) -> FoodItem:
        if not name or not name.strip():
            raise ValidationError("Name is required")
        if not category or not category.strip():
            raise ValidationError("Category is required")
        if not image:
            raise ValidationError("Image is required")
        if price is None or not math.isfinite(price) or price < 0:
            raise ValidationError("Price must be a non-negative number")

        item = FoodItem(
            name=name.strip(),
            description=description or "",
            price=price,
            category=category.strip(),
            image=image,
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"Food item {item.id} ({item.name}) added")
        return item

    def list_items(self) -> List[FoodItem]:
        return self.db.query(FoodItem).order_by(FoodItem.created_at, FoodItem.id).all()

    def get_item(self, food_id: str) -> FoodItem:
        item = self.db.get(FoodItem, food_id)
        if item is None:
            raise NotFound("Food item not found")
        return item

    def remove_item(self, food_id: str) -> FoodItem:
        """Delete an item; orders keep their own snapshot of it"""
        item = self.get_item(food_id)
        self.db.delete(item)
        self.db.commit()
        logger.info(f"Food item {food_id} removed")
        return item
