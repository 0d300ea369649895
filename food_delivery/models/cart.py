"""
Cart data models and database schemas
"""
from datetime import datetime
from typing import Dict
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from pydantic import BaseModel
from food_delivery.core.database import Base

# Database Models

class CartItem(Base):
    """One (user, food item) quantity.

    A row can reach 0 only inside the remove_one transaction, which deletes
    it before committing; committed rows hold 1 or more.
    """
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_id", "food_id", name="uq_cart_user_food"),
        CheckConstraint("quantity >= 0", name="ck_cart_quantity"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(50), ForeignKey("users.id"), nullable=False, index=True)
    food_id = Column(String(50), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="cart_items")

# Pydantic Models for API

class CartItemRequest(BaseModel):
    itemId: str

class CartResponse(BaseModel):
    success: bool = True
    cartData: Dict[str, int]
