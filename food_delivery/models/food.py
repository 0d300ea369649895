"""
Food catalog data models and database schemas
"""
import uuid
from datetime import datetime
from typing import Optional, List
from sqlalchemy import Column, String, DateTime, Float, Text
from pydantic import BaseModel, Field
from food_delivery.core.database import Base

# Database Models

class FoodItem(Base):
    """Food item database model"""
    __tablename__ = "food_items"

    id = Column(String(50), primary_key=True, index=True, default=lambda: uuid.uuid4().hex)
    name = Column(String(255), nullable=False)
    description = Column(Text, default="")
    price = Column(Float, nullable=False)
    category = Column(String(100), nullable=False)
    image = Column(String(500), nullable=False)  # filename under UPLOAD_DIR
    created_at = Column(DateTime, default=datetime.utcnow)

# Pydantic Models for API

class FoodItemBase(BaseModel):
    name: str
    description: Optional[str] = ""
    price: float
    category: str

class FoodItemOut(FoodItemBase):
    id: str = Field(alias="_id")
    image: str

    class Config:
        from_attributes = True
        populate_by_name = True

class FoodRemoveRequest(BaseModel):
    id: str

# Response Models

class FoodListResponse(BaseModel):
    success: bool = True
    data: List[FoodItemOut]
