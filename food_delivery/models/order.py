"""
Order management data models and database schemas
"""
import enum
import uuid
from datetime import datetime
from typing import Optional, List, Dict, Any
from sqlalchemy import Column, String, Boolean, DateTime, Float, JSON
from pydantic import BaseModel, EmailStr, Field
from food_delivery.core.database import Base

# Enums

class FulfillmentStatus(str, enum.Enum):
    PROCESSING = "Processing"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"

    @property
    def rank(self) -> int:
        return list(FulfillmentStatus).index(self)

# Database Models

class Order(Base):
    """Order database model.

    ``items`` and ``address`` are snapshots taken at placement; only
    ``payment`` and ``status`` change afterwards.
    """
    __tablename__ = "orders"

    id = Column(String(50), primary_key=True, index=True, default=lambda: uuid.uuid4().hex)
    user_id = Column(String(50), nullable=False, index=True)
    items = Column(JSON, nullable=False)  # [{_id, name, price, quantity, ...}]
    amount = Column(Float, nullable=False)
    address = Column(JSON, nullable=False)
    status = Column(String(30), nullable=False, default=FulfillmentStatus.PROCESSING.value)
    status_history = Column(JSON, nullable=False, default=list)
    payment = Column(Boolean, nullable=False, default=False)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)

# Pydantic Models for API

class OrderLineItem(BaseModel):
    food_id: str = Field(alias="_id")
    name: str
    price: float = Field(allow_inf_nan=False)
    quantity: int
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None

    class Config:
        populate_by_name = True

class Address(BaseModel):
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: EmailStr
    street: str
    city: str
    state: str
    zipcode: str
    country: str
    phone: str

    class Config:
        populate_by_name = True

class PlaceOrderRequest(BaseModel):
    userId: Optional[str] = None  # ignored, the token decides
    items: List[OrderLineItem]
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    address: Address

class VerifyOrderRequest(BaseModel):
    orderId: str
    success: bool

class OrderStatusUpdate(BaseModel):
    orderId: str
    status: FulfillmentStatus

class OrderOut(BaseModel):
    id: str = Field(alias="_id")
    user_id: str = Field(alias="userId")
    items: List[Dict[str, Any]]
    amount: float
    address: Dict[str, Any]
    status: str
    status_history: List[Dict[str, Any]] = []
    payment: bool
    date: datetime

    class Config:
        from_attributes = True
        populate_by_name = True

# Response Models

class PlaceOrderResponse(BaseModel):
    success: bool = True
    session_url: str

class OrderListResponse(BaseModel):
    success: bool = True
    data: List[OrderOut]
