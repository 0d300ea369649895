"""
User data models and database schemas
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from pydantic import BaseModel, EmailStr
from food_delivery.core.database import Base

# Database Models

class User(Base):
    """User database model"""
    __tablename__ = "users"

    id = Column(String(50), primary_key=True, index=True, default=lambda: uuid.uuid4().hex)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    cart_items = relationship("CartItem", back_populates="user", cascade="all, delete-orphan")

# Pydantic Models for API

class RegisterRequest(BaseModel):
    name: str
    email: EmailStr
    password: str

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    success: bool = True
    token: str
