"""
Core configuration for the Food Delivery API
"""
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Configuration
    PROJECT_NAME: str = "Food Delivery API"
    API_PREFIX: str = "/api"
    SECRET_KEY: str = "your-secret-key-here"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./food_delivery.db"
    DB_CONNECT_RETRIES: int = 5
    DB_CONNECT_WAIT_SECONDS: float = 3.0

    # CORS Configuration
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",  # Customer frontend
        "http://localhost:5174",  # Admin panel
        "http://127.0.0.1:5173",
        "http://127.0.0.1:5174",
    ]

    # File Upload Configuration
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024  # 5MB
    UPLOAD_DIR: str = "uploads"
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/png", "image/webp"]

    # Payment Configuration
    FRONTEND_URL: str = "http://localhost:5173"
    STRIPE_SECRET_KEY: str = ""
    PAYMENT_CURRENCY: str = "usd"
    PAYMENT_TIMEOUT_SECONDS: int = 10
    DELIVERY_FEE: float = 2.0

    # Logging
    LOG_LEVEL: str = "INFO"

@lru_cache
def get_settings() -> Settings:
    """Cached settings built from the environment"""
    return Settings()
