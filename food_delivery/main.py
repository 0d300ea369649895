"""
Food Delivery API - FastAPI application
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from food_delivery import __version__
from food_delivery.api import auth, cart, food, orders
from food_delivery.core.config import Settings, get_settings
from food_delivery.core.database import Database
from food_delivery.core.errors import register_error_handlers
from food_delivery.services.payment import PaymentGateway, StripeGateway
from food_delivery.services.storage import ImageStorage

logger = logging.getLogger(__name__)

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[PaymentGateway] = None,
) -> FastAPI:
    """Build the application with its database, storage and payment gateway.

    The database is connected when the app starts and closed when it stops;
    failing to reach it at startup aborts the process.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    database = Database(
        settings.DATABASE_URL,
        retries=settings.DB_CONNECT_RETRIES,
        wait_seconds=settings.DB_CONNECT_WAIT_SECONDS,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.connect()
        logger.info(f"{settings.PROJECT_NAME} started")
        yield
        database.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Backend API for food catalog, cart and order management",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.image_storage = ImageStorage(
        settings.UPLOAD_DIR,
        max_size=settings.MAX_UPLOAD_SIZE,
        allowed_types=settings.ALLOWED_IMAGE_TYPES,
    )
    app.state.payment_gateway = gateway or StripeGateway(
        settings.STRIPE_SECRET_KEY,
        currency=settings.PAYMENT_CURRENCY,
        timeout=settings.PAYMENT_TIMEOUT_SECONDS,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    for module in (auth, food, cart, orders):
        app.include_router(module.router, prefix=settings.API_PREFIX)

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "food-delivery-api"}

    @app.get("/")
    def root():
        """API root endpoint"""
        return {
            "message": "API Working",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app

def run() -> None:
    """Console entry point: serve the app with uvicorn"""
    import uvicorn

    uvicorn.run("food_delivery.main:create_app", factory=True, host="0.0.0.0", port=4000)
