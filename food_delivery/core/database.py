"""
Database configuration and connection management
"""
import logging
import time
from typing import Iterator
from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

logger = logging.getLogger(__name__)

Base = declarative_base()

class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(self, url: str, retries: int = 5, wait_seconds: float = 3.0, echo: bool = False):
        connect_args = {}
        if url.startswith("sqlite"):
            # Sessions are handed to FastAPI's threadpool
            connect_args["check_same_thread"] = False

        self.url = url
        self.retries = retries
        self.wait_seconds = wait_seconds
        self.engine = create_engine(
            url,
            pool_pre_ping=True,
            echo=echo,  # Set to True for SQL query logging
            connect_args=connect_args,
        )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def connect(self) -> None:
        """Probe the store and create tables, retrying while it comes up.

        Raises RuntimeError once every attempt has failed; the caller is
        expected to let that abort startup.
        """
        # Register every model on Base.metadata
        from food_delivery import models  # noqa: F401

        for attempt in range(1, self.retries + 1):
            try:
                with self.engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
                self.create_tables()
                logger.info("Database connected and tables created")
                return
            except OperationalError as e:
                logger.warning(f"Database not ready ({attempt}/{self.retries}): {e}")
                if attempt < self.retries:
                    time.sleep(self.wait_seconds)

        raise RuntimeError(f"Could not connect to database after {self.retries} attempts")

    def session(self) -> Session:
        return self.SessionLocal()

    def create_tables(self) -> None:
        """Create all database tables"""
        Base.metadata.create_all(bind=self.engine)

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")

def get_db(request: Request) -> Iterator[Session]:
    """Get database session"""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
