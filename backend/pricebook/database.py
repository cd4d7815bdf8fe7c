"""
Database configuration and session management for the Pricebook store.

Uses SQLAlchemy ORM; SQLite by default, any SQLAlchemy URL via DATABASE_URL.
"""

import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from pricebook.config import settings

# Create database directory if it doesn't exist
if settings.DATABASE_URL.startswith("sqlite:///"):
    db_dir = os.path.dirname(settings.DATABASE_URL.replace("sqlite:///", ""))
    if db_dir and not os.path.exists(db_dir):
        os.makedirs(db_dir, exist_ok=True)

# Create SQLAlchemy engine
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    connect_args=connect_args,
)

# Base class for declarative models
Base = declarative_base()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """
    Initialize database by creating all tables.
    """
    # Import models to ensure they're registered
    from pricebook.models import category, product  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db() -> Session:
    """
    Dependency for getting database session.
    Use in FastAPI route dependencies.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

