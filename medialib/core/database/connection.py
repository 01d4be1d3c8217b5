# File: medialib/core/database/connection.py

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import database_exists, create_database

from medialib.core.config.settings import settings
from .base import Base

logger = logging.getLogger(__name__)

# check_same_thread=False is needed only for SQLite
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency for obtaining a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Creates the database (if the backend supports it) and all registered tables.
    """
    bind = bind if bind is not None else engine

    # Import models so they register on Base.metadata
    import medialib.features.media_scanner.data.sql_models  # noqa: F401
    import medialib.features.notices.data.sql_models  # noqa: F401

    if not database_exists(bind.url):
        logger.info(f"Creating database: {bind.url.database}")
        create_database(bind.url)

    Base.metadata.create_all(bind=bind)
