"""Database connection

Creates the engine, the session factory and the declarative base in one place.
"""

from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from ..config.settings import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # FastAPI runs sync endpoints in a threadpool
    connect_args["check_same_thread"] = False

# Database engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.ECHO_SQL,
    connect_args=connect_args,
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Declarative base for all models
Base = declarative_base()


def get_db():
    """Dependency that yields a database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db):
    """Commit once on success; roll back everything on any error"""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
