"""Manufacturing order workflow engine

Unified import surface for the package modules.
"""

from . import (
    config,
    crud,
    db,
    models,
    schemas,
    core,
)

from .config.settings import settings
from .db import get_db, engine, Base, SessionLocal

__all__ = [
    "config",
    "crud",
    "db",
    "models",
    "schemas",
    "core",
    "settings",
    "get_db",
    "engine",
    "Base",
    "SessionLocal",
]
