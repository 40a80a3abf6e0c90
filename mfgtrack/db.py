"""
Database module entry point

Thin re-export of the database package so callers can `from mfgtrack.db import ...`.
"""

from .database.connection import engine, get_db, Base, SessionLocal, atomic

__all__ = ["engine", "get_db", "Base", "SessionLocal", "atomic"]
