"""Database module for processed records and the identity map."""

from .db import SessionLocal, engine, get_db, init_db
from .store import RelayStore

__all__ = ["engine", "SessionLocal", "get_db", "init_db", "RelayStore"]
