"""Database helpers (declarative base and per-URL handles)."""

from .session import Base, Database, database_for, reset_databases

__all__ = ["Base", "Database", "database_for", "reset_databases"]
