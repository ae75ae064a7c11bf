"""
Database Infrastructure

Contains SQLAlchemy models and the database manager.
"""

from .models import Base
from .operations import DatabaseManager, init_db

__all__ = ["Base", "DatabaseManager", "init_db"]
