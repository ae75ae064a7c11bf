"""
Command surface: FastAPI app, command router and wire schemas
"""

from .app import create_app

__all__ = ["create_app"]
