"""
Infrastructure repositories package

Contains concrete implementations of domain repositories.
"""

from .sqlalchemy_customer_repository import SQLAlchemyCustomerRepository
from .sqlalchemy_order_repository import SQLAlchemyOrderRepository
from .sqlalchemy_product_repository import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyProductRepository,
)
from .sqlalchemy_settings_repository import SQLAlchemySettingsRepository

__all__ = [
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyCustomerRepository",
    "SQLAlchemyOrderRepository",
    "SQLAlchemyProductRepository",
    "SQLAlchemySettingsRepository",
]
