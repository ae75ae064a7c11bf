"""
Domain repository interfaces

Contains abstract repository interfaces that define contracts for data access.
These follow the Repository pattern and Dependency Inversion principle.
"""

from .customer_repository import CustomerRepository
from .order_repository import OrderRepository
from .product_repository import CategoryRepository, ProductRepository
from .settings_repository import SettingsRepository

__all__ = [
    "CategoryRepository",
    "CustomerRepository",
    "OrderRepository",
    "ProductRepository",
    "SettingsRepository",
]
