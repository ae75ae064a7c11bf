"""
Domain entities package

Contains the core business entities of the point-of-sale backend.
"""

from .customer_entity import Customer
from .order_entity import Order, OrderItem
from .product_entity import Category, Product
from .settings_entity import AppSettings

__all__ = ["AppSettings", "Category", "Customer", "Order", "OrderItem", "Product"]
