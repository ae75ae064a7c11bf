"""
Application DTOs package
"""

from .customer_dtos import ResolvedCustomer
from .order_dtos import IngestionReport, IngestionStage

__all__ = ["IngestionReport", "IngestionStage", "ResolvedCustomer"]
