"""
Application use cases package
"""

from .catalog_management_use_case import ProductCatalogUseCase, SettingsUseCase
from .customer_identity_use_case import CustomerIdentityResolver
from .customer_management_use_case import CustomerManagementUseCase
from .order_history_use_case import OrderHistoryUseCase
from .order_ingestion_use_case import OrderIngestionUseCase
from .order_number_use_case import OrderNumberGenerator
from .stock_ledger_use_case import StockLedger

__all__ = [
    "CustomerIdentityResolver",
    "CustomerManagementUseCase",
    "OrderHistoryUseCase",
    "OrderIngestionUseCase",
    "OrderNumberGenerator",
    "ProductCatalogUseCase",
    "SettingsUseCase",
    "StockLedger",
]
