"""
Dependency Injection Container

Builds repositories and use cases around one DatabaseManager.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict

from ...application.use_cases.catalog_management_use_case import (
    ProductCatalogUseCase,
    SettingsUseCase,
)
from ...application.use_cases.customer_identity_use_case import CustomerIdentityResolver
from ...application.use_cases.customer_management_use_case import (
    CustomerManagementUseCase,
)
from ...application.use_cases.order_history_use_case import OrderHistoryUseCase
from ...application.use_cases.order_ingestion_use_case import OrderIngestionUseCase
from ...application.use_cases.order_number_use_case import OrderNumberGenerator
from ...application.use_cases.stock_ledger_use_case import StockLedger
from ...domain.repositories.customer_repository import CustomerRepository
from ...domain.repositories.order_repository import OrderRepository
from ...domain.repositories.product_repository import (
    CategoryRepository,
    ProductRepository,
)
from ...domain.repositories.settings_repository import SettingsRepository
from ..database.operations import DatabaseManager
from ..repositories.sqlalchemy_customer_repository import SQLAlchemyCustomerRepository
from ..repositories.sqlalchemy_order_repository import SQLAlchemyOrderRepository
from ..repositories.sqlalchemy_product_repository import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyProductRepository,
)
from ..repositories.sqlalchemy_settings_repository import SQLAlchemySettingsRepository
from ..utilities.helpers import utc_now


class DependencyContainer:
    """
    Dependency injection container

    Manages the instantiation of:
    - Repositories (Infrastructure layer), all sharing one DatabaseManager
    - Use Cases (Application layer)
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._instances: Dict[str, Any] = {}
        self._db_manager = db_manager
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)
        self._setup_dependencies()

    def _setup_dependencies(self):
        """Setup all dependencies and their relationships"""
        self._logger.info("Setting up dependency injection container...")
        self._register_repositories()
        self._register_use_cases()
        self._logger.info("Dependency injection container setup complete")

    def _register_repositories(self):
        """Register repository implementations"""
        self._instances["customer_repository"] = SQLAlchemyCustomerRepository(
            self._db_manager
        )
        self._instances["order_repository"] = SQLAlchemyOrderRepository(self._db_manager)
        self._instances["product_repository"] = SQLAlchemyProductRepository(
            self._db_manager
        )
        self._instances["category_repository"] = SQLAlchemyCategoryRepository(
            self._db_manager
        )
        self._instances["settings_repository"] = SQLAlchemySettingsRepository(
            self._db_manager
        )
        self._logger.debug("Repositories registered successfully")

    def _register_use_cases(self):
        """Register use case implementations with their dependencies"""
        self._instances["identity_resolver"] = CustomerIdentityResolver(
            customer_repository=self.get_customer_repository(), clock=self._clock
        )
        self._instances["order_number_generator"] = OrderNumberGenerator(
            order_repository=self.get_order_repository(), clock=self._clock
        )
        self._instances["stock_ledger"] = StockLedger(
            product_repository=self.get_product_repository()
        )

        self._instances["order_ingestion_use_case"] = OrderIngestionUseCase(
            order_repository=self.get_order_repository(),
            customer_repository=self.get_customer_repository(),
            settings_repository=self.get_settings_repository(),
            identity_resolver=self.get_identity_resolver(),
            number_generator=self.get_order_number_generator(),
            stock_ledger=self.get_stock_ledger(),
            clock=self._clock,
        )
        self._instances["order_history_use_case"] = OrderHistoryUseCase(
            order_repository=self.get_order_repository(),
            customer_repository=self.get_customer_repository(),
        )
        self._instances["customer_management_use_case"] = CustomerManagementUseCase(
            customer_repository=self.get_customer_repository(), clock=self._clock
        )
        self._instances["product_catalog_use_case"] = ProductCatalogUseCase(
            product_repository=self.get_product_repository(),
            category_repository=self.get_category_repository(),
            clock=self._clock,
        )
        self._instances["settings_use_case"] = SettingsUseCase(
            settings_repository=self.get_settings_repository(), clock=self._clock
        )
        self._logger.debug("Use cases registered successfully")

    @property
    def db_manager(self) -> DatabaseManager:
        return self._db_manager

    # Repository getters
    def get_customer_repository(self) -> CustomerRepository:
        """Get customer repository instance"""
        return self._instances["customer_repository"]

    def get_order_repository(self) -> OrderRepository:
        """Get order repository instance"""
        return self._instances["order_repository"]

    def get_product_repository(self) -> ProductRepository:
        """Get product repository instance"""
        return self._instances["product_repository"]

    def get_category_repository(self) -> CategoryRepository:
        """Get category repository instance"""
        return self._instances["category_repository"]

    def get_settings_repository(self) -> SettingsRepository:
        """Get settings repository instance"""
        return self._instances["settings_repository"]

    # Use Case getters
    def get_identity_resolver(self) -> CustomerIdentityResolver:
        """Get customer identity resolver instance"""
        return self._instances["identity_resolver"]

    def get_order_number_generator(self) -> OrderNumberGenerator:
        """Get order number generator instance"""
        return self._instances["order_number_generator"]

    def get_stock_ledger(self) -> StockLedger:
        """Get stock ledger instance"""
        return self._instances["stock_ledger"]

    def get_order_ingestion_use_case(self) -> OrderIngestionUseCase:
        """Get order ingestion use case instance"""
        return self._instances["order_ingestion_use_case"]

    def get_order_history_use_case(self) -> OrderHistoryUseCase:
        """Get order history use case instance"""
        return self._instances["order_history_use_case"]

    def get_customer_management_use_case(self) -> CustomerManagementUseCase:
        """Get customer management use case instance"""
        return self._instances["customer_management_use_case"]

    def get_product_catalog_use_case(self) -> ProductCatalogUseCase:
        """Get product catalog use case instance"""
        return self._instances["product_catalog_use_case"]

    def get_settings_use_case(self) -> SettingsUseCase:
        """Get settings use case instance"""
        return self._instances["settings_use_case"]
