"""
Catalog Management Use Case

Products, categories and the settings row.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional

from pos_backend.domain.entities.product_entity import Category, Product
from pos_backend.domain.entities.settings_entity import AppSettings
from pos_backend.domain.repositories.product_repository import (
    CategoryRepository,
    ProductRepository,
)
from pos_backend.domain.repositories.settings_repository import SettingsRepository
from pos_backend.infrastructure.utilities.constants import SETTINGS_ROW_ID
from pos_backend.infrastructure.utilities.exceptions import (
    CategoryNotFoundError,
    ProductNotFoundError,
    ValidationError,
)
from pos_backend.infrastructure.utilities.helpers import utc_now


class ProductCatalogUseCase:
    """Use case for product and category maintenance"""

    def __init__(
        self,
        product_repository: ProductRepository,
        category_repository: CategoryRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._product_repository = product_repository
        self._category_repository = category_repository
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)

    # Products
    async def get_all_products(self) -> List[Product]:
        return await self._product_repository.find_all()

    async def get_product_by_id(self, product_id: str) -> Product:
        product = await self._product_repository.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def search_products(self, query: str) -> List[Product]:
        return await self._product_repository.search(query)

    async def get_products_by_category(self, category_id: str) -> List[Product]:
        return await self._product_repository.find_by_category(category_id)

    async def save_product(self, product: Product) -> Product:
        """Insert or update depending on whether the id is already stored"""
        if product.price < 0:
            raise ValidationError("Price must not be negative", field="price")

        existing = await self._product_repository.find_by_id(product.id)
        if existing is None:
            await self._product_repository.insert(product)
            return product

        updated = replace(product, created_at=existing.created_at, updated_at=self._clock())
        await self._product_repository.update(updated)
        return updated

    async def delete_product(self, product_id: str) -> bool:
        return await self._product_repository.delete(product_id)

    async def batch_delete_products(self, product_ids: List[str]) -> int:
        """Delete one by one; the first failure stops the batch"""
        deleted = 0
        for product_id in product_ids:
            if await self._product_repository.delete(product_id):
                deleted += 1
        self._logger.info("🗑️ BATCH DELETE: %d products", deleted)
        return deleted

    async def update_product_price(self, product_id: str, price: float) -> Product:
        if price < 0:
            raise ValidationError("Price must not be negative", field="price")
        product = await self.get_product_by_id(product_id)
        updated = replace(product, price=price, updated_at=self._clock())
        await self._product_repository.update(updated)
        self._logger.info("💲 PRICE UPDATED: %s %.2f -> %.2f", product_id, product.price, price)
        return updated

    # Categories
    async def get_all_categories(self) -> List[Category]:
        return await self._category_repository.find_all()

    async def get_category_tree(self) -> List[Category]:
        """Categories in display order; ``parent_id``/``level`` carry the tree"""
        return await self._category_repository.find_all()

    async def get_category_by_id(self, category_id: str) -> Category:
        category = await self._category_repository.find_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    async def save_category(self, category: Category) -> Category:
        existing = await self._category_repository.find_by_id(category.id)
        if existing is None:
            await self._category_repository.insert(category)
            return category

        updated = replace(category, created_at=existing.created_at, updated_at=self._clock())
        await self._category_repository.update(updated)
        return updated

    async def save_categories_batch(self, categories: List[Category]) -> int:
        """All categories are written or none is"""
        await self._category_repository.save_batch(categories)
        return len(categories)

    async def delete_category(self, category_id: str) -> bool:
        return await self._category_repository.delete(category_id)


class SettingsUseCase:
    """Use case for the settings row"""

    def __init__(
        self,
        settings_repository: SettingsRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._settings_repository = settings_repository
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)

    async def get_settings(self) -> Optional[AppSettings]:
        return await self._settings_repository.get_settings()

    async def save_settings(self, settings: AppSettings) -> AppSettings:
        if settings.order_number_digits < 1:
            raise ValidationError(
                "Order number digits must be at least 1", field="orderNumberDigits"
            )
        stored = replace(settings, id=SETTINGS_ROW_ID, updated_at=self._clock())
        await self._settings_repository.save_settings(stored)
        return stored
