"""
Product and category repository interfaces
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.product_entity import Category, Product


class ProductRepository(ABC):
    """Repository interface for product operations"""

    @abstractmethod
    async def find_by_id(self, product_id: str) -> Optional[Product]:
        """Find product by ID"""

    @abstractmethod
    async def find_all(self) -> List[Product]:
        """All products ordered by name"""

    @abstractmethod
    async def search(self, query: str) -> List[Product]:
        """Products whose name or category name contains ``query``"""

    @abstractmethod
    async def find_by_category(self, category_id: str) -> List[Product]:
        """Products in one category"""

    @abstractmethod
    async def insert(self, product: Product) -> None:
        """Insert a product"""

    @abstractmethod
    async def update(self, product: Product) -> None:
        """Update a product"""

    @abstractmethod
    async def delete(self, product_id: str) -> bool:
        """Delete a product"""

    @abstractmethod
    async def deduct_stock(self, product_id: str, quantity: float) -> bool:
        """
        Lower the stock of a tracked product, never below zero

        Returns:
            True when the stock level was adjusted, False when the product is
            missing, untracked or has no stock level
        """


class CategoryRepository(ABC):
    """Repository interface for category operations"""

    @abstractmethod
    async def find_by_id(self, category_id: str) -> Optional[Category]:
        """Find category by ID"""

    @abstractmethod
    async def find_all(self) -> List[Category]:
        """All categories ordered by sort order, then name"""

    @abstractmethod
    async def insert(self, category: Category) -> None:
        """Insert a category"""

    @abstractmethod
    async def update(self, category: Category) -> None:
        """Update a category"""

    @abstractmethod
    async def save_batch(self, categories: List[Category]) -> None:
        """Upsert many categories in one transaction"""

    @abstractmethod
    async def delete(self, category_id: str) -> bool:
        """Delete a category"""
