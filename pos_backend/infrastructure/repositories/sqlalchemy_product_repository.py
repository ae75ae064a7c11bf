"""
SQLAlchemy implementations of ProductRepository and CategoryRepository
"""

import logging
from typing import List, Optional

from sqlalchemy import or_, select

from pos_backend.domain.entities.product_entity import Category, Product
from pos_backend.domain.repositories.product_repository import (
    CategoryRepository,
    ProductRepository,
)
from pos_backend.infrastructure.database.models import Category as SQLCategory
from pos_backend.infrastructure.database.models import Product as SQLProduct
from pos_backend.infrastructure.database.operations import DatabaseManager
from pos_backend.infrastructure.utilities.exceptions import (
    CategoryNotFoundError,
    ProductNotFoundError,
)
from pos_backend.infrastructure.utilities.helpers import like_pattern, utc_now


class SQLAlchemyProductRepository(ProductRepository):
    """SQLAlchemy implementation of product repository"""

    def __init__(self, db_manager: DatabaseManager):
        self._db = db_manager
        self._logger = logging.getLogger(self.__class__.__name__)

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        with self._db.managed_session() as session:
            sql_product = (
                session.query(SQLProduct).filter(SQLProduct.id == product_id).first()
            )
            return self._map_to_domain(sql_product) if sql_product else None

    async def find_all(self) -> List[Product]:
        with self._db.managed_session() as session:
            sql_products = session.query(SQLProduct).order_by(SQLProduct.name).all()
            return [self._map_to_domain(product) for product in sql_products]

    async def search(self, query: str) -> List[Product]:
        """Match on product name or on the name of the product's category"""
        pattern = like_pattern(query)
        matching_categories = select(SQLCategory.id).where(SQLCategory.name.like(pattern))
        with self._db.managed_session() as session:
            sql_products = (
                session.query(SQLProduct)
                .filter(
                    or_(
                        SQLProduct.name.like(pattern),
                        SQLProduct.category_id.in_(matching_categories),
                    )
                )
                .order_by(SQLProduct.name)
                .all()
            )
            return [self._map_to_domain(product) for product in sql_products]

    async def find_by_category(self, category_id: str) -> List[Product]:
        with self._db.managed_session() as session:
            sql_products = (
                session.query(SQLProduct)
                .filter(SQLProduct.category_id == category_id)
                .order_by(SQLProduct.name)
                .all()
            )
            return [self._map_to_domain(product) for product in sql_products]

    async def insert(self, product: Product) -> None:
        with self._db.managed_session() as session:
            session.add(
                SQLProduct(
                    id=product.id,
                    name=product.name,
                    unit=product.unit,
                    price=product.price,
                    category_id=product.category_id,
                    stock=product.stock,
                    min_stock=product.min_stock,
                    track_stock=product.track_stock,
                    created_at=product.created_at,
                    updated_at=product.updated_at,
                )
            )
        self._logger.info("🆕 PRODUCT CREATED: %s (%s)", product.name, product.id)

    async def update(self, product: Product) -> None:
        with self._db.managed_session() as session:
            sql_product = (
                session.query(SQLProduct).filter(SQLProduct.id == product.id).first()
            )
            if not sql_product:
                raise ProductNotFoundError(product.id)

            sql_product.name = product.name
            sql_product.unit = product.unit
            sql_product.price = product.price
            sql_product.category_id = product.category_id
            sql_product.stock = product.stock
            sql_product.min_stock = product.min_stock
            sql_product.track_stock = product.track_stock
            sql_product.updated_at = product.updated_at
        self._logger.info("✏️ PRODUCT UPDATED: %s", product.id)

    async def delete(self, product_id: str) -> bool:
        with self._db.managed_session() as session:
            deleted = (
                session.query(SQLProduct)
                .filter(SQLProduct.id == product_id)
                .delete(synchronize_session=False)
            )
        if deleted:
            self._logger.info("🗑️ PRODUCT DELETED: %s", product_id)
        return deleted > 0

    async def deduct_stock(self, product_id: str, quantity: float) -> bool:
        with self._db.managed_session() as session:
            sql_product = (
                session.query(SQLProduct)
                .filter(
                    SQLProduct.id == product_id,
                    SQLProduct.track_stock.is_(True),
                    SQLProduct.stock.is_not(None),
                )
                .first()
            )
            if not sql_product:
                return False

            previous = sql_product.stock
            sql_product.stock = max(0.0, previous - quantity)
            sql_product.updated_at = utc_now()

            self._logger.debug(
                "📦 STOCK: %s %.3f -> %.3f", product_id, previous, sql_product.stock
            )
            return True

    @staticmethod
    def _map_to_domain(sql_product: SQLProduct) -> Product:
        return Product(
            id=sql_product.id,
            name=sql_product.name,
            unit=sql_product.unit,
            price=sql_product.price,
            category_id=sql_product.category_id,
            stock=sql_product.stock,
            min_stock=sql_product.min_stock,
            track_stock=bool(sql_product.track_stock),
            created_at=sql_product.created_at,
            updated_at=sql_product.updated_at,
        )


class SQLAlchemyCategoryRepository(CategoryRepository):
    """SQLAlchemy implementation of category repository"""

    def __init__(self, db_manager: DatabaseManager):
        self._db = db_manager
        self._logger = logging.getLogger(self.__class__.__name__)

    async def find_by_id(self, category_id: str) -> Optional[Category]:
        with self._db.managed_session() as session:
            sql_category = (
                session.query(SQLCategory).filter(SQLCategory.id == category_id).first()
            )
            return self._map_to_domain(sql_category) if sql_category else None

    async def find_all(self) -> List[Category]:
        with self._db.managed_session() as session:
            sql_categories = (
                session.query(SQLCategory)
                .order_by(SQLCategory.sort_order, SQLCategory.name)
                .all()
            )
            return [self._map_to_domain(category) for category in sql_categories]

    async def insert(self, category: Category) -> None:
        with self._db.managed_session() as session:
            session.add(self._map_to_model(category))
        self._logger.info("🆕 CATEGORY CREATED: %s (%s)", category.name, category.id)

    async def update(self, category: Category) -> None:
        with self._db.managed_session() as session:
            sql_category = (
                session.query(SQLCategory).filter(SQLCategory.id == category.id).first()
            )
            if not sql_category:
                raise CategoryNotFoundError(category.id)

            sql_category.name = category.name
            sql_category.parent_id = category.parent_id
            sql_category.level = category.level
            sql_category.path = category.path
            sql_category.sort_order = category.sort_order
            sql_category.updated_at = category.updated_at
        self._logger.info("✏️ CATEGORY UPDATED: %s", category.id)

    async def save_batch(self, categories: List[Category]) -> None:
        with self._db.transaction() as session:
            for category in categories:
                session.merge(self._map_to_model(category))
        self._logger.info("💾 CATEGORY BATCH SAVED: %d categories", len(categories))

    async def delete(self, category_id: str) -> bool:
        with self._db.managed_session() as session:
            deleted = (
                session.query(SQLCategory)
                .filter(SQLCategory.id == category_id)
                .delete(synchronize_session=False)
            )
        if deleted:
            self._logger.info("🗑️ CATEGORY DELETED: %s", category_id)
        return deleted > 0

    @staticmethod
    def _map_to_model(category: Category) -> SQLCategory:
        return SQLCategory(
            id=category.id,
            name=category.name,
            parent_id=category.parent_id,
            level=category.level,
            path=category.path,
            sort_order=category.sort_order,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )

    @staticmethod
    def _map_to_domain(sql_category: SQLCategory) -> Category:
        return Category(
            id=sql_category.id,
            name=sql_category.name,
            parent_id=sql_category.parent_id,
            level=sql_category.level,
            path=sql_category.path,
            sort_order=sql_category.sort_order,
            created_at=sql_category.created_at,
            updated_at=sql_category.updated_at,
        )
