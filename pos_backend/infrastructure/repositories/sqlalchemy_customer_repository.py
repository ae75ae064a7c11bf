"""
SQLAlchemy implementation of CustomerRepository
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, not_, or_
from sqlalchemy.sql.elements import ColumnElement

from pos_backend.domain.entities.customer_entity import Customer as DomainCustomer
from pos_backend.domain.repositories.customer_repository import CustomerRepository
from pos_backend.domain.value_objects.customer_id import CustomerId
from pos_backend.infrastructure.database.models import Customer as SQLCustomer
from pos_backend.infrastructure.database.models import Order as SQLOrder
from pos_backend.infrastructure.database.operations import DatabaseManager
from pos_backend.infrastructure.utilities.constants import CustomerIdPrefixes
from pos_backend.infrastructure.utilities.exceptions import CustomerNotFoundError
from pos_backend.infrastructure.utilities.helpers import is_blank, like_pattern, utc_now


def regular_customers_only() -> ColumnElement[bool]:
    """Exclude temporary, order-snapshot and placeholder rows"""
    return and_(
        not_(SQLCustomer.id.startswith(CustomerIdPrefixes.TEMPORARY, autoescape=True)),
        not_(SQLCustomer.id.startswith(CustomerIdPrefixes.ORDER_SNAPSHOT, autoescape=True)),
        not_(
            SQLCustomer.id.startswith(
                CustomerIdPrefixes.DELETED_PLACEHOLDER, autoescape=True
            )
        ),
    )


class SQLAlchemyCustomerRepository(CustomerRepository):
    """SQLAlchemy implementation of customer repository"""

    def __init__(self, db_manager: DatabaseManager):
        self._db = db_manager
        self._logger = logging.getLogger(self.__class__.__name__)

    async def find_by_id(self, customer_id: CustomerId) -> Optional[DomainCustomer]:
        """Find customer by ID"""
        with self._db.managed_session() as session:
            sql_customer = (
                session.query(SQLCustomer)
                .filter(SQLCustomer.id == customer_id.value)
                .first()
            )

            if not sql_customer:
                return None

            return self._map_to_domain(sql_customer)

    async def find_by_identity(
        self, phone: str, license_plate: str
    ) -> Optional[DomainCustomer]:
        """Find the most recently updated regular customer by phone or plate"""
        conditions = []
        if not is_blank(phone):
            conditions.append(SQLCustomer.phone == phone)
        if not is_blank(license_plate):
            conditions.append(SQLCustomer.license_plate == license_plate)
        if not conditions:
            return None

        with self._db.managed_session() as session:
            sql_customer = (
                session.query(SQLCustomer)
                .filter(regular_customers_only(), or_(*conditions))
                .order_by(SQLCustomer.updated_at.desc())
                .first()
            )

            if not sql_customer:
                return None

            self._logger.debug(
                "🔎 IDENTITY MATCH: phone=%r plate=%r -> %s",
                phone,
                license_plate,
                sql_customer.id,
            )
            return self._map_to_domain(sql_customer)

    async def find_all(self) -> List[DomainCustomer]:
        """Find all regular customers"""
        with self._db.managed_session() as session:
            sql_customers = (
                session.query(SQLCustomer)
                .filter(regular_customers_only())
                .order_by(SQLCustomer.name)
                .all()
            )
            return [self._map_to_domain(customer) for customer in sql_customers]

    async def search(self, query: str) -> List[DomainCustomer]:
        """Search regular customers by name, plate or phone"""
        pattern = like_pattern(query)
        with self._db.managed_session() as session:
            sql_customers = (
                session.query(SQLCustomer)
                .filter(
                    regular_customers_only(),
                    or_(
                        SQLCustomer.name.like(pattern),
                        SQLCustomer.license_plate.like(pattern),
                        SQLCustomer.phone.like(pattern),
                    ),
                )
                .order_by(SQLCustomer.name)
                .all()
            )
            return [self._map_to_domain(customer) for customer in sql_customers]

    async def insert(self, customer: DomainCustomer) -> DomainCustomer:
        """Insert a new customer"""
        with self._db.managed_session() as session:
            sql_customer = SQLCustomer(
                id=customer.id.value,
                name=customer.name,
                phone=customer.phone,
                license_plate=customer.license_plate,
                address=customer.address,
                last_purchase_at=customer.last_purchase_at,
                created_at=customer.created_at,
                updated_at=customer.updated_at,
            )
            session.add(sql_customer)
            session.flush()

            self._logger.info("🆕 CUSTOMER CREATED: %s", customer.id.value)
            return self._map_to_domain(sql_customer)

    async def update(self, customer: DomainCustomer) -> DomainCustomer:
        """Update an existing customer"""
        with self._db.managed_session() as session:
            sql_customer = (
                session.query(SQLCustomer)
                .filter(SQLCustomer.id == customer.id.value)
                .first()
            )

            if not sql_customer:
                raise CustomerNotFoundError(customer.id.value)

            sql_customer.name = customer.name
            sql_customer.phone = customer.phone
            sql_customer.license_plate = customer.license_plate
            sql_customer.address = customer.address
            sql_customer.last_purchase_at = customer.last_purchase_at
            sql_customer.created_at = customer.created_at
            sql_customer.updated_at = customer.updated_at
            session.flush()

            self._logger.info("✏️ CUSTOMER UPDATED: %s", customer.id.value)
            return self._map_to_domain(sql_customer)

    async def touch_last_purchase(self, customer_id: CustomerId, when: datetime) -> bool:
        """Stamp the last purchase time"""
        with self._db.managed_session() as session:
            updated = (
                session.query(SQLCustomer)
                .filter(SQLCustomer.id == customer_id.value)
                .update(
                    {
                        SQLCustomer.last_purchase_at: when,
                        SQLCustomer.updated_at: when,
                    },
                    synchronize_session=False,
                )
            )
            return updated > 0

    async def ensure_placeholder_and_relink(
        self, original_id: CustomerId, placeholder: DomainCustomer
    ) -> int:
        """Create the placeholder once and move the original's orders to it"""
        now = utc_now()
        with self._db.managed_session() as session:
            exists = (
                session.query(SQLCustomer.id)
                .filter(SQLCustomer.id == placeholder.id.value)
                .first()
                is not None
            )
            if not exists:
                session.add(
                    SQLCustomer(
                        id=placeholder.id.value,
                        name=placeholder.name,
                        phone=placeholder.phone,
                        license_plate=placeholder.license_plate,
                        address=placeholder.address,
                        last_purchase_at=None,
                        created_at=now,
                        updated_at=now,
                    )
                )
                session.flush()
                self._logger.info("🪦 PLACEHOLDER CREATED: %s", placeholder.id.value)

            relinked = (
                session.query(SQLOrder)
                .filter(SQLOrder.customer_id == original_id.value)
                .update(
                    {SQLOrder.customer_id: placeholder.id.value, SQLOrder.updated_at: now},
                    synchronize_session=False,
                )
            )

            self._logger.info(
                "🔗 ORDERS RELINKED: %d from %s to %s",
                relinked,
                original_id.value,
                placeholder.id.value,
            )
            return relinked

    async def relink_orders_and_delete(
        self, source_id: CustomerId, target_id: CustomerId
    ) -> int:
        """Move all orders of source to target, then remove source"""
        now = utc_now()
        with self._db.managed_session() as session:
            relinked = (
                session.query(SQLOrder)
                .filter(SQLOrder.customer_id == source_id.value)
                .update(
                    {SQLOrder.customer_id: target_id.value, SQLOrder.updated_at: now},
                    synchronize_session=False,
                )
            )
            session.query(SQLCustomer).filter(
                SQLCustomer.id == source_id.value
            ).delete(synchronize_session=False)

            self._logger.info(
                "🔀 CUSTOMERS MERGED: %s -> %s (%d orders)",
                source_id.value,
                target_id.value,
                relinked,
            )
            return relinked

    async def delete(self, customer_id: CustomerId) -> bool:
        """Delete customer by ID"""
        with self._db.managed_session() as session:
            deleted = (
                session.query(SQLCustomer)
                .filter(SQLCustomer.id == customer_id.value)
                .delete(synchronize_session=False)
            )

            if deleted:
                self._logger.info("🗑️ CUSTOMER DELETED: %s", customer_id.value)
            return deleted > 0

    @staticmethod
    def _map_to_domain(sql_customer: SQLCustomer) -> DomainCustomer:
        """Map SQLAlchemy Customer to domain Customer"""
        return DomainCustomer(
            id=CustomerId.parse(sql_customer.id),
            name=sql_customer.name or "",
            phone=sql_customer.phone or "",
            license_plate=sql_customer.license_plate or "",
            address=sql_customer.address,
            last_purchase_at=sql_customer.last_purchase_at,
            created_at=sql_customer.created_at,
            updated_at=sql_customer.updated_at,
        )
