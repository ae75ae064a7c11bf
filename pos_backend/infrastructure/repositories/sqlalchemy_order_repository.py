"""
SQLAlchemy Order Repository

Concrete implementation of OrderRepository using SQLAlchemy ORM.
"""

import logging
from datetime import date
from typing import List, Optional

from pos_backend.domain.entities.customer_entity import Customer
from pos_backend.domain.entities.order_entity import Order, OrderItem
from pos_backend.domain.repositories.order_repository import OrderRepository
from pos_backend.domain.value_objects.customer_id import CustomerId
from pos_backend.infrastructure.database.models import Order as SQLOrder
from pos_backend.infrastructure.database.models import OrderItem as SQLOrderItem
from pos_backend.infrastructure.database.operations import DatabaseManager
from pos_backend.infrastructure.utilities.exceptions import OrderNotFoundError


class SQLAlchemyOrderRepository(OrderRepository):
    """SQLAlchemy implementation of OrderRepository"""

    def __init__(self, db_manager: DatabaseManager):
        self._db = db_manager
        self._logger = logging.getLogger(self.__class__.__name__)

    async def exists(self, order_id: str) -> bool:
        """True when an order row with this id exists"""
        with self._db.managed_session() as session:
            return (
                session.query(SQLOrder.id).filter(SQLOrder.id == order_id).first()
                is not None
            )

    async def get_order_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID"""
        self._logger.debug("🔍 GET ORDER BY ID: %s", order_id)

        with self._db.managed_session() as session:
            order = session.query(SQLOrder).filter(SQLOrder.id == order_id).first()

            if not order:
                self._logger.debug("📭 ORDER NOT FOUND: ID %s", order_id)
                return None

            return self._map_to_domain(order)

    async def get_order_items(self, order_id: str) -> List[OrderItem]:
        """Get the items of one order"""
        with self._db.managed_session() as session:
            items = (
                session.query(SQLOrderItem)
                .filter(SQLOrderItem.order_id == order_id)
                .order_by(SQLOrderItem.sort_value, SQLOrderItem.id)
                .all()
            )
            return [self._map_item_to_domain(item) for item in items]

    async def get_all_orders(self) -> List[Order]:
        """Get all orders, newest first"""
        with self._db.managed_session() as session:
            orders = session.query(SQLOrder).order_by(SQLOrder.created_at.desc()).all()

            self._logger.info("✅ FOUND %d ORDERS", len(orders))
            return [self._map_to_domain(order) for order in orders]

    async def get_orders_by_customer(self, customer_id: CustomerId) -> List[Order]:
        """Get orders by customer ID"""
        with self._db.managed_session() as session:
            orders = (
                session.query(SQLOrder)
                .filter(SQLOrder.customer_id == customer_id.value)
                .order_by(SQLOrder.created_at.desc())
                .all()
            )
            return [self._map_to_domain(order) for order in orders]

    async def find_last_order_number(self, on_date: Optional[date] = None) -> Optional[str]:
        """Order number of the most recently created order"""
        with self._db.managed_session() as session:
            query = session.query(SQLOrder.order_number)
            if on_date is not None:
                query = query.filter(SQLOrder.date == on_date)
            row = query.order_by(SQLOrder.created_at.desc()).first()
            return row[0] if row else None

    async def insert(self, order: Order) -> None:
        """Insert the order and its items in one transaction"""
        self._logger.info("📝 CREATE ORDER: #%s (%s)", order.order_number, order.id)

        with self._db.managed_session() as session:
            sql_order = SQLOrder(
                id=order.id,
                order_number=order.order_number,
                date=order.date,
                customer_id=order.customer_id.value,
                total_amount=order.total_amount,
                remark=order.remark,
                template_id=order.template_id,
                status=order.status,
                created_at=order.created_at,
                updated_at=order.updated_at,
            )
            for position, item in enumerate(order.items):
                sql_order.order_items.append(
                    SQLOrderItem(
                        id=f"{order.id}_{position}",
                        product_id=item.product_id,
                        name=item.name,
                        unit=item.unit,
                        price=item.price,
                        quantity=item.quantity,
                        discount_price=item.discount_price,
                        remark=item.remark,
                        sort_value=item.sort_value,
                    )
                )
            session.add(sql_order)
            session.flush()

        self._logger.info(
            "✅ ORDER CREATION SUCCESS: #%s with %d items",
            order.order_number,
            len(order.items),
        )

    async def update(self, order: Order) -> None:
        """Update order metadata; items stay as first recorded"""
        with self._db.managed_session() as session:
            sql_order = session.query(SQLOrder).filter(SQLOrder.id == order.id).first()

            if not sql_order:
                raise OrderNotFoundError(order.id)

            sql_order.order_number = order.order_number
            sql_order.date = order.date
            sql_order.customer_id = order.customer_id.value
            sql_order.total_amount = order.total_amount
            sql_order.remark = order.remark
            sql_order.template_id = order.template_id
            sql_order.status = order.status
            sql_order.updated_at = order.updated_at
            session.flush()

        self._logger.info("🔄 ORDER UPDATED: #%s (%s)", order.order_number, order.id)

    @staticmethod
    def _map_to_domain(sql_order: SQLOrder) -> Order:
        customer_id = CustomerId.parse(sql_order.customer_id)
        return Order(
            id=sql_order.id,
            order_number=sql_order.order_number,
            date=sql_order.date,
            customer_id=customer_id,
            customer=Customer(id=customer_id),
            items=[],
            total_amount=sql_order.total_amount,
            remark=sql_order.remark,
            template_id=sql_order.template_id,
            status=sql_order.status,
            created_at=sql_order.created_at,
            updated_at=sql_order.updated_at,
        )

    @staticmethod
    def _map_item_to_domain(item: SQLOrderItem) -> OrderItem:
        return OrderItem(
            product_id=item.product_id,
            name=item.name,
            unit=item.unit,
            price=item.price,
            quantity=item.quantity,
            discount_price=item.discount_price,
            remark=item.remark,
            sort_value=item.sort_value,
        )
