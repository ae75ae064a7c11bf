"""
Order repository interface

Defines the contract for order data access operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from ..entities.order_entity import Order, OrderItem
from ..value_objects.customer_id import CustomerId


class OrderRepository(ABC):
    """Repository interface for order operations"""

    @abstractmethod
    async def exists(self, order_id: str) -> bool:
        """Whether an order row with this id exists"""

    @abstractmethod
    async def get_order_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID, without items"""

    @abstractmethod
    async def get_order_items(self, order_id: str) -> List[OrderItem]:
        """Items of an order ordered by sort value"""

    @abstractmethod
    async def get_all_orders(self) -> List[Order]:
        """All orders, newest first, without items"""

    @abstractmethod
    async def get_orders_by_customer(self, customer_id: CustomerId) -> List[Order]:
        """Orders referencing a customer"""

    @abstractmethod
    async def find_last_order_number(self, on_date: Optional[date] = None) -> Optional[str]:
        """Order number of the most recently created order, optionally for one business date"""

    @abstractmethod
    async def insert(self, order: Order) -> None:
        """Insert the order row and its items"""

    @abstractmethod
    async def update(self, order: Order) -> None:
        """Update order metadata; items are left as they are"""
