"""
Order History Use Case
"""

import logging
from typing import List

from pos_backend.domain.entities.customer_entity import Customer
from pos_backend.domain.entities.order_entity import Order
from pos_backend.domain.repositories.customer_repository import CustomerRepository
from pos_backend.domain.repositories.order_repository import OrderRepository


class OrderHistoryUseCase:
    """Read side of orders: each order with its customer and items"""

    def __init__(
        self,
        order_repository: OrderRepository,
        customer_repository: CustomerRepository,
    ):
        self._order_repository = order_repository
        self._customer_repository = customer_repository
        self._logger = logging.getLogger(self.__class__.__name__)

    async def list_orders(self) -> List[Order]:
        """All orders, newest first"""
        orders = await self._order_repository.get_all_orders()
        for order in orders:
            await self._fill(order)
        return orders

    async def _fill(self, order: Order) -> Order:
        order.items = await self._order_repository.get_order_items(order.id)
        customer = await self._customer_repository.find_by_id(order.customer_id)
        # The row can be gone when storage was edited by hand
        order.customer = customer or Customer(id=order.customer_id)
        return order
