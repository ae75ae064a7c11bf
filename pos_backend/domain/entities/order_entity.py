# pylint: disable=too-many-instance-attributes
"""
Order domain entities
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from pos_backend.domain.entities.customer_entity import Customer
from pos_backend.domain.value_objects.customer_id import CustomerId
from pos_backend.infrastructure.utilities.constants import OrderStatus
from pos_backend.infrastructure.utilities.helpers import utc_now


@dataclass
class OrderItem:
    """Point-in-time copy of a product line on an order"""

    product_id: Optional[str]
    name: str
    unit: str
    price: float
    quantity: float
    discount_price: Optional[float] = None
    remark: Optional[str] = None
    sort_value: int = 0

    @property
    def line_total(self) -> float:
        unit_price = self.discount_price if self.discount_price is not None else self.price
        return unit_price * self.quantity


@dataclass
class Order:
    """
    Order domain entity

    ``customer`` and ``items`` are embedded copies filled in by the
    ingestion pipeline or the history query; they are not columns of the
    order row.
    """

    id: str
    order_number: str
    date: date
    customer_id: CustomerId
    customer: Customer
    items: List[OrderItem] = field(default_factory=list)
    total_amount: float = 0.0
    remark: Optional[str] = None
    template_id: Optional[str] = None
    status: str = OrderStatus.COMPLETED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        now = utc_now()
        if self.created_at is None:
            self.created_at = now
        if self.updated_at is None:
            self.updated_at = now

    def needs_order_number(self) -> bool:
        return not self.order_number or not self.order_number.strip()

    def assign_customer(self, customer_id: CustomerId) -> None:
        """Point the order and its embedded snapshot at ``customer_id``"""
        self.customer_id = customer_id
        self.customer = self.customer.with_id(customer_id)

    def stock_movements(self) -> list[tuple[Optional[str], float]]:
        """(product id, quantity) for every line, in line order"""
        return [(item.product_id, item.quantity) for item in self.items]
