"""
Customer DTOs

Data Transfer Objects for customer identity resolution.
"""

from dataclasses import dataclass

from pos_backend.domain.entities.customer_entity import Customer
from pos_backend.domain.value_objects.customer_id import CustomerId, CustomerKind


@dataclass
class ResolvedCustomer:
    """Outcome of resolving the customer attached to an incoming order"""

    customer_id: CustomerId
    customer: Customer
    created: bool = False
    merged: bool = False

    @property
    def is_order_snapshot(self) -> bool:
        return self.customer_id.kind is CustomerKind.ORDER_SNAPSHOT
