"""
Customer Repository interface

Defines the contract for customer data access operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..entities.customer_entity import Customer
from ..value_objects.customer_id import CustomerId


class CustomerRepository(ABC):
    """
    Abstract repository interface for Customer entities

    Lookups return ``None`` for a missing row; callers use that to choose
    between insert and update.
    """

    @abstractmethod
    async def find_by_id(self, customer_id: CustomerId) -> Optional[Customer]:
        """Find a customer by id, any identity class"""

    @abstractmethod
    async def find_by_identity(self, phone: str, license_plate: str) -> Optional[Customer]:
        """
        Find a regular customer by phone or license plate

        Args:
            phone: Matched only when not blank
            license_plate: Matched only when not blank

        Returns:
            The most recently updated match, or None
        """

    @abstractmethod
    async def find_all(self) -> List[Customer]:
        """All regular customers ordered by name"""

    @abstractmethod
    async def search(self, query: str) -> List[Customer]:
        """Regular customers whose name, plate or phone contains ``query``"""

    @abstractmethod
    async def insert(self, customer: Customer) -> Customer:
        """Insert a new customer row"""

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        """Overwrite every column of an existing customer row"""

    @abstractmethod
    async def touch_last_purchase(self, customer_id: CustomerId, when: datetime) -> bool:
        """Set last purchase and updated timestamps; False when the row is missing"""

    @abstractmethod
    async def ensure_placeholder_and_relink(
        self, original_id: CustomerId, placeholder: Customer
    ) -> int:
        """
        Make sure ``placeholder`` exists and move every order of ``original_id`` to it

        Returns:
            Number of orders repointed
        """

    @abstractmethod
    async def relink_orders_and_delete(self, source_id: CustomerId, target_id: CustomerId) -> int:
        """Repoint all orders from source to target, then delete the source row"""

    @abstractmethod
    async def delete(self, customer_id: CustomerId) -> bool:
        """Delete a customer row; False when it did not exist"""
