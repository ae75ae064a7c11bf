"""
Customer Management Use Case

Saving, merging, deleting and listing customers outside of order ingestion.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, List

from pos_backend.domain.entities.customer_entity import Customer
from pos_backend.domain.repositories.customer_repository import CustomerRepository
from pos_backend.domain.value_objects.customer_id import CustomerId, CustomerKind
from pos_backend.infrastructure.utilities.constants import PlaceholderCustomer
from pos_backend.infrastructure.utilities.exceptions import (
    CustomerNotFoundError,
    ValidationError,
)
from pos_backend.infrastructure.utilities.helpers import utc_now


class CustomerManagementUseCase:
    """Use case for customer maintenance commands"""

    def __init__(
        self,
        customer_repository: CustomerRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._customer_repository = customer_repository
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)

    async def save_customer(self, customer: Customer) -> Customer:
        """
        Save a customer edited by the user

        A phone or plate match updates the matched row. Without a match the
        row with the same id is updated, or a new row is inserted; temporary
        ids are swapped for a fresh regular id first.
        """
        now = self._clock()

        if customer.id.kind in (CustomerKind.REGULAR, CustomerKind.TEMPORARY):
            match = await self._customer_repository.find_by_identity(
                customer.phone.strip(), customer.license_plate.strip()
            )
            if match is not None:
                self._logger.info(
                    "🤝 SAVE CUSTOMER: %s matched stored %s", customer.id, match.id
                )
                return await self._customer_repository.update(
                    match.overlay(customer, now)
                )

        if customer.id.is_temporary:
            fresh = replace(
                customer, id=CustomerId.new_regular(), created_at=now, updated_at=now
            )
            self._logger.info("🆕 SAVE CUSTOMER: %s stored as %s", customer.id, fresh.id)
            return await self._customer_repository.insert(fresh)

        existing = await self._customer_repository.find_by_id(customer.id)
        if existing is None:
            return await self._customer_repository.insert(
                replace(customer, updated_at=now)
            )

        return await self._customer_repository.update(
            replace(
                customer,
                created_at=existing.created_at,
                last_purchase_at=customer.last_purchase_at or existing.last_purchase_at,
                updated_at=now,
            )
        )

    async def merge_customers(self, source_id: str, target_id: str) -> Customer:
        """Fold ``source_id`` into ``target_id`` and move its orders"""
        if source_id == target_id:
            raise ValidationError("Cannot merge a customer into itself", field="targetId")

        source = await self.get_customer_by_id(source_id)
        target = await self.get_customer_by_id(target_id)

        merged = await self._customer_repository.update(
            target.absorb(source, self._clock())
        )
        await self._customer_repository.relink_orders_and_delete(source.id, target.id)

        self._logger.info("🔀 MERGE COMPLETE: %s -> %s", source_id, target_id)
        return merged

    async def delete_customer(self, customer_id: str) -> None:
        """
        Delete a customer while keeping its order history

        Orders are moved to a ``deleted_<id>`` placeholder, created once, before
        the customer row goes away.
        """
        original = CustomerId.parse(customer_id)
        placeholder = Customer(
            id=CustomerId.deleted_placeholder(customer_id),
            name=PlaceholderCustomer.NAME,
            phone="",
            license_plate="",
            address=PlaceholderCustomer.ADDRESS_TEMPLATE.format(original_id=customer_id),
        )

        await self._customer_repository.ensure_placeholder_and_relink(
            original, placeholder
        )
        await self._customer_repository.delete(original)

    async def batch_delete_customers(self, customer_ids: List[str]) -> int:
        """Delete one by one; the first failure stops the batch"""
        for customer_id in customer_ids:
            await self.delete_customer(customer_id)
        self._logger.info("🗑️ BATCH DELETE: %d customers", len(customer_ids))
        return len(customer_ids)

    async def get_all_customers(self) -> List[Customer]:
        return await self._customer_repository.find_all()

    async def get_customer_by_id(self, customer_id: str) -> Customer:
        customer = await self._customer_repository.find_by_id(
            CustomerId.parse(customer_id)
        )
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    async def search_customers(self, query: str) -> List[Customer]:
        return await self._customer_repository.search(query)
