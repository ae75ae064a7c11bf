"""
Customer Identity Use Case

Decides which stored customer an incoming order belongs to.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from pos_backend.application.dtos.customer_dtos import ResolvedCustomer
from pos_backend.domain.entities.customer_entity import Customer
from pos_backend.domain.repositories.customer_repository import CustomerRepository
from pos_backend.domain.value_objects.customer_id import CustomerId, CustomerKind
from pos_backend.infrastructure.utilities.exceptions import ValidationError
from pos_backend.infrastructure.utilities.helpers import utc_now


class CustomerIdentityResolver:
    """
    Resolve the customer reference of an incoming order

    - temporary ids become an order-scoped snapshot ``order_customer_<orderId>``
      and are never matched against other customers
    - snapshot and placeholder ids are kept as they are
    - regular customers are deduplicated by phone or license plate, and the
      stored row absorbs the incoming values (the stored id wins)
    """

    def __init__(
        self,
        customer_repository: CustomerRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._customer_repository = customer_repository
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)

    async def resolve(
        self, incoming: Customer, owning_order_id: Optional[str] = None
    ) -> ResolvedCustomer:
        kind = incoming.id.kind

        if kind is CustomerKind.TEMPORARY:
            if not owning_order_id:
                raise ValidationError(
                    "A temporary customer can only be resolved for an order",
                    field="customer",
                )
            return await self._keep_or_insert(
                incoming.with_id(CustomerId.order_snapshot(owning_order_id))
            )

        if kind in (CustomerKind.ORDER_SNAPSHOT, CustomerKind.DELETED_PLACEHOLDER):
            return await self._keep_or_insert(incoming)

        match = await self._customer_repository.find_by_identity(
            incoming.phone.strip(), incoming.license_plate.strip()
        )
        if match is not None:
            merged = match.overlay(incoming, self._clock())
            saved = await self._customer_repository.update(merged)
            self._logger.info(
                "🤝 CUSTOMER MATCHED: incoming %s -> stored %s", incoming.id, match.id
            )
            return ResolvedCustomer(match.id, saved, merged=True)

        return await self._keep_or_insert(incoming)

    async def _keep_or_insert(self, customer: Customer) -> ResolvedCustomer:
        """Insert ``customer`` unless a row with its id already exists"""
        existing = await self._customer_repository.find_by_id(customer.id)
        if existing is not None:
            return ResolvedCustomer(existing.id, existing)

        saved = await self._customer_repository.insert(customer)
        return ResolvedCustomer(saved.id, saved, created=True)
