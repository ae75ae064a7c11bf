"""
Order Ingestion Use Case

The write path for orders submitted by the client: number the order,
resolve its customer, persist it, deduct stock and stamp the customer's
last purchase. Stages run one after another, each in its own storage call;
a failing stage stops the submission and earlier stages are not undone.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pos_backend.application.dtos.order_dtos import IngestionReport, IngestionStage
from pos_backend.application.use_cases.customer_identity_use_case import (
    CustomerIdentityResolver,
)
from pos_backend.application.use_cases.order_number_use_case import OrderNumberGenerator
from pos_backend.application.use_cases.stock_ledger_use_case import StockLedger
from pos_backend.domain.entities.order_entity import Order
from pos_backend.domain.entities.settings_entity import AppSettings
from pos_backend.domain.repositories.customer_repository import CustomerRepository
from pos_backend.domain.repositories.order_repository import OrderRepository
from pos_backend.domain.repositories.settings_repository import SettingsRepository
from pos_backend.infrastructure.logging.logging_config import PerformanceLogger
from pos_backend.infrastructure.utilities.exceptions import (
    DatabaseError,
    DuplicateOrderNumberError,
)
from pos_backend.infrastructure.utilities.helpers import utc_now


class OrderIngestionUseCase:
    """Use case for saving orders submitted by the client"""

    def __init__(
        self,
        order_repository: OrderRepository,
        customer_repository: CustomerRepository,
        settings_repository: SettingsRepository,
        identity_resolver: CustomerIdentityResolver,
        number_generator: OrderNumberGenerator,
        stock_ledger: StockLedger,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._order_repository = order_repository
        self._customer_repository = customer_repository
        self._settings_repository = settings_repository
        self._identity_resolver = identity_resolver
        self._number_generator = number_generator
        self._stock_ledger = stock_ledger
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)

    async def submit(self, order: Order) -> str:
        """Save ``order`` and return its final order number"""
        report = await self.ingest(order)
        return report.order_number

    async def ingest(self, order: Order) -> IngestionReport:
        """Run every stage and report what happened"""
        self._logger.info("📥 ===== ORDER SUBMISSION STARTED: %s =====", order.id)
        report = IngestionReport(order=order)

        with self._stage(report, IngestionStage.NUMBERED):
            settings = await self._settings_repository.get_settings()
            if settings is None:
                settings = AppSettings.defaults()
            if order.needs_order_number():
                order.order_number = await self._number_generator.generate(
                    settings, order.date
                )
            order.updated_at = self._clock()

        with self._stage(report, IngestionStage.CUSTOMER_RESOLVED):
            resolved = await self._identity_resolver.resolve(order.customer, order.id)
            order.assign_customer(resolved.customer_id)

        with self._stage(report, IngestionStage.PERSISTED):
            report.created = not await self._order_repository.exists(order.id)
            await self._persist(order, report.created)

        with self._stage(report, IngestionStage.STOCK_ADJUSTED):
            if report.created:
                report.stock_adjusted = await self._stock_ledger.deduct_batch(
                    order.stock_movements()
                )

        with self._stage(report, IngestionStage.CUSTOMER_TOUCHED):
            if not resolved.is_order_snapshot:
                await self._customer_repository.touch_last_purchase(
                    resolved.customer_id, self._clock()
                )

        report.stage = IngestionStage.DONE
        self._logger.info(
            "🎉 ===== ORDER SUBMISSION COMPLETED: #%s (%s) =====",
            order.order_number,
            "created" if report.created else "updated",
        )
        return report

    async def _persist(self, order: Order, is_new: bool) -> None:
        try:
            if is_new:
                await self._order_repository.insert(order)
            else:
                await self._order_repository.update(order)
        except IntegrityError as e:
            self._logger.error("💥 DUPLICATE ORDER NUMBER: %s", order.order_number)
            raise DuplicateOrderNumberError(order.order_number) from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to save order: {e}", operation="save_order") from e

    @contextmanager
    def _stage(self, report: IngestionReport, stage: IngestionStage) -> Iterator[None]:
        """Time one stage and record it on the report once it succeeds"""
        with PerformanceLogger(
            f"order_ingestion.{stage.value}",
            self._logger,
            {"order_id": report.order.id},
        ) as perf:
            yield
        report.stage = stage
        report.stage_durations_ms[stage.value] = perf.duration_ms
        self._logger.info(
            "✅ STAGE %s: %s (%.1f ms)", stage.name, report.order.id, perf.duration_ms
        )
