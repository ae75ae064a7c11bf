"""
Order Number Use Case

Turns the configured pattern into the next human-readable order number.
"""

import logging
from datetime import date, datetime
from typing import Callable, Optional

from pos_backend.domain.entities.settings_entity import AppSettings
from pos_backend.domain.repositories.order_repository import OrderRepository
from pos_backend.domain.value_objects.order_number import next_sequence
from pos_backend.infrastructure.utilities.helpers import utc_now


class OrderNumberGenerator:
    """
    Generates order numbers from ``AppSettings.order_number_format``

    Date tokens always come from the clock, not from the order's business
    date. Uniqueness is left to the UNIQUE constraint on ``order_number``.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._order_repository = order_repository
        self._clock = clock
        self._logger = logging.getLogger(self.__class__.__name__)

    async def generate(
        self, settings: AppSettings, order_date: Optional[date] = None
    ) -> str:
        """Expand the pattern and fill the sequence token, if any"""
        now = self._clock()
        pattern = settings.order_number_pattern()
        expanded = pattern.expand_dates(now)

        token = pattern.find_sequence_token(expanded, settings.order_number_digits)
        if token is None:
            self._logger.debug("🔢 ORDER NUMBER (no sequence): %s", expanded)
            return expanded

        window = now.date() if settings.order_number_reset_daily else None
        last_number = await self._order_repository.find_last_order_number(window)
        sequence = next_sequence(last_number)

        order_number = expanded.replace(token.text, token.render(sequence))
        self._logger.info(
            "🔢 ORDER NUMBER: %s (last=%s, business date=%s)",
            order_number,
            last_number,
            order_date,
        )
        return order_number
