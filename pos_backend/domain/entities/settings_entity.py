"""
Application settings entity

A single stored row. Only the order-number fields are interpreted by the
backend; the rest is kept for the client.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pos_backend.domain.value_objects.order_number import OrderNumberPattern
from pos_backend.infrastructure.utilities.constants import (
    SETTINGS_ROW_ID,
    OrderNumberDefaults,
)
from pos_backend.infrastructure.utilities.helpers import utc_now


@dataclass
class AppSettings:  # pylint: disable=too-many-instance-attributes
    """Singleton settings row"""

    id: str = SETTINGS_ROW_ID
    order_number_format: str = OrderNumberDefaults.FORMAT
    order_number_prefix: str = OrderNumberDefaults.PREFIX
    order_number_digits: int = OrderNumberDefaults.DIGITS
    order_number_reset_daily: bool = OrderNumberDefaults.RESET_DAILY
    theme: str = "light"
    font_size: int = 14
    date_format: str = "YYYY-MM-DD"
    default_template_id: str = ""
    default_category_id: str = ""
    auto_backup: bool = True
    backup_interval: int = 24
    backup_keep_count: int = 10
    retain_days: int = 90
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.updated_at is None:
            self.updated_at = utc_now()

    @classmethod
    def defaults(cls) -> "AppSettings":
        """Settings used before the user has saved any"""
        return cls()

    def order_number_pattern(self) -> OrderNumberPattern:
        return OrderNumberPattern(self.order_number_format, self.order_number_prefix)
