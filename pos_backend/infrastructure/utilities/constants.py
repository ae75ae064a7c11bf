"""
Application constants for the POS order backend

Centralizes the magic numbers and fixed strings shared across layers.
"""

from typing import Final


class RetrySettings:
    """Connection timeouts for the embedded database"""

    CONNECTION_TIMEOUT_SECONDS: Final[int] = 30


class PerformanceSettings:
    """Thresholds used by the performance logging helpers"""

    SLOW_QUERY_THRESHOLD_MS: Final[int] = 250
    SLOW_OPERATION_THRESHOLD_MS: Final[int] = 1000


class LoggingSettings:
    """Logging file sizes and rotation settings"""

    MAX_LOG_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10MB
    MAIN_LOG_BACKUP_COUNT: Final[int] = 10
    ERROR_LOG_BACKUP_COUNT: Final[int] = 10


class FileSettings:
    """Log file names"""

    MAIN_LOG_FILE: Final[str] = "pos_backend.log"
    ERROR_LOG_FILE: Final[str] = "errors.log"


class CustomerIdPrefixes:
    """Id prefixes that encode the customer identity class in storage"""

    TEMPORARY: Final[str] = "temp_"
    ORDER_SNAPSHOT: Final[str] = "order_customer_"
    DELETED_PLACEHOLDER: Final[str] = "deleted_"


class PlaceholderCustomer:
    """Display values written into a placeholder row after deletion"""

    NAME: Final[str] = "Deleted customer (history retained)"
    ADDRESS_TEMPLATE: Final[str] = "Original customer ID: {original_id}"


class OrderNumberDefaults:
    """Order-number settings used until the user saves their own"""

    FORMAT: Final[str] = "{YYYY}{MM}{DD}_{SEQ:6}"
    PREFIX: Final[str] = ""
    DIGITS: Final[int] = 6
    RESET_DAILY: Final[bool] = True


class OrderStatus:
    """Order statuses known to the client"""

    COMPLETED: Final[str] = "completed"
    DRAFT: Final[str] = "draft"


SETTINGS_ROW_ID: Final[str] = "settings"
