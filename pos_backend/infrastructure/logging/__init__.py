"""
Logging Infrastructure

Structured logging setup and performance tracking.
"""

from .logging_config import (
    PerformanceLogger,
    ProductionLogger,
    StructuredJsonFormatter,
    setup_logging,
)

__all__ = [
    "PerformanceLogger",
    "ProductionLogger",
    "StructuredJsonFormatter",
    "setup_logging",
]
