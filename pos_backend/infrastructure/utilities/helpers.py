"""
Small helpers shared by the domain and infrastructure layers
"""

from datetime import UTC, datetime
from typing import Optional


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(UTC)


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty and whitespace-only strings"""
    return value is None or not value.strip()


def like_pattern(query: str) -> str:
    """Wrap a search term for a substring LIKE match"""
    return f"%{query}%"
