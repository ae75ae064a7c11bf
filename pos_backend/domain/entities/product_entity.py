# pylint: disable=too-many-instance-attributes
"""
Product and category entities
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pos_backend.infrastructure.utilities.helpers import utc_now


@dataclass
class Product:
    """Product domain entity"""

    id: str
    name: str
    unit: str
    price: float
    category_id: Optional[str] = None
    stock: Optional[float] = None
    min_stock: Optional[float] = None
    track_stock: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        now = utc_now()
        if self.created_at is None:
            self.created_at = now
        if self.updated_at is None:
            self.updated_at = now

    def is_stock_tracked(self) -> bool:
        """Stock is only ever decremented for tracked products with a known level"""
        return self.track_stock and self.stock is not None

    def is_below_minimum(self) -> bool:
        if not self.is_stock_tracked() or self.min_stock is None:
            return False
        return self.stock < self.min_stock


@dataclass
class Category:
    """Product category; ``path`` and ``level`` describe its place in the tree"""

    id: str
    name: str
    parent_id: Optional[str] = None
    level: int = 0
    path: str = ""
    sort_order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        now = utc_now()
        if self.created_at is None:
            self.created_at = now
        if self.updated_at is None:
            self.updated_at = now
