"""
Order DTOs

Data Transfer Objects for order-related operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from pos_backend.domain.entities.order_entity import Order


class IngestionStage(Enum):
    """Linear stages of an order submission"""

    RECEIVED = "received"
    NUMBERED = "numbered"
    CUSTOMER_RESOLVED = "customer_resolved"
    PERSISTED = "persisted"
    STOCK_ADJUSTED = "stock_adjusted"
    CUSTOMER_TOUCHED = "customer_touched"
    DONE = "done"


@dataclass
class IngestionReport:
    """What one submission did, stage by stage"""

    order: Order
    created: bool = False
    stage: IngestionStage = IngestionStage.RECEIVED
    stage_durations_ms: Dict[str, float] = field(default_factory=dict)
    stock_adjusted: List[str] = field(default_factory=list)

    @property
    def order_number(self) -> str:
        return self.order.order_number
