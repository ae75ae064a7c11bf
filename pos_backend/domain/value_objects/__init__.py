"""
Domain value objects package

Contains immutable value objects that represent concepts in the business domain.
"""

from .customer_id import CustomerId, CustomerKind
from .order_number import OrderNumberPattern, SequenceToken, next_sequence

__all__ = [
    "CustomerId",
    "CustomerKind",
    "OrderNumberPattern",
    "SequenceToken",
    "next_sequence",
]
