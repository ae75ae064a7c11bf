"""
Customer ID value object

Customer ids are client-generated strings. A prefix on the stored id encodes
which identity class the row belongs to; that prefix is decoded here once so
the rest of the code works with ``CustomerId.kind`` instead of string checks.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pos_backend.infrastructure.utilities.constants import CustomerIdPrefixes


class CustomerKind(Enum):
    """Identity classes a customer id can belong to"""

    REGULAR = "regular"
    TEMPORARY = "temporary"
    ORDER_SNAPSHOT = "order_snapshot"
    DELETED_PLACEHOLDER = "deleted_placeholder"


_PREFIXES = (
    (CustomerIdPrefixes.ORDER_SNAPSHOT, CustomerKind.ORDER_SNAPSHOT),
    (CustomerIdPrefixes.DELETED_PLACEHOLDER, CustomerKind.DELETED_PLACEHOLDER),
    (CustomerIdPrefixes.TEMPORARY, CustomerKind.TEMPORARY),
)


@dataclass(frozen=True)
class CustomerId:
    """Customer identifier with its decoded identity class"""

    value: str
    kind: CustomerKind = field(default=CustomerKind.REGULAR, compare=False)
    origin: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        """Validate customer ID"""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Customer ID must be a non-empty string")

    @classmethod
    def parse(cls, raw: str) -> "CustomerId":
        """Decode the identity class from a stored or client-supplied id"""
        if not isinstance(raw, str) or not raw.strip():
            raise ValueError("Customer ID must be a non-empty string")
        for prefix, kind in _PREFIXES:
            if raw.startswith(prefix):
                origin = raw[len(prefix):] or None
                return cls(raw, kind, origin)
        return cls(raw, CustomerKind.REGULAR)

    @classmethod
    def order_snapshot(cls, order_id: str) -> "CustomerId":
        """Id of the snapshot customer anchoring one order"""
        return cls(
            f"{CustomerIdPrefixes.ORDER_SNAPSHOT}{order_id}",
            CustomerKind.ORDER_SNAPSHOT,
            order_id,
        )

    @classmethod
    def deleted_placeholder(cls, original_id: str) -> "CustomerId":
        """Id of the placeholder that replaces a deleted customer"""
        return cls(
            f"{CustomerIdPrefixes.DELETED_PLACEHOLDER}{original_id}",
            CustomerKind.DELETED_PLACEHOLDER,
            original_id,
        )

    @classmethod
    def new_regular(cls) -> "CustomerId":
        """Fresh id for a customer that only had a client-local identity"""
        return cls(str(uuid.uuid4()), CustomerKind.REGULAR)

    @property
    def is_temporary(self) -> bool:
        return self.kind is CustomerKind.TEMPORARY

    @property
    def is_order_snapshot(self) -> bool:
        return self.kind is CustomerKind.ORDER_SNAPSHOT

    @property
    def is_listable(self) -> bool:
        """Only regular customers show up in customer listings and search"""
        return self.kind is CustomerKind.REGULAR

    def __str__(self) -> str:
        return self.value
