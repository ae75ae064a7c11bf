# pylint: disable=too-many-instance-attributes
"""
Customer domain entity

Represents a customer that orders are recorded against. Blank strings mean
"no value" for the contact fields, which is what the two merge rules below
build on.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from pos_backend.domain.value_objects.customer_id import CustomerId
from pos_backend.infrastructure.utilities.helpers import is_blank, utc_now


def _prefer(primary: Optional[str], fallback: Optional[str]) -> Optional[str]:
    """``primary`` trimmed unless blank, else ``fallback`` untouched"""
    if is_blank(primary):
        return fallback
    return primary.strip()


@dataclass
class Customer:
    """
    Customer domain entity

    Identified by phone or license plate for deduplication; the name is
    display data only.
    """

    id: CustomerId
    name: str = ""
    phone: str = ""
    license_plate: str = ""
    address: Optional[str] = None
    last_purchase_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Initialize timestamps if not provided"""
        now = utc_now()
        if self.created_at is None:
            self.created_at = now
        if self.updated_at is None:
            self.updated_at = now

    def overlay(self, incoming: "Customer", now: Optional[datetime] = None) -> "Customer":
        """
        Merge an incoming submission onto this stored customer

        Incoming name/phone/plate win when not blank, the incoming address
        wins when present. Id, creation time and last purchase stay with the
        stored row.
        """
        return replace(
            self,
            name=_prefer(incoming.name, self.name),
            phone=_prefer(incoming.phone, self.phone),
            license_plate=_prefer(incoming.license_plate, self.license_plate),
            address=incoming.address if incoming.address is not None else self.address,
            updated_at=now or utc_now(),
        )

    def absorb(self, source: "Customer", now: Optional[datetime] = None) -> "Customer":
        """
        Merge another customer into this one (explicit merge target)

        This customer's values win unless blank; address and last purchase
        fall back to the source when missing here.
        """
        return replace(
            self,
            name=self.name if not is_blank(self.name) else source.name,
            phone=self.phone if not is_blank(self.phone) else source.phone,
            license_plate=(
                self.license_plate
                if not is_blank(self.license_plate)
                else source.license_plate
            ),
            address=self.address if self.address is not None else source.address,
            last_purchase_at=self.last_purchase_at or source.last_purchase_at,
            updated_at=now or utc_now(),
        )

    def with_id(self, customer_id: CustomerId) -> "Customer":
        """Copy of this customer under another id"""
        return replace(self, id=customer_id)

    def has_identity_keys(self) -> bool:
        """Whether phone or plate can be used to find an existing customer"""
        return not is_blank(self.phone) or not is_blank(self.license_plate)

    def __str__(self) -> str:
        return (
            f"Customer(id={self.id}, name={self.name}, "
            f"phone={self.phone}, plate={self.license_plate})"
        )
