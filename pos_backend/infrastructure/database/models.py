# pylint: disable=too-few-public-methods
"""
SQLAlchemy database models for the POS order backend

Ids are client-generated strings. ``orders.order_number`` carries the UNIQUE
constraint that backs order-number uniqueness.
"""

from datetime import UTC, date as date_type, datetime
from typing import List, Optional

from sqlalchemy import Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """
    Timestamp stored as naive UTC and read back as aware UTC

    SQLite keeps no offset, so values are normalized before they are written;
    naive input is taken to be UTC already.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(UTC).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.replace(tzinfo=UTC)


class Base(DeclarativeBase):
    """Declarative base for all tables"""


class Customer(Base):
    """Customer model"""
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(50), nullable=False, default="", index=True)
    license_plate: Mapped[str] = mapped_column(
        String(50), nullable=False, default="", index=True
    )
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_purchase_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    # Relationships
    orders: Mapped[List["Order"]] = relationship(
        "Order", back_populates="customer", passive_deletes=True
    )


class Category(Base):
    """Product category model"""
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    parent_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    path: Mapped[str] = mapped_column(Text, nullable=False, default="")
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)


class Product(Base):
    """Product model"""
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    category_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    stock: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    min_stock: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    track_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)


class Order(Base):
    """Order model"""
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    order_number: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)
    customer_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False
    )
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    remark: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    template_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    # Relationships
    customer: Mapped["Customer"] = relationship("Customer", back_populates="orders")
    order_items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderItem.sort_value",
    )


class OrderItem(Base):
    """Order item model; a copy of the product at sale time"""
    __tablename__ = "order_items"

    id: Mapped[str] = mapped_column(String(200), primary_key=True)
    order_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    discount_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    remark: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sort_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    order: Mapped["Order"] = relationship("Order", back_populates="order_items")


class AppSettings(Base):
    """Singleton settings row"""
    __tablename__ = "app_settings"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    order_number_format: Mapped[str] = mapped_column(String(200), nullable=False)
    order_number_prefix: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    order_number_digits: Mapped[int] = mapped_column(Integer, nullable=False, default=6)
    order_number_reset_daily: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    theme: Mapped[str] = mapped_column(String(20), nullable=False, default="light")
    font_size: Mapped[int] = mapped_column(Integer, nullable=False, default=14)
    date_format: Mapped[str] = mapped_column(String(50), nullable=False, default="YYYY-MM-DD")
    default_template_id: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    default_category_id: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    auto_backup: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    backup_interval: Mapped[int] = mapped_column(Integer, nullable=False, default=24)
    backup_keep_count: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    retain_days: Mapped[int] = mapped_column(Integer, nullable=False, default=90)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
