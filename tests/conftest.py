"""
Test configuration and fixtures for the POS order backend
"""

import os
from datetime import UTC, date, datetime, timedelta
from unittest.mock import patch

import pytest

from pos_backend.domain.entities.customer_entity import Customer
from pos_backend.domain.entities.order_entity import Order, OrderItem
from pos_backend.domain.entities.product_entity import Product
from pos_backend.domain.value_objects.customer_id import CustomerId
from pos_backend.infrastructure.configuration.config import Settings, reset_config
from pos_backend.infrastructure.container.dependency_injection import (
    DependencyContainer,
)
from pos_backend.infrastructure.database.operations import DatabaseManager
from pos_backend.infrastructure.repositories import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyCustomerRepository,
    SQLAlchemyOrderRepository,
    SQLAlchemyProductRepository,
    SQLAlchemySettingsRepository,
)

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)
TODAY = FIXED_NOW.date()


@pytest.fixture(autouse=True)
def mock_env():
    """Mock environment variables for testing"""
    test_env = {
        "DATABASE_URL": "sqlite:///:memory:",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
        "LOG_TO_FILE": "false",
    }

    with patch.dict(os.environ, test_env, clear=True):
        reset_config()
        yield test_env
        reset_config()


@pytest.fixture
def test_settings():
    """Settings for an in-memory database without file logging"""
    return Settings(
        _env_file=None,
        database_url="sqlite:///:memory:",
        environment="test",
        log_to_file=False,
    )


@pytest.fixture
def db_manager(test_settings):
    """Fresh in-memory database with all tables"""
    manager = DatabaseManager(test_settings)
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def clock():
    """Clock frozen at FIXED_NOW"""
    return lambda: FIXED_NOW


@pytest.fixture
def customer_repository(db_manager):
    return SQLAlchemyCustomerRepository(db_manager)


@pytest.fixture
def order_repository(db_manager):
    return SQLAlchemyOrderRepository(db_manager)


@pytest.fixture
def product_repository(db_manager):
    return SQLAlchemyProductRepository(db_manager)


@pytest.fixture
def category_repository(db_manager):
    return SQLAlchemyCategoryRepository(db_manager)


@pytest.fixture
def settings_repository(db_manager):
    return SQLAlchemySettingsRepository(db_manager)


@pytest.fixture
def container(db_manager, clock):
    """Dependency container over the in-memory database"""
    return DependencyContainer(db_manager, clock=clock)


@pytest.fixture
def make_customer():
    """Factory for customer entities"""

    def _make(customer_id="c1", name="", phone="", license_plate="", **kwargs):
        return Customer(
            id=CustomerId.parse(customer_id),
            name=name,
            phone=phone,
            license_plate=license_plate,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_order(make_customer):
    """
    Factory for order entities

    Creation times step forward by one second per order so "most recent"
    lookups are deterministic.
    """
    counter = {"n": 0}

    def _make(
        order_id="o1",
        customer=None,
        items=None,
        order_number="",
        order_date: date = TODAY,
        **kwargs,
    ):
        counter["n"] += 1
        customer = customer or make_customer("c1", name="Walk-in", phone="100")
        kwargs.setdefault("created_at", FIXED_NOW + timedelta(seconds=counter["n"]))
        return Order(
            id=order_id,
            order_number=order_number,
            date=order_date,
            customer_id=customer.id,
            customer=customer,
            items=items if items is not None else [],
            **kwargs,
        )

    return _make


@pytest.fixture
def make_item():
    """Factory for order items"""

    def _make(product_id="p1", quantity=1.0, price=10.0, name="Widget", **kwargs):
        return OrderItem(
            product_id=product_id,
            name=name,
            unit="pcs",
            price=price,
            quantity=quantity,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_product():
    """Factory for products"""

    def _make(product_id="p1", stock=None, track_stock=False, **kwargs):
        kwargs.setdefault("name", f"Product {product_id}")
        kwargs.setdefault("unit", "pcs")
        kwargs.setdefault("price", 10.0)
        return Product(id=product_id, stock=stock, track_stock=track_stock, **kwargs)

    return _make
