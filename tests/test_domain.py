"""
Tests for domain entities and value objects
"""

from datetime import UTC, datetime

import pytest

from pos_backend.domain.entities.customer_entity import Customer
from pos_backend.domain.entities.order_entity import OrderItem
from pos_backend.domain.entities.product_entity import Product
from pos_backend.domain.entities.settings_entity import AppSettings
from pos_backend.domain.value_objects.customer_id import CustomerId, CustomerKind
from pos_backend.domain.value_objects.order_number import (
    OrderNumberPattern,
    SequenceToken,
    next_sequence,
)


class TestCustomerId:
    """Test customer id decoding"""

    @pytest.mark.parametrize(
        "raw,kind,origin",
        [
            ("c-42", CustomerKind.REGULAR, None),
            ("temp_1700000000", CustomerKind.TEMPORARY, "1700000000"),
            ("order_customer_o1", CustomerKind.ORDER_SNAPSHOT, "o1"),
            ("deleted_c-42", CustomerKind.DELETED_PLACEHOLDER, "c-42"),
        ],
    )
    def test_parse_decodes_kind(self, raw, kind, origin):
        """Test the prefix decides the identity class"""
        customer_id = CustomerId.parse(raw)
        assert customer_id.value == raw
        assert customer_id.kind is kind
        assert customer_id.origin == origin

    def test_builders(self):
        """Test snapshot and placeholder ids carry their origin"""
        snapshot = CustomerId.order_snapshot("o9")
        placeholder = CustomerId.deleted_placeholder("c1")

        assert snapshot.value == "order_customer_o9"
        assert snapshot.is_order_snapshot
        assert placeholder.value == "deleted_c1"
        assert placeholder.kind is CustomerKind.DELETED_PLACEHOLDER

    def test_new_regular_is_unique(self):
        """Test fresh regular ids differ"""
        first, second = CustomerId.new_regular(), CustomerId.new_regular()
        assert first != second
        assert first.is_listable

    def test_equality_ignores_kind(self):
        """Test ids compare by value only"""
        assert CustomerId("temp_1") == CustomerId.parse("temp_1")

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_blank_id_rejected(self, raw):
        """Test blank ids are invalid"""
        with pytest.raises(ValueError):
            CustomerId.parse(raw)

    def test_only_regular_ids_are_listable(self):
        """Test listing eligibility"""
        assert CustomerId.parse("c1").is_listable
        assert not CustomerId.parse("temp_1").is_listable
        assert not CustomerId.parse("order_customer_o1").is_listable
        assert not CustomerId.parse("deleted_c1").is_listable


class TestCustomerOverlay:
    """Test merging an incoming submission onto a stored customer"""

    @pytest.fixture
    def stored(self):
        return Customer(
            id=CustomerId("c1"),
            name="Old",
            phone="138",
            license_plate="ABC-1",
            address="Main St",
            last_purchase_at=datetime(2023, 12, 1, tzinfo=UTC),
            created_at=datetime(2023, 1, 1, tzinfo=UTC),
        )

    def test_blank_incoming_name_keeps_stored(self, stored):
        """Test blank values never erase stored ones"""
        incoming = Customer(id=CustomerId("temp_1"), name="  ", phone="138")
        merged = stored.overlay(incoming)

        assert merged.name == "Old"
        assert merged.license_plate == "ABC-1"
        assert merged.id == CustomerId("c1")

    def test_non_blank_incoming_wins_trimmed(self, stored):
        """Test incoming values win and are trimmed"""
        incoming = Customer(id=CustomerId("x"), name="  New  ", phone="138 ")
        merged = stored.overlay(incoming)

        assert merged.name == "New"
        assert merged.phone == "138"

    def test_address_present_wins(self, stored):
        """Test address uses incoming when present"""
        assert stored.overlay(Customer(id=CustomerId("x"), address="Elm")).address == "Elm"
        assert stored.overlay(Customer(id=CustomerId("x"))).address == "Main St"

    def test_keeps_history_fields(self, stored):
        """Test creation and last purchase stay with the stored row"""
        now = datetime(2024, 1, 1, tzinfo=UTC)
        merged = stored.overlay(Customer(id=CustomerId("x"), name="New"), now)

        assert merged.created_at == stored.created_at
        assert merged.last_purchase_at == stored.last_purchase_at
        assert merged.updated_at == now


class TestCustomerAbsorb:
    """Test explicit merge of two customers"""

    def test_target_wins_unless_blank(self):
        """Test target values are kept, blanks filled from source"""
        target = Customer(id=CustomerId("b"), name="Bob", phone="")
        source = Customer(
            id=CustomerId("a"),
            name="Alice",
            phone="555",
            license_plate="P-1",
            address="Elm",
            last_purchase_at=datetime(2023, 5, 1, tzinfo=UTC),
        )

        merged = target.absorb(source)

        assert merged.id == CustomerId("b")
        assert merged.name == "Bob"
        assert merged.phone == "555"
        assert merged.license_plate == "P-1"
        assert merged.address == "Elm"
        assert merged.last_purchase_at == source.last_purchase_at
        assert merged.created_at == target.created_at

    def test_has_identity_keys(self):
        """Test phone or plate make a customer matchable"""
        assert Customer(id=CustomerId("a"), phone="1").has_identity_keys()
        assert Customer(id=CustomerId("a"), license_plate="X").has_identity_keys()
        assert not Customer(id=CustomerId("a"), name="Only name").has_identity_keys()


class TestOrderNumberPattern:
    """Test order number pattern expansion"""

    NOW = datetime(2024, 3, 7, 9, 30, tzinfo=UTC)

    def test_expand_date_tokens(self):
        """Test every date token"""
        pattern = OrderNumberPattern("{YYYY}|{YY}|{MM}|{DD}|{M}|{D}")
        assert pattern.expand_dates(self.NOW) == "2024|24|03|07|3|7"

    def test_expand_prefix(self):
        """Test the prefix token"""
        pattern = OrderNumberPattern("{PREFIX}-{YYYY}", prefix="POS")
        assert pattern.expand_dates(self.NOW) == "POS-2024"

    def test_sequence_token_with_width(self):
        """Test explicit width"""
        token = OrderNumberPattern.find_sequence_token("20240307_{SEQ:4}", 6)
        assert token == SequenceToken(text="{SEQ:4}", width=4)
        assert token.render(7) == "0007"

    def test_sequence_token_default_width(self):
        """Test the configured digit count is used without a width"""
        token = OrderNumberPattern.find_sequence_token("A{SEQ}", 3)
        assert token.width == 3

    def test_no_sequence_token(self):
        assert OrderNumberPattern.find_sequence_token("{YYYY}", 6) is None


class TestNextSequence:
    """Test continuing the counter from the last order number"""

    @pytest.mark.parametrize(
        "last,expected",
        [
            (None, 1),
            ("", 1),
            ("ORDER", 1),
            ("20240101_000005", 6),
            ("A12B034", 35),
        ],
    )
    def test_next_sequence(self, last, expected):
        assert next_sequence(last) == expected


class TestOrderAndProduct:
    """Test order line and product helpers"""

    def test_line_total_uses_discount(self):
        """Test discount price replaces the list price"""
        item = OrderItem("p1", "Widget", "pcs", price=10.0, quantity=3, discount_price=8.0)
        assert item.line_total == 24.0

    def test_stock_tracking(self):
        """Test stock is only tracked with a known level"""
        assert Product("p1", "A", "pcs", 1.0, stock=5, track_stock=True).is_stock_tracked()
        assert not Product("p1", "A", "pcs", 1.0, stock=None, track_stock=True).is_stock_tracked()
        assert not Product("p1", "A", "pcs", 1.0, stock=5, track_stock=False).is_stock_tracked()

    def test_below_minimum(self):
        product = Product("p1", "A", "pcs", 1.0, stock=1, min_stock=2, track_stock=True)
        assert product.is_below_minimum()

    def test_order_movements(self, make_order, make_item):
        """Test stock movements follow line order"""
        order = make_order(items=[make_item("p1", 2), make_item(None, 1), make_item("p2", 0.5)])
        assert order.stock_movements() == [("p1", 2), (None, 1), ("p2", 0.5)]

    def test_assign_customer_repoints_snapshot(self, make_order):
        """Test the embedded customer follows the order's customer id"""
        order = make_order()
        order.assign_customer(CustomerId("c9"))
        assert order.customer_id == CustomerId("c9")
        assert order.customer.id == CustomerId("c9")

    def test_needs_order_number(self, make_order):
        assert make_order(order_number="  ").needs_order_number()
        assert not make_order(order_number="X1").needs_order_number()


class TestAppSettings:
    """Test settings defaults"""

    def test_defaults(self):
        settings = AppSettings.defaults()
        assert settings.id == "settings"
        assert settings.order_number_format == "{YYYY}{MM}{DD}_{SEQ:6}"
        assert settings.order_number_digits == 6
        assert settings.order_number_reset_daily is True
        assert settings.order_number_pattern().value == settings.order_number_format
