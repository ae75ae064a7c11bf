"""
Tests for application use cases
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from pos_backend.application.dtos.order_dtos import IngestionStage
from pos_backend.application.use_cases.order_ingestion_use_case import (
    OrderIngestionUseCase,
)
from pos_backend.domain.entities.product_entity import Category
from pos_backend.domain.entities.settings_entity import AppSettings
from pos_backend.domain.value_objects.customer_id import CustomerId, CustomerKind
from pos_backend.infrastructure.utilities.exceptions import (
    CustomerNotFoundError,
    DuplicateOrderNumberError,
    ProductNotFoundError,
    ValidationError,
)

from .conftest import FIXED_NOW, TODAY


async def _store_order(container, order):
    """Persist an order directly, bypassing the pipeline"""
    if await container.get_customer_repository().find_by_id(order.customer_id) is None:
        await container.get_customer_repository().insert(order.customer)
    await container.get_order_repository().insert(order)


class TestOrderNumberGenerator:
    """Test order number generation"""

    @pytest.fixture
    def generator(self, container):
        return container.get_order_number_generator()

    @pytest.mark.asyncio
    async def test_first_number_of_the_day(self, generator):
        """Test two calls without orders today both start at 1"""
        settings = AppSettings.defaults()

        first = await generator.generate(settings, TODAY)
        second = await generator.generate(settings, TODAY)

        assert first == "20240101_000001"
        assert second == "20240101_000001"

    @pytest.mark.asyncio
    async def test_continues_from_last_number_today(self, container, generator, make_order):
        """Test the counter continues from today's last order"""
        await _store_order(container, make_order("o1", order_number="20240101_000005"))

        number = await generator.generate(AppSettings.defaults(), TODAY)

        assert number == "20240101_000006"

    @pytest.mark.asyncio
    async def test_legacy_number_uses_last_digit_run(self, container, generator, make_order):
        """Test digits before the counter are ignored"""
        await _store_order(container, make_order("o1", order_number="A12B034"))
        settings = AppSettings(order_number_format="A{SEQ:3}")

        assert await generator.generate(settings, TODAY) == "A035"

    @pytest.mark.asyncio
    async def test_daily_reset_window(self, container, generator, make_order):
        """Test yesterday's orders only count when the daily reset is off"""
        await _store_order(
            container,
            make_order(
                "o1",
                order_number="20231231_000009",
                order_date=TODAY - timedelta(days=1),
            ),
        )

        daily = await generator.generate(AppSettings(order_number_reset_daily=True), TODAY)
        running = await generator.generate(
            AppSettings(order_number_reset_daily=False), TODAY
        )

        assert daily == "20240101_000001"
        assert running == "20240101_000010"

    @pytest.mark.asyncio
    async def test_pattern_without_sequence(self, generator):
        settings = AppSettings(order_number_format="{PREFIX}{YY}{M}{D}", order_number_prefix="S")
        assert await generator.generate(settings, TODAY) == "S2411"

    @pytest.mark.asyncio
    async def test_every_occurrence_of_the_token_is_filled(self, generator):
        settings = AppSettings(order_number_format="{SEQ:2}-{SEQ:2}")
        assert await generator.generate(settings, TODAY) == "01-01"

    @pytest.mark.asyncio
    async def test_default_width_from_settings(self, generator):
        settings = AppSettings(order_number_format="N{SEQ}", order_number_digits=4)
        assert await generator.generate(settings, TODAY) == "N0001"

    @pytest.mark.asyncio
    async def test_dates_come_from_the_clock(self, generator):
        """Test the business date does not feed the date tokens"""
        number = await generator.generate(
            AppSettings.defaults(), TODAY + timedelta(days=30)
        )
        assert number.startswith("20240101")


class TestCustomerIdentityResolver:
    """Test customer identity resolution"""

    @pytest.fixture
    def resolver(self, container):
        return container.get_identity_resolver()

    @pytest.mark.asyncio
    async def test_blank_name_keeps_stored_name(self, container, resolver, make_customer):
        """Test a phone match keeps the stored name when none is sent"""
        await container.get_customer_repository().insert(
            make_customer("c-old", name="Old", phone="138")
        )

        resolved = await resolver.resolve(make_customer("c-new", name="", phone="138"), "o1")

        assert resolved.customer_id == CustomerId("c-old")
        assert resolved.merged
        assert resolved.customer.name == "Old"
        assert await container.get_customer_repository().find_by_id(CustomerId("c-new")) is None

    @pytest.mark.asyncio
    async def test_non_blank_name_replaces_stored(self, container, resolver, make_customer):
        await container.get_customer_repository().insert(
            make_customer("c-old", name="Old", phone="138")
        )

        resolved = await resolver.resolve(make_customer("c-new", name="New", phone="138"), "o1")

        stored = await container.get_customer_repository().find_by_id(CustomerId("c-old"))
        assert resolved.customer_id == CustomerId("c-old")
        assert stored.name == "New"

    @pytest.mark.asyncio
    async def test_temporary_customer_becomes_order_snapshot(
        self, container, resolver, make_customer
    ):
        """Test temp ids are never matched and never listed"""
        await container.get_customer_repository().insert(
            make_customer("c1", name="Regular", phone="138")
        )

        resolved = await resolver.resolve(make_customer("temp_99", name="Guest", phone="138"), "o7")

        assert resolved.customer_id == CustomerId("order_customer_o7")
        assert resolved.customer_id.kind is CustomerKind.ORDER_SNAPSHOT
        assert resolved.created and not resolved.merged
        listed = await container.get_customer_management_use_case().get_all_customers()
        assert [c.id.value for c in listed] == ["c1"]

    @pytest.mark.asyncio
    async def test_temporary_customer_needs_an_order(self, resolver, make_customer):
        with pytest.raises(ValidationError):
            await resolver.resolve(make_customer("temp_1"), None)

    @pytest.mark.asyncio
    async def test_unmatched_customer_is_inserted(self, container, resolver, make_customer):
        resolved = await resolver.resolve(make_customer("c9", name="Fresh", phone="777"), "o1")

        assert resolved.created
        assert resolved.customer_id == CustomerId("c9")
        assert await container.get_customer_repository().find_by_id(CustomerId("c9"))

    @pytest.mark.asyncio
    async def test_snapshot_ids_are_kept(self, container, resolver, make_customer):
        """Test a re-saved snapshot is not merged into a regular customer"""
        await container.get_customer_repository().insert(
            make_customer("c1", name="Regular", phone="138")
        )

        resolved = await resolver.resolve(
            make_customer("order_customer_o1", name="Guest", phone="138"), "o1"
        )

        assert resolved.customer_id == CustomerId("order_customer_o1")
        assert not resolved.merged


class TestOrderIngestionUseCase:
    """Test the order ingestion pipeline"""

    @pytest.fixture
    def ingestion(self, container):
        return container.get_order_ingestion_use_case()

    @pytest.mark.asyncio
    async def test_new_order_runs_every_stage(
        self, container, ingestion, make_order, make_item, make_product, make_customer
    ):
        """Test numbering, persistence, stock and last purchase"""
        products = container.get_product_repository()
        await products.insert(make_product("p1", stock=5, track_stock=True))
        await products.insert(make_product("p2", stock=5, track_stock=False))
        order = make_order(
            "o1",
            customer=make_customer("c1", name="Ann", phone="138"),
            items=[make_item("p1", 2), make_item("p2", 2), make_item(None, 1)],
        )

        report = await ingestion.ingest(order)

        assert report.order_number == "20240101_000001"
        assert report.created
        assert report.stage is IngestionStage.DONE
        assert report.stock_adjusted == ["p1"]
        assert set(report.stage_durations_ms) == {
            "numbered",
            "customer_resolved",
            "persisted",
            "stock_adjusted",
            "customer_touched",
        }
        assert (await products.find_by_id("p1")).stock == 3
        assert (await products.find_by_id("p2")).stock == 5
        assert len(await container.get_order_repository().get_order_items("o1")) == 3
        customer = await container.get_customer_repository().find_by_id(CustomerId("c1"))
        assert customer.last_purchase_at == FIXED_NOW

    @pytest.mark.asyncio
    async def test_submit_keeps_client_number(self, ingestion, make_order):
        assert await ingestion.submit(make_order("o1", order_number="MY-7")) == "MY-7"

    @pytest.mark.asyncio
    async def test_matched_customer_repoints_order(
        self, container, ingestion, make_order, make_customer
    ):
        """Test the order ends up on the stored customer"""
        await container.get_customer_repository().insert(
            make_customer("c-old", name="Old", phone="138")
        )
        order = make_order("o1", customer=make_customer("c-new", name="", phone="138"))

        await ingestion.submit(order)

        stored = await container.get_order_repository().get_order_by_id("o1")
        assert stored.customer_id == CustomerId("c-old")
        assert order.customer.id == CustomerId("c-old")

    @pytest.mark.asyncio
    async def test_temporary_customer_is_not_touched(
        self, container, ingestion, make_order, make_customer
    ):
        """Test order snapshots do not get a last purchase stamp"""
        order = make_order("o1", customer=make_customer("temp_5", name="Guest"))

        await ingestion.submit(order)

        snapshot = await container.get_customer_repository().find_by_id(
            CustomerId("order_customer_o1")
        )
        assert order.customer_id == CustomerId("order_customer_o1")
        assert snapshot.last_purchase_at is None

    @pytest.mark.asyncio
    async def test_resubmit_updates_metadata_only(
        self, container, ingestion, make_order, make_item, make_product
    ):
        """Test the update path leaves items and stock alone"""
        products = container.get_product_repository()
        await products.insert(make_product("p1", stock=10, track_stock=True))
        order = make_order("o1", items=[make_item("p1", 4)])
        number = await ingestion.submit(order)

        order.remark = "edited"
        order.items = [make_item("p1", 9), make_item("p1", 1)]
        report = await ingestion.ingest(order)

        assert not report.created
        assert report.order_number == number
        assert (await products.find_by_id("p1")).stock == 6
        assert len(await container.get_order_repository().get_order_items("o1")) == 1
        stored = await container.get_order_repository().get_order_by_id("o1")
        assert stored.remark == "edited"

    @pytest.mark.asyncio
    async def test_duplicate_order_number_is_an_error(
        self, container, ingestion, make_order, make_item, make_product
    ):
        """Test a taken number fails without retry and without stock change"""
        products = container.get_product_repository()
        await products.insert(make_product("p1", stock=10, track_stock=True))
        await ingestion.submit(make_order("o1", order_number="SAME"))

        with pytest.raises(DuplicateOrderNumberError):
            await ingestion.submit(
                make_order("o2", order_number="SAME", items=[make_item("p1", 3)])
            )

        assert not await container.get_order_repository().exists("o2")
        assert (await products.find_by_id("p1")).stock == 10

    @pytest.mark.asyncio
    async def test_failed_stage_keeps_earlier_effects(self, container, clock, make_order):
        """Test a stock failure leaves the persisted order in place"""
        failing_ledger = AsyncMock()
        failing_ledger.deduct_batch.side_effect = RuntimeError("ledger down")
        ingestion = OrderIngestionUseCase(
            order_repository=container.get_order_repository(),
            customer_repository=container.get_customer_repository(),
            settings_repository=container.get_settings_repository(),
            identity_resolver=container.get_identity_resolver(),
            number_generator=container.get_order_number_generator(),
            stock_ledger=failing_ledger,
            clock=clock,
        )

        with pytest.raises(RuntimeError):
            await ingestion.submit(make_order("o1"))

        assert await container.get_order_repository().exists("o1")
        failing_ledger.deduct_batch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_uses_saved_settings(self, container, ingestion, make_order):
        await container.get_settings_use_case().save_settings(
            AppSettings(order_number_format="{PREFIX}{SEQ:3}", order_number_prefix="INV")
        )

        assert await ingestion.submit(make_order("o1")) == "INV001"
        assert await ingestion.submit(make_order("o2")) == "INV002"


class TestCustomerManagementUseCase:
    """Test customer maintenance commands"""

    @pytest.fixture
    def customers(self, container):
        return container.get_customer_management_use_case()

    @pytest.mark.asyncio
    async def test_merge_into_itself_fails(self, customers):
        with pytest.raises(ValidationError):
            await customers.merge_customers("x", "x")

    @pytest.mark.asyncio
    async def test_merge_missing_customer_fails(self, container, customers, make_customer):
        await container.get_customer_repository().insert(make_customer("b"))

        with pytest.raises(CustomerNotFoundError):
            await customers.merge_customers("a", "b")

    @pytest.mark.asyncio
    async def test_merge_moves_orders_and_removes_source(
        self, container, customers, make_customer, make_order
    ):
        """Test the source disappears and its orders follow the target"""
        source = make_customer("a", name="Alice", phone="555", address="Elm")
        target = make_customer("b", name="Bob")
        await container.get_customer_repository().insert(target)
        await _store_order(container, make_order("o1", source, order_number="N1"))
        await _store_order(container, make_order("o2", source, order_number="N2"))

        merged = await customers.merge_customers("a", "b")

        assert merged.name == "Bob"
        assert merged.phone == "555"
        assert merged.address == "Elm"
        with pytest.raises(CustomerNotFoundError):
            await customers.get_customer_by_id("a")
        orders = await container.get_order_repository().get_orders_by_customer(CustomerId("b"))
        assert {order.id for order in orders} == {"o1", "o2"}

    @pytest.mark.asyncio
    async def test_delete_relinks_orders_to_placeholder(
        self, container, customers, make_customer, make_order
    ):
        """Test order history survives the deletion"""
        customer = make_customer("c1", name="Ann", phone="138")
        for index in range(3):
            await _store_order(
                container, make_order(f"o{index}", customer, order_number=f"N{index}")
            )

        await customers.delete_customer("c1")

        orders = await container.get_order_repository().get_orders_by_customer(
            CustomerId("deleted_c1")
        )
        assert len(orders) == 3
        placeholder = await customers.get_customer_by_id("deleted_c1")
        assert placeholder.name == "Deleted customer (history retained)"
        assert placeholder.address == "Original customer ID: c1"
        assert placeholder.phone == "" and placeholder.license_plate == ""
        with pytest.raises(CustomerNotFoundError):
            await customers.get_customer_by_id("c1")
        assert await customers.get_all_customers() == []

    @pytest.mark.asyncio
    async def test_delete_missing_customer_is_harmless(self, customers):
        await customers.delete_customer("ghost")
        await customers.delete_customer("ghost")

    @pytest.mark.asyncio
    async def test_batch_delete(self, container, customers, make_customer):
        for customer_id in ("a", "b"):
            await container.get_customer_repository().insert(make_customer(customer_id))

        assert await customers.batch_delete_customers(["a", "b"]) == 2
        assert await customers.get_all_customers() == []

    @pytest.mark.asyncio
    async def test_save_temporary_customer_gets_regular_id(self, customers, make_customer):
        saved = await customers.save_customer(make_customer("temp_1", name="Walk-in"))

        assert saved.id.kind is CustomerKind.REGULAR
        assert saved.id != CustomerId("temp_1")
        assert [c.name for c in await customers.get_all_customers()] == ["Walk-in"]

    @pytest.mark.asyncio
    async def test_save_matches_by_plate(self, container, customers, make_customer):
        """Test an identity match updates the stored row"""
        await container.get_customer_repository().insert(
            make_customer("c1", name="Ann", license_plate="KA-1")
        )

        saved = await customers.save_customer(
            make_customer("temp_2", name="", phone="900", license_plate="KA-1")
        )

        assert saved.id == CustomerId("c1")
        assert saved.name == "Ann"
        assert saved.phone == "900"
        assert len(await customers.get_all_customers()) == 1

    @pytest.mark.asyncio
    async def test_save_updates_by_id(self, container, customers, make_customer):
        original = make_customer("c1", name="Ann", created_at=FIXED_NOW - timedelta(days=9))
        await container.get_customer_repository().insert(original)

        saved = await customers.save_customer(make_customer("c1", name="Anna"))

        assert saved.name == "Anna"
        assert saved.created_at == original.created_at

    @pytest.mark.asyncio
    async def test_search(self, container, customers, make_customer):
        await container.get_customer_repository().insert(make_customer("c1", name="Ann"))
        await container.get_customer_repository().insert(make_customer("temp_1", name="Ann"))

        assert [c.id.value for c in await customers.search_customers("An")] == ["c1"]


class TestOrderHistoryUseCase:
    """Test order listing"""

    @pytest.mark.asyncio
    async def test_list_orders_fills_customer_and_items(
        self, container, make_order, make_item, make_customer
    ):
        customer = make_customer("c1", name="Ann", phone="138")
        await _store_order(container, make_order("o1", customer, order_number="N1"))
        await _store_order(
            container,
            make_order("o2", customer, order_number="N2", items=[make_item("p1", 2)]),
        )

        orders = await container.get_order_history_use_case().list_orders()

        assert [order.id for order in orders] == ["o2", "o1"]
        assert orders[0].customer.name == "Ann"
        assert [item.quantity for item in orders[0].items] == [2]
        assert orders[1].items == []


class TestCatalogUseCases:
    """Test product, category and settings maintenance"""

    @pytest.fixture
    def catalog(self, container):
        return container.get_product_catalog_use_case()

    @pytest.mark.asyncio
    async def test_save_product_inserts_then_updates(self, catalog, make_product):
        await catalog.save_product(make_product("p1", price=1.0))
        await catalog.save_product(make_product("p1", price=2.0))

        assert (await catalog.get_product_by_id("p1")).price == 2.0
        assert len(await catalog.get_all_products()) == 1

    @pytest.mark.asyncio
    async def test_negative_price_rejected(self, catalog, make_product):
        with pytest.raises(ValidationError):
            await catalog.save_product(make_product("p1", price=-1.0))

    @pytest.mark.asyncio
    async def test_update_price_and_batch_delete(self, catalog, make_product):
        await catalog.save_product(make_product("p1"))
        await catalog.save_product(make_product("p2"))

        updated = await catalog.update_product_price("p1", 12.5)

        assert updated.price == 12.5
        assert await catalog.batch_delete_products(["p1", "p2", "p3"]) == 2
        with pytest.raises(ProductNotFoundError):
            await catalog.get_product_by_id("p1")

    @pytest.mark.asyncio
    async def test_categories(self, catalog):
        await catalog.save_categories_batch(
            [Category(id="c1", name="Food", sort_order=1), Category(id="c2", name="Drinks")]
        )
        await catalog.save_category(Category(id="c2", name="Beverages"))

        tree = await catalog.get_category_tree()

        assert [c.name for c in tree] == ["Beverages", "Food"]
        assert (await catalog.get_category_by_id("c1")).name == "Food"
        assert await catalog.delete_category("c1")

    @pytest.mark.asyncio
    async def test_settings_row_id_is_fixed(self, container):
        settings_use_case = container.get_settings_use_case()

        saved = await settings_use_case.save_settings(AppSettings(id="other", theme="dark"))

        stored = await settings_use_case.get_settings()
        assert saved.id == "settings"
        assert stored.theme == "dark"

    @pytest.mark.asyncio
    async def test_settings_digits_validated(self, container):
        with pytest.raises(ValidationError):
            await container.get_settings_use_case().save_settings(
                AppSettings(order_number_digits=0)
            )
