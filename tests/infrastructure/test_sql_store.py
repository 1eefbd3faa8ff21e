"""Tests for the SQLAlchemy persistence layer, against SQLite."""

import pytest

from storefront.application.checkout import CheckoutHandler
from storefront.domain.exceptions import InsufficientStock, PersistenceFailure
from storefront.domain.model.checkout import CheckoutLine, CheckoutRequest
from storefront.domain.model.identity import Identity
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.identity import StaticIdentityProvider
from storefront.infrastructure.persistence.database import (
    create_schema,
    make_engine,
    make_session_factory,
)
from storefront.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork
from storefront.infrastructure.seed import SAMPLE_CATALOG, seed_catalog
from tests.fakes import RecordingNotifier, make_product


def _uow_factory(url: str = "sqlite://"):
    engine = make_engine(url)
    create_schema(engine)
    session_factory = make_session_factory(engine)
    return lambda: SqlAlchemyUnitOfWork(session_factory)


def _stock(uow_factory, product_id: str) -> int:
    with uow_factory() as uow:
        return uow.products.get_by_id(product_id).stock


def _with_products(uow_factory, *products):
    with uow_factory() as uow:
        for product in products:
            uow.products.save(product)
        uow.commit()
    return uow_factory


class TestProductRepository:

    def test_round_trip(self):
        factory = _with_products(_uow_factory(), make_product("p1", price="49.99", stock=7, featured=True))

        with factory() as uow:
            product = uow.products.get_by_id("p1")

        assert product.price == Money.of("49.99")
        assert product.stock == 7
        assert product.featured is True
        assert product.created_at.tzinfo is not None

    def test_get_by_name_ignores_case(self):
        factory = _with_products(_uow_factory(), make_product("p1", name="Titan Creatine"))
        with factory() as uow:
            assert uow.products.get_by_name("titan CREATINE").id == "p1"

    def test_get_many_skips_unknown_ids(self):
        factory = _with_products(_uow_factory(), make_product("p1", name="A"), make_product("p2", name="B"))
        with factory() as uow:
            found = uow.products.get_many(["p2", "ghost", "p1"])
        assert set(found) == {"p1", "p2"}

    def test_uncommitted_changes_are_rolled_back(self):
        factory = _uow_factory()
        with factory() as uow:
            uow.products.save(make_product("p1"))

        with factory() as uow:
            assert uow.products.get_by_id("p1") is None

    def test_database_errors_surface_as_persistence_failure(self):
        factory = _with_products(_uow_factory(), make_product("p1", name="Same"))
        with pytest.raises(PersistenceFailure):
            with factory() as uow:
                uow.products.save(make_product("p2", name="Same"))

    def test_distinct_categories_include_archived(self):
        factory = _with_products(
            _uow_factory(),
            make_product("p1", name="Whey", category="Protein"),
            make_product("p2", name="Creatine", category="Creatine"),
            make_product("p3", name="Casein", category="Protein"),
            make_product("p4", name="Zinc", category="Vitamins", is_active=False),
        )
        with factory() as uow:
            assert uow.products.list_categories() == ["Creatine", "Protein", "Vitamins"]

    def test_counts(self):
        factory = _with_products(
            _uow_factory(),
            make_product("p1", name="Whey", stock=10),
            make_product("p2", name="Creatine", stock=11),
            make_product("p3", name="Casein", stock=0, is_active=False),
        )
        with factory() as uow:
            assert uow.products.count() == 3
            assert uow.products.count_low_stock(10) == 2


class TestStockLedger:

    def test_decrement_within_stock(self):
        factory = _with_products(_uow_factory(), make_product("p1", stock=5))
        with factory() as uow:
            uow.stock.decrement("p1", 5)
            uow.commit()
        assert _stock(factory, "p1") == 0

    def test_decrement_beyond_stock_is_refused(self):
        factory = _with_products(_uow_factory(), make_product("p1", name="Titan Whey", stock=5))
        with pytest.raises(InsufficientStock) as exc_info:
            with factory() as uow:
                uow.stock.decrement("p1", 6)

        assert exc_info.value.available == 5
        assert _stock(factory, "p1") == 5

    def test_decrement_sees_stock_drained_after_snapshot(self, tmp_path):
        factory = _with_products(
            _uow_factory(f"sqlite:///{tmp_path / 'store.db'}"), make_product("p1", stock=5)
        )

        with factory() as uow:
            snapshot = uow.products.get_many(["p1"])
            assert snapshot["p1"].stock == 5

            # Another checkout commits in between.
            with factory() as rival:
                rival.stock.decrement("p1", 4)
                rival.commit()

            with pytest.raises(InsufficientStock) as exc_info:
                uow.stock.decrement("p1", 3)

        assert exc_info.value.available == 1
        assert _stock(factory, "p1") == 1


class TestSqlCheckout:

    def _handler(self, factory):
        identity = StaticIdentityProvider(Identity("u1", email_verified=True))
        return CheckoutHandler(identity, factory, RecordingNotifier())

    def test_order_and_stock_commit_together(self):
        factory = _with_products(
            _uow_factory(),
            make_product("p1", name="Whey", price="10.00", stock=5),
            make_product("p2", name="Creatine", price="29.99", stock=10),
        )
        result = self._handler(factory).handle(
            CheckoutRequest(
                (CheckoutLine("p2", 1), CheckoutLine("p1", 3)), "Alice", "alice@example.com"
            )
        )

        assert result.success
        with factory() as uow:
            order = uow.orders.get_by_id(result.order_id)
        assert order.total_amount == Money.of("59.99")
        assert [i.product_name for i in order.items] == ["Creatine", "Whey"]
        assert _stock(factory, "p1") == 2
        assert _stock(factory, "p2") == 9

    def test_failed_line_rolls_back_every_write(self):
        factory = _with_products(
            _uow_factory(),
            make_product("p1", name="Whey", stock=5),
            make_product("p2", name="Creatine", stock=1),
        )
        result = self._handler(factory).handle(
            CheckoutRequest(
                (CheckoutLine("p1", 2), CheckoutLine("p2", 2)), "Alice", "alice@example.com"
            )
        )

        assert result.error_code == "insufficient_stock"
        assert _stock(factory, "p1") == 5
        assert _stock(factory, "p2") == 1
        with factory() as uow:
            assert uow.orders.list_for_user(None) == []

    def test_orders_listed_per_user(self):
        factory = _with_products(_uow_factory(), make_product("p1", stock=5))
        self._handler(factory).handle(
            CheckoutRequest((CheckoutLine("p1", 1),), "Alice", "alice@example.com")
        )
        with factory() as uow:
            assert len(uow.orders.list_for_user("u1")) == 1
            assert uow.orders.list_for_user("someone-else") == []

    def test_order_count_and_revenue(self):
        factory = _with_products(_uow_factory(), make_product("p1", price="10.00", stock=5))
        with factory() as uow:
            assert uow.orders.count() == 0
            assert uow.orders.total_revenue() == Money.zero()

        handler = self._handler(factory)
        handler.handle(CheckoutRequest((CheckoutLine("p1", 1),), "Alice", "alice@example.com"))
        handler.handle(CheckoutRequest((CheckoutLine("p1", 2),), "Alice", "alice@example.com"))

        with factory() as uow:
            assert uow.orders.count() == 2
            assert uow.orders.total_revenue() == Money.of("30.00")


class TestSeed:

    def test_seed_is_idempotent(self):
        factory = _uow_factory()
        assert seed_catalog(factory) == len(SAMPLE_CATALOG)
        assert seed_catalog(factory) == 0
        with factory() as uow:
            assert len(uow.products.list_all()) == len(SAMPLE_CATALOG)
