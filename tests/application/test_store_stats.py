"""Tests for the admin dashboard figures."""

import pytest

from storefront.application.checkout import CheckoutHandler
from storefront.application.store_stats import ShowStoreStatsHandler
from storefront.domain.exceptions import AdminRequired, Unauthorized
from storefront.domain.model.checkout import CheckoutLine, CheckoutRequest
from storefront.domain.model.identity import Identity
from storefront.infrastructure.identity import StaticIdentityProvider
from tests.fakes import FakeStore, RecordingNotifier, make_product

ADMIN = StaticIdentityProvider(Identity("root", is_admin=True))
CUSTOMER = StaticIdentityProvider(Identity("u1", email_verified=True))


def _buy(store: FakeStore, *items: tuple[str, int]) -> None:
    result = CheckoutHandler(CUSTOMER, store.uow_factory(), RecordingNotifier()).handle(
        CheckoutRequest(
            tuple(CheckoutLine(pid, qty) for pid, qty in items), "Alice", "alice@example.com"
        )
    )
    assert result.success


class TestStoreStats:

    def test_empty_store(self):
        stats = ShowStoreStatsHandler(ADMIN, FakeStore().uow_factory()).handle()
        assert stats.total_products == 0
        assert stats.total_orders == 0
        assert stats.total_revenue == "$0.00"
        assert stats.low_stock_count == 0

    def test_totals_after_sales(self):
        store = FakeStore(
            [
                make_product("p1", name="Whey", price="49.99", stock=12),
                make_product("p2", name="Creatine", price="29.99", stock=50),
                make_product("p3", name="Old Formula", stock=0, is_active=False),
            ]
        )
        _buy(store, ("p1", 2))
        _buy(store, ("p2", 1), ("p1", 1))

        stats = ShowStoreStatsHandler(ADMIN, store.uow_factory()).handle()

        assert stats.total_products == 3
        assert stats.total_orders == 2
        assert stats.total_revenue == "$179.96"
        # Whey dropped to 9; the archived product counts too.
        assert stats.low_stock_count == 2

    def test_threshold_is_inclusive(self):
        store = FakeStore([make_product("p1", stock=10), make_product("p2", name="B", stock=11)])
        assert ShowStoreStatsHandler(ADMIN, store.uow_factory()).handle().low_stock_count == 1

    def test_customer_refused(self):
        with pytest.raises(AdminRequired):
            ShowStoreStatsHandler(CUSTOMER, FakeStore().uow_factory()).handle()

    def test_anonymous_refused(self):
        with pytest.raises(Unauthorized):
            ShowStoreStatsHandler(StaticIdentityProvider(None), FakeStore().uow_factory()).handle()
