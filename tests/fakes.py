"""In-memory fakes for testing.

These implement the same abstract interfaces as the SQL repositories
but keep everything in dicts. No database, no network.

FakeStore is the "committed" state.  A FakeUnitOfWork reads copies of
it and stages its writes; ``commit()`` applies them under the store's
lock, re-checking every stock decrement against the latest committed
stock, so two units racing for the same product behave like two
database transactions would.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from dataclasses import replace

from storefront.application.dto import Receipt
from storefront.application.notifications import ReceiptNotifier
from storefront.application.ports import MailDispatcher, MailMessage
from storefront.domain.exceptions import (
    InsufficientStock,
    NotificationFailure,
    ProductNotFound,
)
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.stock_ledger import StockLedger
from storefront.domain.repository.unit_of_work import UnitOfWork


class FakeStore:

    def __init__(self, products: list[Product] | None = None) -> None:
        self.products: dict[str, Product] = {p.id: p for p in products or []}
        self.orders: dict[str, Order] = {}
        self.lock = threading.Lock()
        self.product_reads = 0
        self.units_opened = 0
        self.commits = 0
        self.rollbacks = 0

    def stock_of(self, product_id: str) -> int:
        return self.products[product_id].stock

    def uow_factory(self):
        return lambda: FakeUnitOfWork(self)


class FakeProductRepository(ProductRepository):

    def __init__(self, store: FakeStore, staged: dict[str, Product]) -> None:
        self._store = store
        self._staged = staged

    def _read(self, product_id: str) -> Product | None:
        self._store.product_reads += 1
        if product_id in self._staged:
            return replace(self._staged[product_id])
        with self._store.lock:
            product = self._store.products.get(product_id)
        return replace(product) if product is not None else None

    def get_by_id(self, product_id: str) -> Product | None:
        return self._read(product_id)

    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        found = {}
        for product_id in product_ids:
            product = self._read(product_id)
            if product is not None:
                found[product_id] = product
        return found

    def get_by_name(self, name: str) -> Product | None:
        for p in self.list_all():
            if p.name.lower() == name.lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        with self._store.lock:
            ids = list(self._store.products)
        ids += [pid for pid in self._staged if pid not in ids]
        return [p for p in (self._read(pid) for pid in ids) if p is not None]

    def list_categories(self) -> list[str]:
        return sorted({p.category for p in self.list_all()})

    def count(self) -> int:
        return len(self.list_all())

    def count_low_stock(self, threshold: int) -> int:
        return sum(1 for p in self.list_all() if p.stock <= threshold)

    def save(self, product: Product) -> None:
        self._staged[product.id] = replace(product)


class FakeOrderRepository(OrderRepository):

    def __init__(self, store: FakeStore, staged: list[Order]) -> None:
        self._store = store
        self._staged = staged

    def get_by_id(self, order_id: str) -> Order | None:
        with self._store.lock:
            return self._store.orders.get(order_id)

    def list_for_user(self, user_id: str | None) -> list[Order]:
        with self._store.lock:
            orders = list(self._store.orders.values())
        if user_id is not None:
            orders = [o for o in orders if o.user_id == user_id]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def count(self) -> int:
        with self._store.lock:
            return len(self._store.orders)

    def total_revenue(self) -> Money:
        total = Money.zero()
        for order in self.list_for_user(None):
            total = total + order.total_amount
        return total

    def add(self, order: Order) -> None:
        self._staged.append(order)


class FakeStockLedger(StockLedger):

    def __init__(self, store: FakeStore, staged: dict[str, int]) -> None:
        self._store = store
        self._staged = staged

    def check_availability(self, product_id: str, quantity: int) -> Product:
        with self._store.lock:
            product = self._store.products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return replace(product)

    def decrement(self, product_id: str, quantity: int) -> None:
        product = self.check_availability(product_id, quantity)
        already = self._staged.get(product_id, 0)
        if product.stock - already < quantity:
            raise InsufficientStock(
                product.id, product.name, quantity, product.stock - already
            )
        self._staged[product_id] = already + quantity


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, store: FakeStore) -> None:
        self._store = store
        self._products: dict[str, Product] = {}
        self._orders: list[Order] = []
        self._decrements: dict[str, int] = {}
        self.products = FakeProductRepository(store, self._products)
        self.orders = FakeOrderRepository(store, self._orders)
        self.stock = FakeStockLedger(store, self._decrements)
        self.committed = False

    def __enter__(self) -> FakeUnitOfWork:
        self._store.units_opened += 1
        return self

    def commit(self) -> None:
        with self._store.lock:
            # Conditional decrement against the latest committed stock.
            for product_id, quantity in self._decrements.items():
                current = self._store.products[product_id]
                if current.stock < quantity:
                    raise InsufficientStock(
                        current.id, current.name, quantity, current.stock
                    )
            for product in self._products.values():
                self._store.products[product.id] = product
            for product_id, quantity in self._decrements.items():
                current = self._store.products[product_id]
                self._store.products[product_id] = replace(
                    current, stock=current.stock - quantity
                )
            for order in self._orders:
                self._store.orders[order.id] = order
            self._store.commits += 1
        self._clear()
        self.committed = True

    def rollback(self) -> None:
        if self._products or self._orders or self._decrements:
            self._store.rollbacks += 1
        self._clear()

    def _clear(self) -> None:
        self._products.clear()
        self._orders.clear()
        self._decrements.clear()


# --- Notification fakes ---------------------------------------------------


class RecordingNotifier(ReceiptNotifier):

    def __init__(self) -> None:
        self.receipts: list[Receipt] = []

    def notify(self, receipt: Receipt) -> None:
        self.receipts.append(receipt)


class ExplodingNotifier(ReceiptNotifier):

    def notify(self, receipt: Receipt) -> None:
        raise RuntimeError("queue is down")


class FakeMailDispatcher(MailDispatcher):

    def __init__(self) -> None:
        self.sent: list[MailMessage] = []

    def send(self, message: MailMessage) -> None:
        self.sent.append(message)


class FailingMailDispatcher(MailDispatcher):

    def __init__(self, error: Exception | None = None) -> None:
        self._error = error or NotificationFailure("mail provider unreachable")
        self.attempts = 0

    def send(self, message: MailMessage) -> None:
        self.attempts += 1
        raise self._error


# --- Builders -------------------------------------------------------------


def make_product(
    product_id: str = "p1",
    name: str = "Titan Whey Protein",
    price: str = "10.00",
    stock: int = 5,
    category: str = "Protein",
    is_active: bool = True,
    featured: bool = False,
) -> Product:
    return Product(
        id=product_id,
        name=name,
        description=f"{name} description",
        price=Money.of(price),
        stock=stock,
        category=category,
        image_url=f"https://img.example/{product_id}.jpg",
        is_active=is_active,
        featured=featured,
    )
