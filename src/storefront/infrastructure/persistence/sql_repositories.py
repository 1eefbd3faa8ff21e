"""SQLAlchemy-backed implementations of the domain repositories.

All three share the unit of work's session, so their writes commit or
roll back together.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from storefront.domain.exceptions import InsufficientStock, ProductNotFound
from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.stock_ledger import StockLedger
from storefront.infrastructure.persistence.tables import (
    OrderItemRow,
    OrderRow,
    ProductRow,
)


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return _product_to_domain(row) if row is not None else None

    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        ids = list(product_ids)
        if not ids:
            return {}
        rows = self._session.scalars(
            select(ProductRow)
            .where(ProductRow.id.in_(ids))
            .execution_options(populate_existing=True)
        )
        return {row.id: _product_to_domain(row) for row in rows}

    def get_by_name(self, name: str) -> Product | None:
        row = self._session.scalars(
            select(ProductRow).where(func.lower(ProductRow.name) == name.lower())
        ).first()
        return _product_to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        rows = self._session.scalars(select(ProductRow).order_by(ProductRow.created_at))
        return [_product_to_domain(row) for row in rows]

    def list_categories(self) -> list[str]:
        return list(
            self._session.scalars(
                select(ProductRow.category).distinct().order_by(ProductRow.category)
            )
        )

    def count(self) -> int:
        return self._session.scalar(select(func.count()).select_from(ProductRow))

    def count_low_stock(self, threshold: int) -> int:
        return self._session.scalar(
            select(func.count())
            .select_from(ProductRow)
            .where(ProductRow.stock <= threshold)
        )

    def save(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        if row is None:
            row = ProductRow(id=product.id)
            self._session.add(row)
        row.name = product.name
        row.description = product.description
        row.price = product.price.amount
        row.currency = product.price.currency
        row.stock = product.stock
        row.category = product.category
        row.image_url = product.image_url
        row.is_active = product.is_active
        row.featured = product.featured
        row.created_at = product.created_at
        self._session.flush()


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, order_id: str) -> Order | None:
        row = self._session.get(
            OrderRow, order_id, options=[selectinload(OrderRow.items)]
        )
        return _order_to_domain(row) if row is not None else None

    def list_for_user(self, user_id: str | None) -> list[Order]:
        query = select(OrderRow).options(selectinload(OrderRow.items))
        if user_id is not None:
            query = query.where(OrderRow.user_id == user_id)
        rows = self._session.scalars(query.order_by(OrderRow.created_at.desc()))
        return [_order_to_domain(row) for row in rows]

    def count(self) -> int:
        return self._session.scalar(select(func.count()).select_from(OrderRow))

    def total_revenue(self) -> Money:
        total = self._session.scalar(select(func.sum(OrderRow.total_amount)))
        return Money.zero() if total is None else Money.of(total)

    def add(self, order: Order) -> None:
        row = OrderRow(
            id=order.id,
            user_id=order.user_id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            total_amount=order.total_amount.amount,
            currency=order.total_amount.currency,
            status=order.status.value,
            created_at=order.created_at,
            items=[
                OrderItemRow(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    currency=item.unit_price.currency,
                    position=position,
                )
                for position, item in enumerate(order.items)
            ],
        )
        self._session.add(row)
        self._session.flush()


class SqlStockLedger(StockLedger):
    """Stock counter on the ``products`` table.

    ``decrement`` is one conditional UPDATE: the ``stock >= :quantity``
    predicate is evaluated against the row as it stands when the write
    lands, so a concurrent checkout that drained the stock after our
    snapshot read makes the update match nothing instead of going
    negative.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def check_availability(self, product_id: str, quantity: int) -> Product:
        row = self._session.scalars(
            select(ProductRow)
            .where(ProductRow.id == product_id)
            .execution_options(populate_existing=True)
        ).first()
        if row is None:
            raise ProductNotFound(product_id)
        return _product_to_domain(row)

    def decrement(self, product_id: str, quantity: int) -> None:
        result = self._session.execute(
            update(ProductRow)
            .where(ProductRow.id == product_id, ProductRow.stock >= quantity)
            .values(stock=ProductRow.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return
        product = self.check_availability(product_id, quantity)
        raise InsufficientStock(
            product_id=product.id,
            product_name=product.name,
            requested=quantity,
            available=product.stock,
        )


# --- Serialization --------------------------------------------------------


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _product_to_domain(row: ProductRow) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        description=row.description,
        price=Money(row.price, row.currency),
        stock=row.stock,
        category=row.category,
        image_url=row.image_url,
        is_active=row.is_active,
        featured=row.featured,
        created_at=_aware(row.created_at),
    )


def _order_to_domain(row: OrderRow) -> Order:
    items = tuple(
        OrderItem(
            id=i.id,
            order_id=row.id,
            product_id=i.product_id,
            product_name=i.product_name,
            quantity=Quantity(i.quantity),
            unit_price=Money(i.unit_price, i.currency),
        )
        for i in row.items
    )
    return Order(
        id=row.id,
        user_id=row.user_id,
        customer_name=row.customer_name,
        customer_email=row.customer_email,
        items=items,
        total_amount=Money(row.total_amount, row.currency),
        status=OrderStatus(row.status),
        created_at=_aware(row.created_at),
    )
