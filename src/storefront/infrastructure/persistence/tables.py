"""SQLAlchemy table mappings.

Rows are kept separate from the domain dataclasses; the repositories
translate between the two.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class ProductRow(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    id = Column(String(32), primary_key=True)
    name = Column(String(200), nullable=False, unique=True)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    stock = Column(Integer, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    image_url = Column(String(500), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)


class OrderRow(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True)
    # Plain string on purpose: orders outlive the user record.
    user_id = Column(String(64), nullable=False, index=True)
    customer_name = Column(String(200), nullable=False)
    customer_email = Column(String(320), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    status = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    items = relationship(
        "OrderItemRow",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemRow.position",
    )


class OrderItemRow(Base):
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )

    id = Column(String(32), primary_key=True)
    order_id = Column(String(32), ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String(32), ForeignKey("products.id"), nullable=False)
    product_name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    position = Column(Integer, nullable=False)

    order = relationship("OrderRow", back_populates="items")
