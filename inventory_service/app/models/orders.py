# app/models/orders.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from shared.core.database import Base
from shared.utils.enums import OrderStatus


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    warehouse_id = Column(
        Integer,
        ForeignKey("warehouses.id", ondelete="SET NULL"),
        nullable=True
    )
    status = Column(String(32), nullable=False,
                    default=OrderStatus.PENDING.value)
    order_date = Column(DateTime(timezone=True),
                        nullable=False, server_default=func.now(), index=True)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    quantity = Column(Integer, nullable=True)

    order = relationship("Order", back_populates="items")
