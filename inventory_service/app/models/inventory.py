# app/models/inventory.py
from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func)
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Inventory(Base):
    __tablename__ = "inventory"
    __table_args__ = (
        UniqueConstraint("product_id", "warehouse_id",
                         name="uq_inventory_product_warehouse"),
        CheckConstraint("quantity >= 0",
                        name="ck_inventory_quantity_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False
    )
    warehouse_id = Column(
        Integer,
        ForeignKey("warehouses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    product = relationship("Product", back_populates="stocks")
    warehouse = relationship("Warehouse", back_populates="stocks")
    audits = relationship(
        "InventoryAudit",
        back_populates="inventory",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class InventoryAudit(Base):
    __tablename__ = "inventory_audit"

    id = Column(Integer, primary_key=True, autoincrement=True)
    inventory_id = Column(
        Integer,
        ForeignKey("inventory.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    old_quantity = Column(Integer, nullable=False)
    new_quantity = Column(Integer, nullable=False)
    change_amount = Column(Integer, nullable=False)  # new - old
    reason = Column(String(255))
    changed_by = Column(Integer, nullable=True)
    changed_at = Column(DateTime(timezone=True),
                        nullable=False, server_default=func.now())

    inventory = relationship("Inventory", back_populates="audits")
