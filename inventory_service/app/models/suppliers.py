# app/models/suppliers.py
from sqlalchemy import (
    JSON, CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    # {"email": ..., "phone": ...}; key names vary between suppliers
    contact_info = Column(JSON().with_variant(JSONB, "postgresql"))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    product_links = relationship("SupplierProduct", back_populates="supplier")


class SupplierProduct(Base):
    __tablename__ = "supplier_products"
    __table_args__ = (
        UniqueConstraint("supplier_id", "product_id",
                         name="uq_supplier_products_supplier_product"),
        CheckConstraint("lead_time_days >= 0",
                        name="ck_supplier_products_lead_time"),
        CheckConstraint("min_order_quantity >= 0",
                        name="ck_supplier_products_min_order"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    supplier_id = Column(
        Integer,
        ForeignKey("suppliers.id", ondelete="CASCADE"),
        nullable=False
    )
    product_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    # Lower value wins; NULL ranks after every explicit priority
    priority = Column(Integer, nullable=True)
    lead_time_days = Column(Integer)
    min_order_quantity = Column(Integer)

    supplier = relationship("Supplier", back_populates="product_links")
    product = relationship("Product", back_populates="supplier_links")
