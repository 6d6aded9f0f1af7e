# app/models/products.py
from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String,
    UniqueConstraint, func)
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        # SKU is unique per company, not globally
        UniqueConstraint("company_id", "sku", name="uq_products_company_sku"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    sku = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    # NULL means "use the configured default threshold"
    reorder_threshold = Column(Integer, nullable=True)
    is_bundle = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    company = relationship("Company", back_populates="products")
    stocks = relationship(
        "Inventory",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    supplier_links = relationship(
        "SupplierProduct", back_populates="product", passive_deletes=True)


class ProductBundle(Base):
    __tablename__ = "product_bundles"
    __table_args__ = (
        CheckConstraint("bundle_id <> component_id",
                        name="ck_product_bundles_no_self_reference"),
        CheckConstraint("quantity > 0",
                        name="ck_product_bundles_quantity_positive"),
    )

    bundle_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True
    )
    component_id = Column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True
    )
    quantity = Column(Integer, nullable=False)
