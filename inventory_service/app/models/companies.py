# app/models/companies.py
from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    warehouses = relationship("Warehouse", back_populates="company")
    products = relationship("Product", back_populates="company")
