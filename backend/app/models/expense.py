"""Expense model for tracking business costs."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base

EXPENSE_CATEGORIES = (
    "OFFICE_SUPPLIES",
    "TRAVEL",
    "MEALS",
    "SOFTWARE",
    "MARKETING",
    "PROFESSIONAL_SERVICES",
    "UTILITIES",
    "RENT",
    "EQUIPMENT",
    "OTHER",
)


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    category = Column(String(32), nullable=False, default="OTHER")
    vendor = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    receipt_url = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="expenses")
