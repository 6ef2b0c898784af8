"""Recurring invoice template model."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base

WEEKLY = "WEEKLY"
MONTHLY = "MONTHLY"
FREQUENCIES = (WEEKLY, MONTHLY)


class InvoiceTemplate(Base):
    __tablename__ = "invoice_templates"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    frequency = Column(String(16), nullable=False)
    interval = Column(Integer, nullable=False, default=1)
    start_at = Column(DateTime(timezone=True), nullable=False)
    next_due_at = Column(DateTime(timezone=True), nullable=False, index=True)
    tax_rate = Column(Numeric(5, 2), nullable=False, default=0)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="invoice_templates")
    client = relationship("Client", back_populates="invoice_templates")
    line_items = relationship(
        "LineItemTemplate",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="LineItemTemplate.position",
    )
