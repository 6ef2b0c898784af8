"""Invoice model for billing."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base

INVOICE_STATUSES = ("DRAFT", "SENT", "PAID", "OVERDUE")


def _new_public_id() -> str:
    return uuid.uuid4().hex


class Invoice(Base):
    __tablename__ = "invoices"
    # Numbers are per-tenant sequences; two owners may both have INV-0001.
    __table_args__ = (UniqueConstraint("owner_id", "invoice_number", name="uq_invoices_owner_number"),)

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    invoice_number = Column(String(64), nullable=False)
    public_id = Column(String(32), nullable=False, unique=True, index=True, default=_new_public_id)

    status = Column(String, default="DRAFT", nullable=False)
    issue_date = Column(DateTime(timezone=True), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False)
    tax_rate = Column(Numeric(5, 2), default=0, nullable=False)
    discount = Column(Numeric(10, 2), default=0, nullable=False)
    total_amount = Column(Numeric(12, 2), default=0, nullable=False)
    last_reminder_day = Column(Integer, nullable=True)
    last_reminder_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc), nullable=False)

    owner = relationship("User", back_populates="invoices")
    client = relationship("Client", back_populates="invoices")
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
    )
