"""Per-tenant billing defaults."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base

DEFAULT_TAX_RATE = 10
DEFAULT_DISCOUNT = 0


class UserPreferences(Base):
    __tablename__ = "user_preferences"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    default_tax_rate = Column(Numeric(5, 2), nullable=False, default=DEFAULT_TAX_RATE)
    default_discount = Column(Numeric(10, 2), nullable=False, default=DEFAULT_DISCOUNT)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    user = relationship("User", back_populates="preferences")
