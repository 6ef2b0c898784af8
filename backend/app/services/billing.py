"""Billing arithmetic shared by manual and recurring invoice creation."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

CENT = Decimal("0.01")


def to_money(value: Decimal | float | int | str | None) -> Decimal:
    """Coerce to a Decimal rounded to cents, half-up."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_line_total(quantity: Decimal | float, unit_price: Decimal | float) -> Decimal:
    return to_money(Decimal(str(quantity)) * Decimal(str(unit_price)))


@dataclass(frozen=True)
class InvoiceTotals:
    items_total: Decimal
    tax_amount: Decimal
    total: Decimal


def calculate_totals(
    line_totals: Iterable[Decimal],
    tax_rate: Decimal | float | None,
    discount: Decimal | float | None,
) -> InvoiceTotals:
    """Sum line totals, apply tax as a percentage of the sum, then subtract the flat discount."""
    items_total = to_money(sum((Decimal(str(t)) for t in line_totals), Decimal("0.00")))
    rate = Decimal(str(tax_rate or 0))
    tax_amount = to_money(items_total * rate / Decimal("100"))
    total = to_money(items_total + tax_amount - Decimal(str(discount or 0)))
    return InvoiceTotals(items_total=items_total, tax_amount=tax_amount, total=total)


def build_item_rows(items: Iterable) -> list[dict]:
    """Turn line item inputs (schemas or ORM rows) into plain column dicts with totals."""
    rows = []
    for item in items:
        rows.append(
            {
                "description": item.description,
                "quantity": Decimal(str(item.quantity)),
                "unit_price": Decimal(str(item.unit_price)),
                "total": calculate_line_total(item.quantity, item.unit_price),
            }
        )
    return rows
