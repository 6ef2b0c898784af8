from backend.app.models.invoice import Invoice
from backend.app.models.invoice_template import InvoiceTemplate
from backend.app.models.user import User


def test_user_model_has_columns():
    column_names = [column.name for column in User.__table__.columns]
    expected = {"id", "email", "name", "hashed_password", "is_active", "created_at", "updated_at"}
    assert expected.issubset(set(column_names))


def test_invoice_number_is_unique_per_owner():
    constraints = [
        tuple(column.name for column in constraint.columns)
        for constraint in Invoice.__table__.constraints
        if constraint.__class__.__name__ == "UniqueConstraint"
    ]
    assert ("owner_id", "invoice_number") in constraints
    assert Invoice.__table__.columns["invoice_number"].unique is not True


def test_template_next_due_is_indexed():
    assert InvoiceTemplate.__table__.columns["next_due_at"].index is True
