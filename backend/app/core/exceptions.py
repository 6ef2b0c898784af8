"""Domain exceptions raised by billing services."""


class InvoicingError(Exception):
    """Base class for invoicing failures."""


class InvoiceNumberConflict(InvoicingError):
    """An invoice number could not be committed without violating (owner, number) uniqueness."""

    def __init__(self, owner_id: int, attempts: int):
        self.owner_id = owner_id
        self.attempts = attempts
        super().__init__(f"Could not allocate a unique invoice number for owner {owner_id} after {attempts} attempts")
