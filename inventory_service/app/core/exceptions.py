"""Stock ledger exception classes.

Exception Hierarchy:
    LedgerError (base)
    ├── NotFoundError
    ├── InsufficientInventoryError
    ├── ValidationError
    └── DependencyError
"""


class LedgerError(Exception):
    """Base exception for every error raised by the stock ledger and its stores."""

    pass


class NotFoundError(LedgerError):
    """Raised when a product or inventory record does not exist."""

    def __init__(self, entity: str, identifier):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} not found")


class InsufficientInventoryError(LedgerError):
    """Raised when a sale asks for more units than are on hand."""

    def __init__(self, product_id, requested: int, available):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__("Insufficient inventory")


class ValidationError(LedgerError):
    """Raised for malformed quantities, prices or names, before any mutation."""

    pass


class DependencyError(LedgerError):
    """Raised when the persistence layer fails."""

    def __init__(self, message: str, original: Exception | None = None):
        self.original = original
        super().__init__(message)
