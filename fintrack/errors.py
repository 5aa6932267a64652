"""Error family raised by the category store and the transaction ledger.

Each error carries a human readable message and a ``context`` dict
(operation, owner id, entity id). ``status_code`` is only read by the HTTP
layer in ``fintrack.main``.
"""


class FinanceError(Exception):
    status_code = 500

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self):
        return self.message


class ValidationError(FinanceError):
    """Input failed a structural or domain rule. Caller can resubmit."""
    status_code = 400


class NotFoundError(FinanceError):
    """Entity missing or owned by someone else (never distinguished)."""
    status_code = 404


class ConflictError(FinanceError):
    """Uniqueness or referential rule would be violated."""
    status_code = 409


class StoreFailure(FinanceError):
    """The database was unreachable or failed unexpectedly."""
    status_code = 500
