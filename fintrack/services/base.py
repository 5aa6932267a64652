import logging
from contextlib import contextmanager
from sqlalchemy.exc import SQLAlchemyError

from fintrack.db import Database
from fintrack.errors import StoreFailure


@contextmanager
def unit_of_work(db: Database, log: logging.Logger, operation: str, **context):
    """One database session per store operation.

    Domain errors raised inside pass through untouched; any other SQLAlchemy
    error becomes a ``StoreFailure`` after being logged with its context.
    """
    try:
        with db.session() as session:
            yield session
    except SQLAlchemyError as e:
        details = ", ".join(f"{key}={value}" for key, value in context.items())
        log.exception(f"STORE FAILURE: {operation} | {details}")
        raise StoreFailure(f"Database error during {operation}", operation=operation, **context) from e


def is_foreign_key_violation(error) -> bool:
    orig = getattr(error, "orig", error)
    if getattr(orig, "pgcode", None) == "23503":
        return True
    return "foreign key" in str(orig).lower()
