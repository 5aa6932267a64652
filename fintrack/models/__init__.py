from fintrack.models.kind import Kind
from fintrack.models.user import User
from fintrack.models.category import Category
from fintrack.models.transaction import Transaction

__all__ = ["Kind", "User", "Category", "Transaction"]
