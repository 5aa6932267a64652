# fintrack/scripts/seed_categories.py
# python -m fintrack.scripts.seed_categories <user_id>

import sys
from fintrack.db import Database
from fintrack.errors import ConflictError
from fintrack.models import Kind
from fintrack.services.category_store import CategoryStore
from fintrack.services.transaction_ledger import TransactionLedger

categories = [
    {"name": "Salary", "type": Kind.INCOME},
    {"name": "Freelance", "type": Kind.INCOME},
    {"name": "Food", "type": Kind.EXPENSE},
    {"name": "Rent", "type": Kind.EXPENSE},
    {"name": "Transport", "type": Kind.EXPENSE},
    {"name": "Utilities", "type": Kind.EXPENSE},
    {"name": "Entertainment", "type": Kind.EXPENSE},
    {"name": "Health", "type": Kind.EXPENSE},
]


def seed(database: Database, user_id: int) -> int:
    store = CategoryStore(database, TransactionLedger(database))
    created = 0
    for cat in categories:
        try:
            store.create_category(user_id, cat["name"], cat["type"])
            created += 1
        except ConflictError:
            continue # already there
    return created


if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.exit("usage: python -m fintrack.scripts.seed_categories <user_id>")
    database = Database()
    database.init_db()
    count = seed(database, int(sys.argv[1]))
    print(f"Categories seeded: {count} new")
    database.dispose()
