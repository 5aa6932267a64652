# creates database schema
# python -m fintrack.scripts.init_db [--drop]
import sys
from fintrack.db import Database

database = Database()

# Drop all tables
if "--drop" in sys.argv:
    database.drop_all()

# Create tables based on existing models
database.init_db()
print(f"Schema ready at {database.url}")
database.dispose()
