from fastapi import Header, HTTPException, Request

from fintrack.db import Database
from fintrack.services.category_store import CategoryStore
from fintrack.services.transaction_ledger import TransactionLedger


def get_owner_id(x_user_id: str = Header(None)) -> int:
    # The identity layer in front of this API puts the authenticated id here
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    try:
        owner_id = int(x_user_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid user ID")
    if owner_id <= 0:
        raise HTTPException(status_code=400, detail="Invalid user ID")
    return owner_id


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_category_store(request: Request) -> CategoryStore:
    return request.app.state.category_store


def get_ledger(request: Request) -> TransactionLedger:
    return request.app.state.ledger
