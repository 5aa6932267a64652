from fastapi import APIRouter, Depends

from fintrack.db import Database
from fintrack.routers.deps import get_database
from fintrack.schemas.finance_schemas import CreateUser, UserOut
from fintrack.services.user_service import save_user, get_user

user_router = APIRouter(prefix="/api/users", tags=["users"])


@user_router.post("", status_code=201, response_model=UserOut)
def create_user(req: CreateUser, db: Database = Depends(get_database)):
    return save_user(db, req.name, req.email)

@user_router.get("/{user_id}", response_model=UserOut)
def read_user(user_id: int, db: Database = Depends(get_database)):
    return get_user(db, user_id)
