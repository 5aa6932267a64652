from fastapi import APIRouter, Depends

from fintrack.routers.deps import get_owner_id, get_ledger
from fintrack.schemas.finance_schemas import AddMovement, CreatedMovementResponse, MovementsResponse, MessageResponse
from fintrack.services.transaction_ledger import TransactionLedger

movement_router = APIRouter(prefix="/api/movements", tags=["movements"])


@movement_router.post("", status_code=201, response_model=CreatedMovementResponse)
def add_movement(req: AddMovement, owner_id: int = Depends(get_owner_id), ledger: TransactionLedger = Depends(get_ledger)):
    movement = ledger.create_transaction(
        owner_id,
        req.category_id,
        req.description,
        req.amount,
        date=req.date,
        kind=req.type,
    )
    return {"message": "Movement recorded successfully", "movement": movement}

@movement_router.get("", response_model=MovementsResponse)
def get_movements(owner_id: int = Depends(get_owner_id), ledger: TransactionLedger = Depends(get_ledger)):
    return {"movements": ledger.list_transactions(owner_id)}

@movement_router.delete("/{movement_id}", response_model=MessageResponse)
def delete_movement(movement_id: int, owner_id: int = Depends(get_owner_id), ledger: TransactionLedger = Depends(get_ledger)):
    ledger.delete_transaction(movement_id, owner_id)
    return {"message": "Movement deleted successfully"}
