from datetime import date
from fastapi import APIRouter, Depends, Query
from typing import Optional

from fintrack.routers.deps import get_owner_id, get_category_store, get_ledger
from fintrack.schemas.finance_schemas import DashboardResponse, AnalysisResponse, ExpensesByCategoryResponse
from fintrack.services.category_store import CategoryStore
from fintrack.services.transaction_ledger import TransactionLedger
from fintrack.utils.date_helpers import DateRange

report_router = APIRouter(prefix="/api", tags=["reports"])


def _optional_range(start_date: Optional[date], end_date: Optional[date]) -> Optional[DateRange]:
    if start_date is None and end_date is None:
        return None
    return DateRange(start_date, end_date)


# Dashboard
@report_router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    owner_id: int = Depends(get_owner_id),
    ledger: TransactionLedger = Depends(get_ledger),
    store: CategoryStore = Depends(get_category_store),
):
    summary = ledger.compute_financial_summary(owner_id, _optional_range(start_date, end_date))
    return {
        "financial_data": {
            "balance": summary["balance"],
            "income": summary["total_income"],
            "expenses": summary["total_expenses"],
            "recent_transactions": summary["recent_transactions"],
        },
        "categories": store.list_categories(owner_id),
    }

# Analysis
@report_router.get("/analysis", response_model=AnalysisResponse)
def get_analysis(
    range_token: str = Query("all", alias="range"),
    owner_id: int = Depends(get_owner_id),
    ledger: TransactionLedger = Depends(get_ledger),
):
    analysis = ledger.compute_analysis(owner_id, range_token)
    period = analysis["period"]
    return {
        "movements": analysis["movements"],
        "categories_used": analysis["categories_used"],
        "expenses_by_category": ledger.compute_expenses_by_category(owner_id, period),
        "summary": analysis["summary"],
        "start_date": period.start if period else None,
        "end_date": period.end if period else None,
    }

@report_router.get("/expenses-by-category", response_model=ExpensesByCategoryResponse)
def get_expenses_by_category(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    owner_id: int = Depends(get_owner_id),
    ledger: TransactionLedger = Depends(get_ledger),
):
    return {"expenses": ledger.compute_expenses_by_category(owner_id, _optional_range(start_date, end_date))}
