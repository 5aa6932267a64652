from datetime import date as date_type, datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel
from typing import Optional, Union

from fintrack.models import Kind

# JSON on the wire is camelCase (categoryId, totalIncome, ...); snake_case
# names are accepted on input as well.

class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Requests

class CreateUser(ApiModel):
    name: str
    email: str

class AddCategory(ApiModel):
    name: str
    type: str

class AddMovement(ApiModel):
    category_id: int
    description: str
    # strict, so a JSON true is not coerced to 1; the ledger parses it to Decimal
    amount: Union[StrictStr, StrictInt, StrictFloat]
    date: Optional[date_type] = None
    type: Optional[str] = None # ignored, the category decides


# Responses

class UserOut(ApiModel):
    id: int
    name: str
    email: str

class CategoryOut(ApiModel):
    id: int
    name: str
    type: Kind

class CategoryWithTotal(CategoryOut):
    amount: Decimal

class MovementOut(ApiModel):
    id: int
    category_id: int
    category_name: Optional[str] = None
    description: str
    amount: Decimal
    type: Kind
    date: date_type
    created_at: datetime

class ExpenseByCategory(ApiModel):
    category_id: int
    category_name: str
    total: Decimal
    count: int

class MessageResponse(ApiModel):
    message: str

class CreatedCategoryResponse(MessageResponse):
    category: CategoryOut

class CreatedMovementResponse(MessageResponse):
    movement: MovementOut

class CategoriesResponse(ApiModel):
    categories: list[CategoryWithTotal]

class MovementsResponse(ApiModel):
    movements: list[MovementOut]

class FinancialData(ApiModel):
    balance: Decimal
    income: Decimal
    expenses: Decimal
    recent_transactions: list[MovementOut]

class DashboardResponse(ApiModel):
    financial_data: FinancialData
    categories: list[CategoryOut]

class AnalysisSummary(ApiModel):
    total_transactions: int
    date_range: str
    has_data: bool

class AnalysisResponse(ApiModel):
    movements: list[MovementOut]
    categories_used: list[CategoryOut]
    expenses_by_category: list[ExpenseByCategory]
    summary: AnalysisSummary
    start_date: Optional[date_type] = None
    end_date: Optional[date_type] = None

class ExpensesByCategoryResponse(ApiModel):
    expenses: list[ExpenseByCategory]
