from fastapi import APIRouter, Depends

from fintrack.routers.deps import get_owner_id, get_category_store
from fintrack.schemas.finance_schemas import AddCategory, CategoriesResponse, CreatedCategoryResponse, MessageResponse
from fintrack.services.category_store import CategoryStore

category_router = APIRouter(prefix="/api/categories", tags=["categories"])


@category_router.get("", response_model=CategoriesResponse)
def get_categories(owner_id: int = Depends(get_owner_id), store: CategoryStore = Depends(get_category_store)):
    return {"categories": store.get_categories_with_totals(owner_id)}

@category_router.post("", status_code=201, response_model=CreatedCategoryResponse)
def add_category(req: AddCategory, owner_id: int = Depends(get_owner_id), store: CategoryStore = Depends(get_category_store)):
    category = store.create_category(owner_id, req.name, req.type)
    return {"message": "Category created successfully", "category": category}

@category_router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(category_id: int, owner_id: int = Depends(get_owner_id), store: CategoryStore = Depends(get_category_store)):
    store.delete_category(category_id, owner_id)
    return {"message": "Category deleted successfully"}
