from fastapi import APIRouter, Depends, status
from typing import List

from extrovertidos.schemas.category import Category, CategoryCreate, CategoryUpdate
from extrovertidos.schemas.response import APIResponse
from extrovertidos.services.category import CategoryService
from extrovertidos.utils import deps

router = APIRouter()

@router.get("/", response_model=APIResponse[List[Category]])
async def get_categories(categories: CategoryService = Depends(deps.get_category_service)):
    data = await categories.get_categories()
    return APIResponse(message="Categories retrieved successfully", data=data)

@router.post("/", response_model=APIResponse[Category], status_code=status.HTTP_201_CREATED)
async def create_category(
    category_in: CategoryCreate,
    user_id: str = Depends(deps.get_current_user_id),
    categories: CategoryService = Depends(deps.get_category_service),
):
    category = await categories.create_category(category_in, user_id)
    return APIResponse(message="Category created successfully", data=category)

@router.put("/{category_id}", response_model=APIResponse[Category])
async def update_category(
    category_id: str,
    category_in: CategoryUpdate,
    user_id: str = Depends(deps.get_current_user_id),
    categories: CategoryService = Depends(deps.get_category_service),
):
    category = await categories.update_category(category_id, category_in, user_id)
    return APIResponse(message="Category updated successfully", data=category)
