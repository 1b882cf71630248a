"""Category endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...models.domain import User
from ...persistence.base import Storage
from ...schemas.auth import MessageResponse
from ...schemas.categories import CategoryCreate, CategoryModel, CategoryUpdate
from ..deps import require_user, storage_dependency

router = APIRouter(prefix="/categories", tags=["categories"])

DUPLICATE_SLUG = "Category with this slug already exists"


@router.get("", response_model=List[CategoryModel], status_code=status.HTTP_200_OK)
def list_categories(storage: Storage = Depends(storage_dependency)) -> List[CategoryModel]:
    return [CategoryModel.from_domain(category) for category in storage.list_categories()]


@router.get("/{category_id}", response_model=CategoryModel, status_code=status.HTTP_200_OK)
def get_category(category_id: str, storage: Storage = Depends(storage_dependency)) -> CategoryModel:
    category = storage.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return CategoryModel.from_domain(category)


@router.post("", response_model=CategoryModel, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> CategoryModel:
    if not payload.name or not payload.slug:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name and slug are required")
    if storage.get_category_by_slug(payload.slug):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_SLUG)
    return CategoryModel.from_domain(storage.create_category(payload.to_fields()))


@router.put("/{category_id}", response_model=CategoryModel, status_code=status.HTTP_200_OK)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> CategoryModel:
    current = storage.get_category(category_id)
    if current is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    updates = payload.to_updates()
    new_slug = updates.get("slug")
    if new_slug and new_slug != current.slug and storage.get_category_by_slug(new_slug):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_SLUG)

    category = storage.update_category(category_id, updates)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return CategoryModel.from_domain(category)


@router.delete("/{category_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_category(
    category_id: str,
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> MessageResponse:
    category = storage.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    in_use = sum(1 for location in storage.list_locations() if location.category == category.slug)
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot delete category. {in_use} location(s) are using this category.",
        )

    if not storage.delete_category(category_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return MessageResponse(message="Category deleted successfully")
