"""Location endpoints: public listing/search and admin maintenance."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...config import settings
from ...errors import InvalidImportContent
from ...models.domain import User
from ...persistence.base import Storage
from ...schemas.auth import MessageResponse
from ...schemas.locations import (
    BulkUploadRequest,
    BulkUploadResponse,
    LocationCreate,
    LocationModel,
    LocationUpdate,
)
from ...services.bulk_import import parse_bulk_import
from ...services.search import filter_by_facets, filter_locations, list_states
from ..deps import require_user, storage_dependency

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/locations", tags=["locations"])


def _ensure_category_exists(storage: Storage, slug: str) -> None:
    if storage.get_category_by_slug(slug) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown category '{slug}'")


@router.get("", response_model=List[LocationModel], status_code=status.HTTP_200_OK)
def list_locations(
    search: str | None = Query(default=None, description="Free-text search across name, category, state and custom fields"),
    category: str | None = Query(default=None, description="Optional exact category slug filter"),
    state: str | None = Query(default=None, description="Optional exact state filter"),
    storage: Storage = Depends(storage_dependency),
) -> List[LocationModel]:
    locations = filter_locations(storage.list_locations(), search)
    if category or state:
        locations = filter_by_facets(locations, category=category, state=state)
    return [LocationModel.from_domain(location) for location in locations]


@router.get("/states", response_model=List[str], status_code=status.HTTP_200_OK)
def get_states(storage: Storage = Depends(storage_dependency)) -> List[str]:
    return list_states(storage.list_locations())


@router.get("/{location_id}", response_model=LocationModel, status_code=status.HTTP_200_OK)
def get_location(location_id: str, storage: Storage = Depends(storage_dependency)) -> LocationModel:
    location = storage.get_location(location_id)
    if location is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return LocationModel.from_domain(location)


@router.post("", response_model=LocationModel, status_code=status.HTTP_201_CREATED)
def create_location(
    payload: LocationCreate,
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> LocationModel:
    _ensure_category_exists(storage, payload.category)
    location = storage.create_location(payload.to_domain())
    logger.info("Created location %s (%s)", location.id, location.name)
    return LocationModel.from_domain(location)


@router.put("/{location_id}", response_model=LocationModel, status_code=status.HTTP_200_OK)
def update_location(
    location_id: str,
    payload: LocationUpdate,
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> LocationModel:
    updates = payload.to_updates()
    if "category" in updates:
        _ensure_category_exists(storage, updates["category"])
    location = storage.update_location(location_id, updates)
    if location is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return LocationModel.from_domain(location)


@router.delete("/{location_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_location(
    location_id: str,
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> MessageResponse:
    if not storage.delete_location(location_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    logger.info("Deleted location %s", location_id)
    return MessageResponse(message="Location deleted successfully")


@router.post("/bulk-upload", response_model=BulkUploadResponse, status_code=status.HTTP_200_OK)
def bulk_upload_locations(
    payload: BulkUploadRequest,
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> BulkUploadResponse:
    """Create locations from ``City, State, Category, MM/DD/YYYY, Name`` lines.

    Bad lines are reported in ``errors`` and never abort the batch.
    """
    if not payload.content or not isinstance(payload.content, str):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File content is required")

    valid_categories = None
    category_labels = None
    if settings.bulk_import_use_dynamic_categories:
        categories = storage.list_categories()
        valid_categories = {category.slug for category in categories}
        category_labels = [category.name for category in categories]

    try:
        result = parse_bulk_import(
            payload.content,
            valid_categories,
            storage.create_location,
            category_labels=category_labels,
        )
    except InvalidImportContent as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return BulkUploadResponse(**result.to_dict())
