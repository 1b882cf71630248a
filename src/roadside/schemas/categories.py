"""Category API schemas."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from ..models.domain import Category

_FIELD_MAP = {
    "name": "name",
    "slug": "slug",
    "description": "description",
    "icon": "icon",
    "color": "color",
    "displayOrder": "display_order",
}


class CategoryModel(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    icon: str
    color: str
    displayOrder: float
    createdAt: str
    updatedAt: str

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryModel":
        return cls(
            id=category.id,
            name=category.name,
            slug=category.slug,
            description=category.description or "",
            icon=category.icon or "📍",
            color=category.color or "#f97316",
            displayOrder=category.display_order or 0,
            createdAt=category.created_at,
            updatedAt=category.updated_at,
        )


class CategoryCreate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    displayOrder: Optional[float] = Field(default=None)

    def to_fields(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description or "",
            "icon": self.icon or "📍",
            "color": self.color or "#f97316",
            "display_order": self.displayOrder or 0,
        }


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    displayOrder: Optional[float] = None

    def to_updates(self) -> dict[str, Any]:
        return {
            _FIELD_MAP[key]: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }
