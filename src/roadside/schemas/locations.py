"""Pydantic request/response models for location endpoints."""

from __future__ import annotations

import json
import re
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.domain import Location, NewLocation

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# API (camelCase) -> domain (snake_case)
_FIELD_MAP = {
    "name": "name",
    "latitude": "latitude",
    "longitude": "longitude",
    "category": "category",
    "state": "state",
    "city": "city",
    "zipCode": "zip_code",
    "photoUrl": "photo_url",
    "photoId": "photo_id",
    "taggedDate": "tagged_date",
    "description": "description",
    "customFields": "custom_fields",
}


def _custom_field_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _coerce_custom_fields(value: Any) -> Any:
    """Accept a mapping or its JSON text; always store JSON object text."""
    if value is None:
        return value
    if isinstance(value, dict):
        return json.dumps({str(k): _custom_field_text(v) for k, v in value.items()})
    if isinstance(value, str):
        text = value.strip() or "{}"
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError("customFields must be a JSON object") from exc
        if not isinstance(parsed, dict):
            raise ValueError("customFields must be a JSON object")
        return text
    raise ValueError("customFields must be a JSON object")


def _check_tagged_date(value: Optional[str]) -> Optional[str]:
    if value is not None and not _ISO_DATE_RE.match(value):
        raise ValueError("taggedDate must use the YYYY-MM-DD format")
    return value


class LocationModel(BaseModel):
    id: str
    name: str
    latitude: float
    longitude: float
    category: str
    state: str
    city: str
    zipCode: str
    photoUrl: str
    photoId: str
    taggedDate: str
    description: str
    customFields: str

    @classmethod
    def from_domain(cls, location: Location) -> "LocationModel":
        return cls(
            id=location.id,
            name=location.name,
            latitude=location.latitude,
            longitude=location.longitude,
            category=location.category,
            state=location.state,
            city=location.city or "",
            zipCode=location.zip_code or "",
            photoUrl=location.photo_url or "",
            photoId=location.photo_id or "",
            taggedDate=location.tagged_date,
            description=location.description or "",
            customFields=location.custom_fields or "{}",
        )


class LocationCreate(BaseModel):
    name: str = Field(..., min_length=1)
    latitude: float = 0.0
    longitude: float = 0.0
    category: str = Field(..., min_length=1, description="Slug of an existing category.")
    state: str = Field(..., min_length=1)
    city: str = ""
    zipCode: str = ""
    photoUrl: str = Field(..., description="Public URL of the location photo; may be empty.")
    photoId: str = Field(..., description="Photo identifier; may be empty.")
    taggedDate: str = Field(..., description="Visit date as YYYY-MM-DD.")
    description: str = ""
    customFields: str = Field(default="{}", description="JSON object of free-form attributes.")

    @field_validator("customFields", mode="before")
    @classmethod
    def validate_custom_fields(cls, value: Any) -> Any:
        return "{}" if value is None else _coerce_custom_fields(value)

    @field_validator("taggedDate")
    @classmethod
    def validate_tagged_date(cls, value: str) -> str:
        return _check_tagged_date(value)

    def to_domain(self) -> NewLocation:
        return NewLocation(**{_FIELD_MAP[key]: value for key, value in self.model_dump().items()})


class LocationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    category: Optional[str] = Field(default=None, min_length=1)
    state: Optional[str] = Field(default=None, min_length=1)
    city: Optional[str] = None
    zipCode: Optional[str] = None
    photoUrl: Optional[str] = None
    photoId: Optional[str] = None
    taggedDate: Optional[str] = None
    description: Optional[str] = None
    customFields: Optional[str] = None

    @field_validator("customFields", mode="before")
    @classmethod
    def validate_custom_fields(cls, value: Any) -> Any:
        return _coerce_custom_fields(value)

    @field_validator("taggedDate")
    @classmethod
    def validate_tagged_date(cls, value: Optional[str]) -> Optional[str]:
        return _check_tagged_date(value)

    def to_updates(self) -> dict[str, Any]:
        """Only the fields the client sent, keyed by domain attribute name."""
        return {
            _FIELD_MAP[key]: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class BulkUploadRequest(BaseModel):
    # Left untyped so a non-text payload reaches the route and gets a 400.
    content: Any = None


class BulkUploadResponse(BaseModel):
    success: int
    failed: int
    errors: List[str]
