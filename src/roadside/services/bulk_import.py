"""Line-oriented bulk import of locations.

Each non-blank line has the shape ``City, State, Category, MM/DD/YYYY, Name``.
Lines are validated independently; a bad line is reported and skipped while
the rest of the batch is still attempted. Nothing is rolled back.
"""

from __future__ import annotations

import logging
import re
from typing import AbstractSet, Any, Callable, Optional, Sequence

from ..errors import InvalidImportContent
from ..models.domain import BulkImportResult, NewLocation

logger = logging.getLogger(__name__)

EXPECTED_FIELDS = 5
DEFAULT_IMPORT_CATEGORIES: frozenset[str] = frozenset({"muffler-men", "worlds-largest", "unique-finds"})
DEFAULT_CATEGORY_LABELS: tuple[str, ...] = ("Muffler Men", "World's Largest", "Unique Finds")

_WHITESPACE_RE = re.compile(r"\s+")
_VISIT_DATE_RE = re.compile(r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{4})")

CreateLocation = Callable[[NewLocation], Any]


class LineError(ValueError):
    """A line failed validation; the message is reported verbatim."""


def normalize_category_slug(raw: str) -> str:
    """Lower-case, collapse whitespace runs to hyphens and trim hyphens."""
    return _WHITESPACE_RE.sub("-", raw.strip().lower()).strip("-")


def parse_visit_date(raw: str) -> str:
    """Convert ``MM/DD/YYYY`` into ``YYYY-MM-DD``.

    Only the shape is checked: one or two ASCII digits for month and day, four
    for the year. Month and day are zero-padded.
    """
    match = _VISIT_DATE_RE.fullmatch(raw)
    if match is None:
        raise LineError(f'Invalid date format "{raw}" - expected MM/DD/YYYY')
    month, day, year = match.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def parse_line(
    line: str,
    valid_categories: AbstractSet[str],
    category_labels: Sequence[str] = DEFAULT_CATEGORY_LABELS,
) -> NewLocation:
    """Parse one trimmed line into a creation request or raise ``LineError``.

    Fields beyond the fifth are ignored.
    """
    parts = [part.strip() for part in line.split(",")]
    if len(parts) < EXPECTED_FIELDS:
        raise LineError(f"Invalid format - expected {EXPECTED_FIELDS} fields, got {len(parts)}")

    city, state, category_raw, visit_date, name = parts[:EXPECTED_FIELDS]
    if not name:
        raise LineError("Name is required")

    category = normalize_category_slug(category_raw)
    if category not in valid_categories:
        raise LineError(f'Invalid category "{category_raw}" - must be one of: {", ".join(category_labels)}')

    tagged_date = parse_visit_date(visit_date)

    return NewLocation(
        name=name,
        city=city,
        state=state,
        category=category,
        tagged_date=tagged_date,
        latitude=0.0,
        longitude=0.0,
        photo_url="",
        photo_id="",
        zip_code="",
        custom_fields="{}",
    )


def parse_bulk_import(
    content: Any,
    valid_categories: Optional[AbstractSet[str]] = None,
    create_location: Optional[CreateLocation] = None,
    *,
    category_labels: Optional[Sequence[str]] = None,
) -> BulkImportResult:
    """Parse and persist every line of ``content``.

    ``create_location`` is called once per valid line, in input order; if it
    raises, the line is counted as failed with the exception's message. Line
    numbers in error messages count blank lines.

    Raises ``InvalidImportContent`` when ``content`` is not a string.
    """
    if not isinstance(content, str):
        raise InvalidImportContent(f"Bulk import content must be text, got {type(content).__name__}")

    categories = DEFAULT_IMPORT_CATEGORIES if valid_categories is None else valid_categories
    labels = tuple(category_labels) if category_labels else DEFAULT_CATEGORY_LABELS
    result = BulkImportResult()

    for line_number, raw_line in enumerate(content.split("\n"), start=1):
        line = raw_line.strip()
        if not line:
            continue

        try:
            draft = parse_line(line, categories, labels)
        except LineError as exc:
            logger.debug("Bulk import line %d rejected: %s", line_number, exc)
            result.record_failure(line_number, str(exc))
            continue

        if create_location is not None:
            try:
                create_location(draft)
            except Exception as exc:
                logger.warning("Bulk import line %d could not be stored: %s", line_number, exc)
                result.record_failure(line_number, str(exc) or "Unknown error")
                continue

        result.record_success()

    logger.info("Bulk import finished: %d succeeded, %d failed", result.success, result.failed)
    return result
