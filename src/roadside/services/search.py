"""Free-text and facet filtering over an in-memory location collection."""

from __future__ import annotations

import json
from typing import Iterable, Optional, Sequence

from ..models.domain import Location


def parse_custom_fields(raw: Optional[str]) -> dict[str, str]:
    """Deserialize a location's custom field bag.

    Anything that is not a JSON object (malformed text, arrays, scalars, None)
    degrades to an empty mapping. Values are stringified.
    """
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError, ValueError):
        return {}
    if not isinstance(parsed, dict):
        return {}
    return {str(key): _stringify(value) for key, value in parsed.items()}


def _stringify(value: object) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _matches(location: Location, needle: str) -> bool:
    if needle in (location.name or "").lower():
        return True
    if needle in (location.category or "").lower():
        return True
    if needle in (location.state or "").lower():
        return True
    for key, value in parse_custom_fields(location.custom_fields).items():
        if needle in key.lower() or needle in value.lower():
            return True
    return False


def filter_locations(locations: Sequence[Location], query: Optional[str]) -> list[Location]:
    """Return the locations matching ``query``, preserving input order.

    A blank query is the identity filter. Otherwise the trimmed, lower-cased
    query is tested as a substring of name, category, state and of every custom
    field key and value.
    """
    if query is None or not query.strip():
        return list(locations)
    needle = query.strip().lower()
    return [location for location in locations if _matches(location, needle)]


def filter_by_facets(
    locations: Iterable[Location],
    *,
    category: Optional[str] = None,
    state: Optional[str] = None,
) -> list[Location]:
    """Exact-match category/state filters used by the public map."""
    results: list[Location] = []
    for location in locations:
        if category and location.category != category:
            continue
        if state and location.state != state:
            continue
        results.append(location)
    return results


def list_states(locations: Iterable[Location]) -> list[str]:
    return sorted({location.state.strip() for location in locations if location.state and location.state.strip()})
