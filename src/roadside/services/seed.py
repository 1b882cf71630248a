"""Startup seeding: default admin, default categories and sample locations."""

from __future__ import annotations

import json
import logging

from ..config import settings
from ..models.domain import NewLocation
from ..persistence.base import Storage
from .auth import hash_password

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: tuple[dict, ...] = (
    {
        "name": "Muffler Men",
        "slug": "muffler-men",
        "description": "Giant fiberglass figures that once adorned muffler shops and gas stations",
        "icon": "🗿",
        "color": "#ef4444",
        "display_order": 1,
    },
    {
        "name": "World's Largest",
        "slug": "worlds-largest",
        "description": "Colossal monuments to American roadside excess",
        "icon": "🎪",
        "color": "#3b82f6",
        "display_order": 2,
    },
    {
        "name": "Unique Finds",
        "slug": "unique-finds",
        "description": "Peculiar treasures and oddities that defy categorization",
        "icon": "✨",
        "color": "#8b5cf6",
        "display_order": 3,
    },
)


def _sample(name, lat, lon, category, state, city, zip_code, photo_id, tagged_date, custom) -> NewLocation:
    return NewLocation(
        name=name,
        latitude=lat,
        longitude=lon,
        category=category,
        state=state,
        city=city,
        zip_code=zip_code,
        photo_url="",
        photo_id=photo_id,
        tagged_date=tagged_date,
        custom_fields=json.dumps(custom),
    )


SAMPLE_LOCATIONS: tuple[NewLocation, ...] = (
    _sample("Giant Muffler Man - Wilmington", 41.3083, -88.1467, "muffler-men", "Illinois", "Wilmington", "60481",
            "fb_001", "2024-06-15", {"material": "fiberglass", "height": "28 feet"}),
    _sample("World's Largest Ball of Twine", 39.2026, -98.4842, "worlds-largest", "Kansas", "Cawker City", "67430",
            "fb_002", "2024-07-20", {"weight": "17,400 pounds", "creator": "Frank Stoeber"}),
    _sample("Cowboy Muffler Man", 32.7767, -96.7970, "muffler-men", "Texas", "Dallas", "75201",
            "fb_003", "2024-08-10", {"style": "western", "accessories": "hat and boots"}),
    _sample("World's Largest Thermometer", 35.5944, -116.0733, "worlds-largest", "California", "Baker", "92309",
            "fb_004", "2024-05-12", {"height": "134 feet", "location": "Baker"}),
    _sample("Paul Bunyan Muffler Man", 44.8521, -93.2421, "muffler-men", "Minnesota", "St. Paul", "55101",
            "fb_005", "2024-09-03", {"companion": "Babe the Blue Ox", "era": "1950s"}),
    _sample("World's Largest Rocking Chair", 38.8183, -90.6906, "worlds-largest", "Missouri", "Fanning", "63640",
            "fb_006", "2024-04-25", {"height": "42 feet", "material": "steel"}),
    _sample("Uniroyal Gal Muffler Woman", 33.4484, -112.0740, "muffler-men", "Arizona", "Phoenix", "85003",
            "fb_007", "2024-03-18", {"gender": "female", "brand": "Uniroyal"}),
    _sample("World's Largest Catsup Bottle", 38.6270, -90.1994, "worlds-largest", "Illinois", "Collinsville", "62234",
            "fb_008", "2024-10-05", {"brand": "Brooks", "height": "170 feet"}),
    _sample("Gemini Giant Muffler Man", 41.1520, -88.1792, "muffler-men", "Illinois", "Wilmington", "60481",
            "fb_009", "2024-02-14", {"theme": "space", "holding": "rocket"}),
    _sample("World's Largest Mailbox", 41.2565, -95.9345, "worlds-largest", "Nebraska", "Casey", "50048",
            "fb_010", "2024-01-22", {"functional": "yes", "color": "blue"}),
    _sample("World's Largest Peanut", 33.4754, -84.4491, "worlds-largest", "Georgia", "Ashburn", "31714",
            "fb_011", "2023-12-08", {"type": "monument", "material": "concrete"}),
    _sample("Chicken Boy Muffler Man", 34.0522, -118.2437, "muffler-men", "California", "Los Angeles", "90012",
            "fb_012", "2023-11-17", {"head": "chicken", "restaurant": "former"}),
    _sample("Cadillac Ranch", 35.1872, -101.9871, "unique-finds", "Texas", "Amarillo", "79124",
            "fb_013", "2023-10-22", {"type": "art installation", "cars": "10 Cadillacs"}),
    _sample("Mystery Spot", 37.0169, -122.0255, "unique-finds", "California", "", "",
            "fb_014", "2023-09-15", {"type": "gravitational anomaly", "opened": "1939"}),
    _sample("Coral Castle", 25.5007, -80.4428, "unique-finds", "Florida", "", "",
            "fb_015", "2023-08-30", {"material": "coral rock", "weight": "1,100 tons"}),
)


def seed_default_admin(storage: Storage) -> None:
    username = settings.default_admin_username
    if storage.get_user_by_username(username):
        return
    storage.create_user(username, hash_password(settings.default_admin_password))
    logger.info("Default admin account created (username: %s)", username)


def seed_default_categories(storage: Storage) -> None:
    if storage.list_categories():
        return
    for category in DEFAULT_CATEGORIES:
        storage.create_category(category)
    logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))


def seed_sample_locations(storage: Storage) -> None:
    if storage.list_locations():
        return
    for draft in SAMPLE_LOCATIONS:
        storage.create_location(draft)
    logger.info("Seeded %d sample locations", len(SAMPLE_LOCATIONS))


def seed_defaults(storage: Storage, *, include_samples: bool | None = None) -> None:
    """Populate an empty store. Each step is skipped when its data already exists."""
    seed_default_admin(storage)
    seed_default_categories(storage)
    if settings.seed_sample_data if include_samples is None else include_samples:
        seed_sample_locations(storage)
