"""Route group exports."""

from . import auth, categories, health, locations, media, site_settings

__all__ = ["auth", "categories", "health", "locations", "media", "site_settings"]
