"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROADSIDE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Roadside Attractions Map API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level for the application loggers.")
    data_root: Path = Field(default=Path("data"), description="Root directory for runtime data.")
    uploads_dir: Path = Field(
        default=Path("data/uploads"),
        description="Directory that receives uploaded media files.",
    )
    storage_backend: Literal["memory", "supabase"] = Field(
        default="memory",
        description="Persistence backend selected at process start.",
    )

    session_secret: str = Field(
        default="roadside-map-secret-key-change-in-production",
        description="Secret used to sign session cookies.",
    )
    session_max_age_seconds: int = Field(default=60 * 60 * 24 * 7, ge=60)
    session_https_only: bool = False

    default_admin_username: str = "admin"
    default_admin_password: str = Field(default="admin123", min_length=6)
    seed_sample_data: bool = Field(
        default=True,
        description="Seed sample locations into an empty store on startup.",
    )

    max_upload_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    allowed_image_extensions: tuple[str, ...] = Field(default=("jpeg", "jpg", "png", "gif", "webp"))
    bulk_import_use_dynamic_categories: bool = Field(
        default=False,
        description="Validate bulk imports against current category slugs instead of the fixed vocabulary.",
    )

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("data_root", "uploads_dir", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "allowed_image_extensions", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
