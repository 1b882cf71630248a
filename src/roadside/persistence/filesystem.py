"""File-based persistence for uploaded media."""

from __future__ import annotations

import random
import time
from pathlib import Path

from ..config import settings


class FileStorage:
    """Thin wrapper around the uploads directory."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.uploads_dir).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def unique_filename(original_name: str) -> str:
        """``<epoch ms>-<random 9 digits><ext>``, keeping the original extension."""
        suffix = Path(original_name).suffix.lower()
        return f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}{suffix}"

    def path_for(self, filename: str) -> Path:
        path = (self.root / filename).resolve()
        if path.parent != self.root:
            raise ValueError(f"Refusing to resolve '{filename}' outside the uploads directory")
        return path

    def write_bytes(self, filename: str, payload: bytes) -> Path:
        path = self.path_for(filename)
        with path.open("wb") as handle:
            handle.write(payload)
        return path

    def delete(self, filename: str) -> bool:
        path = self.path_for(filename)
        if not path.exists():
            return False
        path.unlink()
        return True

    def list_files(self) -> list[Path]:
        return sorted(path for path in self.root.iterdir() if path.is_file())
