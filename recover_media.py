#!/usr/bin/env python3
"""Register image files in the uploads directory that are missing from the media library."""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from roadside.config import settings  # noqa: E402
from roadside.persistence import get_storage  # noqa: E402
from roadside.services.media import recover_orphaned_media  # noqa: E402


def main() -> int:
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(message)s")
    if not settings.uploads_dir.exists():
        print(f"Uploads directory not found: {settings.uploads_dir}", file=sys.stderr)
        return 1

    report = recover_orphaned_media(get_storage())
    print(f"Scanned {report.scanned} image files in {settings.uploads_dir}")
    print(f"  already registered: {report.already_registered}")
    print(f"  recovered:          {report.recovered}")
    if report.failed:
        print(f"  failed:             {report.failed}")
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
