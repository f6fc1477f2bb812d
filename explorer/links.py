"""
External storage links used to decorate listing entries.

The mapping is a JSON object of FolderPath -> URL. It is optional data:
anything wrong with it degrades to an empty mapping.
"""

import json
import logging
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


def load_links(path: Path | str) -> dict[str, str]:
    """Read the link mapping. Returns {} if the file is missing or invalid."""
    path = Path(path)
    if not path.exists():
        logger.info(f"No link mapping at {path}")
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable link mapping {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring link mapping {path}: expected a JSON object")
        return {}

    links = {k: v for k, v in data.items() if isinstance(v, str)}
    dropped = len(data) - len(links)
    if dropped:
        logger.warning(f"Dropped {dropped} non-string link(s) from {path}")
    return links


class LinkCache:
    """Process-wide link mapping: loaded on first use, kept until invalidated."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._links: dict[str, str] | None = None
        self._lock = threading.Lock()

    def get(self) -> dict[str, str]:
        with self._lock:
            if self._links is None:
                self._links = load_links(self.path)
            return self._links

    def invalidate(self) -> None:
        with self._lock:
            self._links = None

    @property
    def loaded(self) -> bool:
        return self._links is not None
