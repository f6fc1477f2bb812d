"""Explorer configuration from environment variables."""

from dataclasses import dataclass
from pathlib import Path
import os


@dataclass
class Config:
    # Content
    content_root: Path
    links_path: Path

    # Build output
    manifest_path: Path
    export_dir: Path

    # Routing
    explorer_prefix: str
    files_prefix: str
    site_title: str

    # Server
    host: str
    port: int

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            # Content
            content_root=Path(os.getenv("CONTENT_ROOT", "public/academiadrive")),
            links_path=Path(os.getenv("LINKS_PATH", "public/data/driveLinks.json")),

            # Build output
            manifest_path=Path(os.getenv("MANIFEST_PATH", "build/manifest.json")),
            export_dir=Path(os.getenv("EXPORT_DIR", "dist")),

            # Routing
            explorer_prefix=_prefix(os.getenv("EXPLORER_PREFIX", "/explorer")),
            files_prefix=_prefix(os.getenv("FILES_PREFIX", "/academiadrive")),
            site_title=os.getenv("SITE_TITLE", "AcademiaDrive Explorer"),

            # Server
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
        )


def _prefix(value: str) -> str:
    """Normalize a URL prefix to '/name' form (no trailing slash)."""
    value = value.strip().strip("/")
    return f"/{value}" if value else ""
