# manifest.py
"""
Build-time snapshot of the content tree.

build_manifest() walks the content root once and records every folder
listing. The result is written to JSON so pages can be rendered (by the
static exporter or the web app) without touching the content tree again.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from tqdm import tqdm

from .errors import ContentRootMissing, FolderNotFound, ManifestError
from .tree import (
    FileEntry,
    FolderEntry,
    FolderListing,
    enumerate_folders,
    join_slug,
    list_folder,
    split_slug,
)

logger = logging.getLogger(__name__)

MANIFEST_VERSION = 1


@dataclass
class Manifest:
    """Every folder listing under a content root, keyed by FolderPath."""
    content_root: str
    generated_at: str = ""
    version: int = MANIFEST_VERSION
    folders: dict[str, FolderListing] = field(default_factory=dict)

    def routes(self) -> list[str]:
        """All FolderPaths with a page, the root ('') first."""
        return list(self.folders)

    def listing(self, slug="") -> FolderListing:
        """Listing for one folder; raises FolderNotFound if it was not built."""
        key = join_slug(split_slug(slug))
        try:
            return self.folders[key]
        except KeyError:
            raise FolderNotFound(key) from None

    def find_file(self, file_path: str) -> FileEntry | None:
        """Look up a PDF by its path relative to the content root."""
        segments = split_slug(file_path)
        if not segments:
            return None
        parent = self.folders.get(join_slug(segments[:-1]))
        if parent is None:
            return None
        target = join_slug(segments)
        for f in parent.files:
            if f.path == target:
                return f
        return None

    @property
    def file_count(self) -> int:
        return sum(len(listing.files) for listing in self.folders.values())

    @property
    def total_bytes(self) -> int:
        return sum(f.size for listing in self.folders.values() for f in listing.files)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Manifest":
        folders = {}
        for key, raw in data.get("folders", {}).items():
            folders[key] = FolderListing(
                path=raw["path"],
                folders=[FolderEntry(**f) for f in raw.get("folders", [])],
                files=[FileEntry(**f) for f in raw.get("files", [])],
            )
        return cls(
            content_root=data["content_root"],
            generated_at=data.get("generated_at", ""),
            version=data.get("version", MANIFEST_VERSION),
            folders=folders,
        )


def build_manifest(root: Path, progress: bool = False) -> Manifest:
    """
    Enumerate every folder under root and snapshot its listing.

    A missing root raises ContentRootMissing. A folder that disappears
    between enumeration and listing is logged and left out.
    """
    root = Path(root)
    if not root.is_dir():
        raise ContentRootMissing(root)

    routes = [""] + enumerate_folders(root)
    logger.info(f"Found {len(routes) - 1} folders under {root}")

    manifest = Manifest(
        content_root=str(root),
        generated_at=datetime.now(timezone.utc).isoformat(),
    )
    for slug in tqdm(routes, desc="Listing", disable=not progress):
        try:
            manifest.folders[slug] = list_folder(root, slug)
        except FolderNotFound:
            logger.warning(f"Folder vanished during build, skipping: /{slug}")

    logger.info(
        f"Manifest built: {len(manifest.folders)} pages, {manifest.file_count} PDFs"
    )
    return manifest


def write_manifest(manifest: Manifest, path: Path | str) -> Path:
    """Write the manifest as JSON. Parent folders are created."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file then rename so readers never see a partial file
    tmp_path = path.with_suffix(".tmp")
    try:
        tmp_path.write_text(
            json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    return path


def read_manifest(path: Path | str) -> Manifest | None:
    """
    Read a manifest. Returns None if the file doesn't exist; raises
    ManifestError if it can't be read or parsed.
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Manifest.from_dict(data)
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
        raise ManifestError(f"Invalid manifest {path}: {e}") from e
