"""Write a static copy of the site: one index.html per folder."""

import json
import logging
import shutil
from pathlib import Path

from tqdm import tqdm

from .manifest import Manifest
from .render import (
    DEFAULT_EXPLORER_PREFIX,
    DEFAULT_FILES_PREFIX,
    DEFAULT_TITLE,
    render_listing,
)
from .tree import resolve, split_slug

logger = logging.getLogger(__name__)


def page_path(out_dir: Path, explorer_prefix: str, slug: str) -> Path:
    """Where the page for a FolderPath lands in the export."""
    segments = split_slug(slug)
    if not segments:
        return out_dir / "index.html"
    return out_dir.joinpath(*split_slug(explorer_prefix), *segments, "index.html")


def export_site(
    manifest: Manifest,
    out_dir: Path,
    links: dict[str, str] | None = None,
    *,
    explorer_prefix: str = DEFAULT_EXPLORER_PREFIX,
    files_prefix: str = DEFAULT_FILES_PREFIX,
    title: str = DEFAULT_TITLE,
    copy_files: bool = False,
    progress: bool = False,
) -> int:
    """
    Render every folder in the manifest to out_dir.

    The root listing is also written to <explorer_prefix>/index.html so both
    '/' and the explorer prefix resolve. Returns the number of pages written.
    """
    out_dir = Path(out_dir)
    links = links or {}
    written = 0

    for slug in tqdm(manifest.routes(), desc="Rendering", disable=not progress):
        listing = manifest.folders[slug]
        page = render_listing(
            split_slug(slug),
            listing.folders,
            listing.files,
            links,
            explorer_prefix=explorer_prefix,
            files_prefix=files_prefix,
            title=title,
        )
        targets = [page_path(out_dir, explorer_prefix, slug)]
        if not slug and split_slug(explorer_prefix):
            targets.append(out_dir.joinpath(*split_slug(explorer_prefix), "index.html"))
        for target in targets:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(page, encoding="utf-8")
        written += 1

    data_dir = out_dir / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "links.json").write_text(
        json.dumps(links, indent=2, ensure_ascii=False), encoding="utf-8"
    )

    if copy_files:
        copied = copy_documents(manifest, out_dir / Path(*split_slug(files_prefix)))
        logger.info(f"Copied {copied} PDFs")

    logger.info(f"Exported {written} pages to {out_dir}")
    return written


def copy_documents(manifest: Manifest, dest: Path) -> int:
    """Copy every PDF in the manifest under dest, keeping relative paths."""
    root = Path(manifest.content_root)
    copied = 0
    for listing in manifest.folders.values():
        for f in listing.files:
            source = resolve(root, f.path)
            target = dest.joinpath(*split_slug(f.path))
            if not source.is_file():
                logger.warning(f"Missing PDF, not copied: {source}")
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
            copied += 1
    return copied
