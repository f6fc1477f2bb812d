"""
Content tree walking.

Two operations drive everything else:
- enumerate_folders(): every directory under the content root, one per page
- list_folder(): the direct children of one folder, split into folders and PDFs

Paths handed around are FolderPath strings: segments relative to the content
root joined with '/'. The root itself is the empty string. Case is preserved
everywhere; nothing is lowercased for routing or lookup.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .errors import ContentRootMissing, FolderNotFound

logger = logging.getLogger(__name__)

PDF_SUFFIX = ".pdf"

SEPARATORS = tuple({"/", os.sep, os.altsep} - {None})


@dataclass
class FolderEntry:
    name: str
    path: str  # FolderPath of the child


@dataclass
class FileEntry:
    name: str
    path: str  # FolderPath-style path of the PDF
    size: int = 0  # bytes, read at build time


@dataclass
class FolderListing:
    """Direct children of one folder."""
    path: str
    folders: list[FolderEntry] = field(default_factory=list)
    files: list[FileEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.folders and not self.files


def is_pdf_name(name: str) -> bool:
    """True when the name ends with '.pdf' in any case."""
    return name.lower().endswith(PDF_SUFFIX)


def _portable_name(name: str, directory) -> bool:
    """
    True when a directory entry name can be used as a route segment.

    Names that are not valid UTF-8 come back from scandir with surrogate
    escapes and cannot be written to the manifest or to HTML.
    """
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        logger.warning(f"Skipping non-UTF-8 name in {directory}: {name!r}")
        return False
    return True


def _sort_key(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


def split_slug(slug: str | Iterable[str]) -> list[str]:
    """
    Turn a FolderPath string (or segment list) into validated segments.

    Leading/trailing slashes are ignored. Empty segments, '.', '..' and
    segments carrying the platform path separator raise FolderNotFound, so
    a slug can never point outside the content root. A backslash is an
    ordinary name character on POSIX.
    """
    if isinstance(slug, str):
        text = slug.strip("/")
        segments = text.split("/") if text else []
    else:
        segments = list(slug)

    for segment in segments:
        if segment in ("", ".", "..") or any(sep in segment for sep in SEPARATORS):
            raise FolderNotFound("/".join(segments))
    return segments


def join_slug(segments: Iterable[str]) -> str:
    return "/".join(segments)


def resolve(root: Path, slug: str | Iterable[str]) -> Path:
    """Filesystem location of a FolderPath under root."""
    return Path(root).joinpath(*split_slug(slug))


def enumerate_folders(root: Path) -> list[str]:
    """
    Return every directory under root as a FolderPath, depth-first.

    The root itself is not included; a root without subdirectories yields [].
    Siblings are visited in case-insensitive name order. Symlinked
    directories are not followed. An unreadable root is as fatal as a
    missing one; unreadable subfolders are logged and skipped.
    """
    root = Path(root)
    if not root.is_dir():
        raise ContentRootMissing(root)

    folders: list[str] = []

    def walk(directory: Path, prefix: list[str]):
        try:
            with os.scandir(directory) as it:
                entries = [
                    e for e in it
                    if e.is_dir(follow_symlinks=False) and _portable_name(e.name, directory)
                ]
        except OSError as e:
            if directory == root:
                raise ContentRootMissing(root, "unreadable") from e
            logger.warning(f"Skipping unreadable folder {directory}: {e}")
            return

        for entry in sorted(entries, key=lambda e: _sort_key(e.name)):
            segments = prefix + [entry.name]
            folders.append(join_slug(segments))
            walk(Path(entry.path), segments)

    walk(root, [])
    return folders


def list_folder(root: Path, slug: str | Iterable[str] = "") -> FolderListing:
    """
    List the direct children of one folder.

    Only regular files ending in '.pdf' (any case) are reported as files;
    everything else is silently skipped. Raises FolderNotFound when the
    folder is missing or unreadable.
    """
    segments = split_slug(slug)
    current = join_slug(segments)
    directory = Path(root).joinpath(*segments)

    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        logger.debug(f"Cannot list {directory}: {e}")
        raise FolderNotFound(current) from e

    listing = FolderListing(path=current)
    for entry in entries:
        if not _portable_name(entry.name, directory):
            continue
        child = join_slug(segments + [entry.name])
        if entry.is_dir(follow_symlinks=False):
            listing.folders.append(FolderEntry(name=entry.name, path=child))
        elif entry.is_file() and is_pdf_name(entry.name):
            try:
                size = entry.stat().st_size
            except OSError:
                size = 0
            listing.files.append(FileEntry(name=entry.name, path=child, size=size))

    listing.folders.sort(key=lambda f: _sort_key(f.name))
    listing.files.sort(key=lambda f: _sort_key(f.name))
    return listing
