# render.py
"""
HTML rendering for folder listings.

render_listing() is a pure function of (path segments, folder entries, file
entries, link mapping). It is shared by the static exporter and the web app.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from urllib.parse import quote

from .tree import FileEntry, FolderEntry, is_pdf_name

DEFAULT_TITLE = "AcademiaDrive Explorer"
DEFAULT_EXPLORER_PREFIX = "/explorer"
DEFAULT_FILES_PREFIX = "/academiadrive"


@dataclass
class Crumb:
    label: str
    href: str
    current: bool = False


def url_for(prefix: str, segments: list[str]) -> str:
    """Percent-encoded URL for a path under a prefix. Names keep their case."""
    path = "/".join(quote(s, safe="") for s in segments)
    if not path:
        return prefix or "/"
    return f"{prefix}/{path}"


def breadcrumbs(slug: list[str], prefix: str = "") -> list[Crumb]:
    """
    Root crumb followed by one crumb per segment, each linking to its
    cumulative path. The last crumb is the current folder.
    """
    crumbs = [Crumb("Root", url_for(prefix, []))]
    for i, segment in enumerate(slug):
        crumbs.append(Crumb(segment, url_for(prefix, slug[: i + 1])))
    crumbs[-1].current = True
    return crumbs


def format_size(size: int) -> str:
    """Human-readable byte count (1024-based)."""
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            if unit == "B":
                return f"{int(value)} B"
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def display_name(filename: str) -> str:
    """File name without its trailing '.pdf'."""
    if is_pdf_name(filename) and len(filename) > 4:
        return filename[:-4]
    return filename


STYLE = """
    * { box-sizing: border-box; }
    body {
        font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
        background: linear-gradient(135deg, #f9fafb, #f3f4f6);
        color: #374151;
        margin: 0;
        padding: 32px 16px;
        min-height: 100vh;
    }
    main { max-width: 1100px; margin: 0 auto; }
    header.site { text-align: center; margin-bottom: 32px; }
    header.site h1 { color: #2563eb; font-size: 32px; margin: 0 0 8px 0; }
    header.site p { color: #6b7280; margin: 0; }
    a { color: #2563eb; text-decoration: none; }
    a:hover { color: #1e40af; }
    nav.breadcrumbs {
        background: white;
        border-radius: 8px;
        padding: 12px;
        margin-bottom: 24px;
        font-size: 14px;
        box-shadow: 0 1px 2px rgba(0,0,0,0.05);
    }
    nav.breadcrumbs .sep { color: #9ca3af; margin: 0 8px; }
    nav.breadcrumbs .current { color: #374151; font-weight: 600; }
    .panel {
        background: white;
        border-radius: 12px;
        box-shadow: 0 4px 12px rgba(0,0,0,0.08);
        overflow: hidden;
    }
    .panel-head {
        display: flex;
        align-items: center;
        padding: 16px;
        background: #f9fafb;
        border-bottom: 1px solid #f3f4f6;
    }
    .panel-head .counts {
        margin-left: auto;
        font-size: 12px;
        color: #6b7280;
        background: #f3f4f6;
        padding: 4px 8px;
        border-radius: 4px;
    }
    section { padding: 16px; }
    section + section { border-top: 1px solid #f3f4f6; }
    section h2 { font-size: 18px; margin: 0 0 12px 0; }
    .grid { display: grid; gap: 12px; }
    .grid.folders { grid-template-columns: repeat(auto-fill, minmax(170px, 1fr)); }
    .grid.files { grid-template-columns: repeat(auto-fill, minmax(280px, 1fr)); }
    .tile {
        border: 1px solid #e5e7eb;
        border-radius: 8px;
        padding: 16px;
        display: block;
        color: #374151;
    }
    .tile:hover { box-shadow: 0 4px 8px rgba(0,0,0,0.08); }
    .folder-tile { text-align: center; }
    .folder-tile:hover { border-color: #93c5fd; background: #eff6ff; }
    .file-tile:hover { border-color: #86efac; background: #f0fdf4; }
    .tile .name { font-weight: 600; font-size: 14px; overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
    .tile .meta { font-size: 12px; color: #6b7280; margin-top: 4px; }
    .external { font-size: 12px; margin-top: 4px; display: inline-block; }
    .empty { padding: 48px; text-align: center; }
    .empty h3 { margin: 0 0 4px 0; }
    .empty p { color: #6b7280; margin: 0; }
    footer { margin-top: 32px; text-align: center; color: #6b7280; font-size: 14px; }
"""


def _page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>{html.escape(title)}</title>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>{STYLE}</style>
</head>
<body>
<main>
    <header class="site">
        <h1>{html.escape(title)}</h1>
        <p>Browse through our organized collection of study materials and resources</p>
    </header>
{body}
    <footer>{html.escape(title)} &bull; All materials are for educational purposes</footer>
</main>
</body>
</html>
"""


def _render_breadcrumbs(crumbs: list[Crumb]) -> str:
    parts = []
    for crumb in crumbs:
        label = html.escape(crumb.label)
        if crumb.current:
            parts.append(f'<span class="crumb current" aria-current="page">{label}</span>')
        else:
            parts.append(f'<a class="crumb" href="{html.escape(crumb.href)}">{label}</a>')
    sep = '<span class="sep">&rsaquo;</span>'
    return f'    <nav class="breadcrumbs">{sep.join(parts)}</nav>\n'


def _external(url: str | None) -> str:
    if not url:
        return ""
    return (
        f'<a class="external" href="{html.escape(url)}" target="_blank" '
        f'rel="noopener">Open in Drive</a>'
    )


def _render_folders(
    slug: list[str], folders: list[FolderEntry], links: dict[str, str], prefix: str
) -> str:
    tiles = []
    for folder in folders:
        href = url_for(prefix, slug + [folder.name])
        tiles.append(
            f'<div class="folder-item">'
            f'<a class="tile folder-tile" href="{html.escape(href)}">'
            f'<div class="name">{html.escape(folder.name)}</div></a>'
            f'{_external(links.get(folder.path))}</div>'
        )
    return (
        '    <section class="folders">\n'
        "        <h2>Folders</h2>\n"
        f'        <div class="grid folders">{"".join(tiles)}</div>\n'
        "    </section>\n"
    )


def _render_files(
    slug: list[str], files: list[FileEntry], links: dict[str, str], prefix: str
) -> str:
    tiles = []
    for f in files:
        href = url_for(prefix, slug + [f.name])
        tiles.append(
            f'<div class="file-item">'
            f'<a class="tile file-tile" href="{html.escape(href)}" download>'
            f'<div class="name" title="{html.escape(f.name)}">{html.escape(display_name(f.name))}</div>'
            f'<div class="meta">PDF Document &bull; {format_size(f.size)}</div></a>'
            f'{_external(links.get(f.path))}</div>'
        )
    return (
        '    <section class="files">\n'
        "        <h2>Study Materials</h2>\n"
        f'        <div class="grid files">{"".join(tiles)}</div>\n'
        "    </section>\n"
    )


EMPTY_STATE = """    <div class="empty">
        <h3>Empty Folder</h3>
        <p>This directory doesn't contain any folders or PDF files yet.</p>
    </div>
"""


def render_listing(
    slug: list[str],
    folders: list[FolderEntry],
    files: list[FileEntry],
    links: dict[str, str] | None = None,
    *,
    explorer_prefix: str = DEFAULT_EXPLORER_PREFIX,
    files_prefix: str = DEFAULT_FILES_PREFIX,
    title: str = DEFAULT_TITLE,
) -> str:
    """Render one folder listing page."""
    slug = list(slug)
    links = links or {}

    heading = html.escape(" / ".join(slug)) if slug else "All Categories"
    current_link = _external(links.get("/".join(slug))) if slug else ""

    body = [_render_breadcrumbs(breadcrumbs(slug, explorer_prefix))]
    body.append('    <div class="panel">\n')
    body.append(
        f'    <div class="panel-head"><span class="current-path">{heading}</span>'
        f"{current_link}"
        f'<span class="counts">{len(folders)} folders &bull; {len(files)} files</span></div>\n'
    )
    if folders:
        body.append(_render_folders(slug, folders, links, explorer_prefix))
    if files:
        body.append(_render_files(slug, files, links, files_prefix))
    if not folders and not files:
        body.append(EMPTY_STATE)
    body.append("    </div>\n")

    return _page(title, "".join(body))


def render_not_found(
    slug: list[str] | str,
    *,
    explorer_prefix: str = DEFAULT_EXPLORER_PREFIX,
    title: str = DEFAULT_TITLE,
) -> str:
    """Page shown for a folder that is not in the content tree."""
    label = slug if isinstance(slug, str) else "/".join(slug)
    body = (
        '    <div class="panel"><div class="empty">\n'
        "        <h3>Folder Not Found</h3>\n"
        f"        <p>There is no folder at /{html.escape(label)}.</p>\n"
        f'        <p><a href="{html.escape(url_for(explorer_prefix, []))}">Back to all categories</a></p>\n'
        "    </div></div>\n"
    )
    return _page(title, body)
