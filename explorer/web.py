# web.py
"""
Web server for folder listings.

Run with: python -m explorer.cli serve
Or: uvicorn --factory explorer.web:create_app --host 0.0.0.0 --port 8000

Reads from:
- the manifest written by `explorer build` (folder listings)
- the link mapping JSON (external storage links)

The content tree itself is only touched to stream PDFs that the manifest
lists.
"""

import logging
from dataclasses import asdict
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse

from .config import Config
from .errors import FolderNotFound, ManifestError
from .links import LinkCache
from .manifest import Manifest, read_manifest
from .render import render_listing, render_not_found
from .tree import resolve, split_slug

logger = logging.getLogger(__name__)

NO_MANIFEST_MESSAGE = "No manifest found. Run 'explorer build' first."


class SiteState:
    """Manifest and link cache shared by every request."""

    def __init__(self, config: Config):
        self.config = config
        self.links = LinkCache(config.links_path)
        self.manifest: Manifest | None = None
        self.reload()

    def reload(self) -> Manifest | None:
        """Re-read the manifest and drop cached links."""
        try:
            self.manifest = read_manifest(self.config.manifest_path)
        except ManifestError as e:
            logger.error(str(e))
            self.manifest = None
        if self.manifest is None:
            logger.warning(f"{NO_MANIFEST_MESSAGE} ({self.config.manifest_path})")
        else:
            logger.info(
                f"Loaded manifest: {len(self.manifest.folders)} pages, "
                f"generated {self.manifest.generated_at}"
            )
        self.links.invalidate()
        return self.manifest


def create_app(config: Config | None = None) -> FastAPI:
    config = config or Config.from_env()
    state = SiteState(config)

    app = FastAPI(title=config.site_title)
    app.state.site = state

    def listing_page(slug: str) -> HTMLResponse:
        manifest = state.manifest
        if manifest is None:
            return HTMLResponse(NO_MANIFEST_MESSAGE, status_code=503)
        try:
            listing = manifest.listing(slug)
        except FolderNotFound:
            return HTMLResponse(
                render_not_found(
                    slug.strip("/"),
                    explorer_prefix=config.explorer_prefix,
                    title=config.site_title,
                ),
                status_code=404,
            )
        return HTMLResponse(
            render_listing(
                split_slug(listing.path),
                listing.folders,
                listing.files,
                state.links.get(),
                explorer_prefix=config.explorer_prefix,
                files_prefix=config.files_prefix,
                title=config.site_title,
            )
        )

    def listing_json(slug: str) -> JSONResponse:
        manifest = state.manifest
        if manifest is None:
            return JSONResponse(
                {"status": "no_data", "message": NO_MANIFEST_MESSAGE}, status_code=503
            )
        try:
            listing = manifest.listing(slug)
        except FolderNotFound:
            return JSONResponse(
                {"status": "not_found", "path": slug.strip("/")}, status_code=404
            )
        return JSONResponse({"status": "ok", **asdict(listing)})

    @app.get("/data/links.json")
    def links_json() -> JSONResponse:
        """External storage links (empty object when unavailable)."""
        return JSONResponse(state.links.get())

    @app.get("/api/folders")
    def api_root_folder() -> JSONResponse:
        return listing_json("")

    @app.get("/api/folders/{slug:path}")
    def api_folder(slug: str) -> JSONResponse:
        """Listing for one folder as JSON."""
        return listing_json(slug)

    @app.post("/api/reload")
    def api_reload() -> JSONResponse:
        """Re-read the manifest and invalidate the link cache."""
        manifest = state.reload()
        if manifest is None:
            return JSONResponse(
                {"status": "no_data", "message": NO_MANIFEST_MESSAGE}, status_code=503
            )
        return JSONResponse({
            "status": "ok",
            "pages": len(manifest.folders),
            "files": manifest.file_count,
            "generated_at": manifest.generated_at,
        })

    # Must precede the explorer catch-all, which is "/{slug:path}" when the
    # explorer prefix is empty
    @app.get(config.files_prefix + "/{file_path:path}")
    def download(file_path: str):
        """Serve a listed PDF as an attachment."""
        manifest = state.manifest
        if manifest is None:
            return JSONResponse({"detail": NO_MANIFEST_MESSAGE}, status_code=503)
        try:
            entry = manifest.find_file(file_path)
        except FolderNotFound:
            entry = None
        if entry is None:
            return JSONResponse({"detail": "Not Found"}, status_code=404)

        location = resolve(Path(manifest.content_root), entry.path)
        if not location.is_file():
            logger.warning(f"Listed PDF missing on disk: {location}")
            return JSONResponse({"detail": "Not Found"}, status_code=404)
        return FileResponse(location, media_type="application/pdf", filename=entry.name)

    @app.get("/", response_class=HTMLResponse)
    def index():
        return listing_page("")

    if config.explorer_prefix:
        @app.get(config.explorer_prefix, response_class=HTMLResponse)
        def explorer_root():
            return listing_page("")

    @app.get(config.explorer_prefix + "/{slug:path}", response_class=HTMLResponse)
    def explorer(slug: str):
        return listing_page(slug)

    return app


if __name__ == "__main__":
    import uvicorn
    from dotenv import load_dotenv

    load_dotenv()
    config = Config.from_env()
    uvicorn.run(create_app(config), host=config.host, port=config.port)
