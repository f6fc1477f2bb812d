#!/usr/bin/env python3
"""
CLI for the AcademiaDrive explorer.

Usage:
    python -m explorer.cli build        # Walk the content root, write the manifest
    python -m explorer.cli export       # Render static pages from the manifest
    python -m explorer.cli serve        # Serve listings from the manifest
    python -m explorer.cli status       # Show manifest summary
    python -m explorer.cli ls [PATH]    # Show one folder listing
    python -m explorer.cli links        # Show the external link mapping
"""

import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

load_dotenv()

from .config import Config
from .errors import ExplorerError, FolderNotFound
from .export import export_site
from .links import load_links
from .manifest import Manifest, build_manifest, read_manifest, write_manifest
from .render import format_size

app = typer.Typer(help="AcademiaDrive folder explorer")
console = Console()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(message)s",
    datefmt="%H:%M:%S"
)


def get_config(
    content_root: Path | None = None,
    manifest_path: Path | None = None,
) -> Config:
    """Load config from environment, applying CLI overrides."""
    config = Config.from_env()
    if content_root is not None:
        config.content_root = content_root
    if manifest_path is not None:
        config.manifest_path = manifest_path
    return config


def load_manifest(config: Config) -> Manifest:
    """Read the manifest or exit with a hint to build it."""
    try:
        manifest = read_manifest(config.manifest_path)
    except ExplorerError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    if manifest is None:
        console.print(f"[red]Error: no manifest at {config.manifest_path}[/red]")
        console.print("[dim]Run 'python -m explorer.cli build' first[/dim]")
        raise typer.Exit(1)
    return manifest


@app.command()
def build(
    root: Path = typer.Option(None, "--root", help="Content root (default: CONTENT_ROOT)"),
    manifest: Path = typer.Option(None, "--manifest", help="Manifest output path"),
    progress: bool = typer.Option(False, help="Show a progress bar"),
):
    """Walk the content root and snapshot every folder listing."""
    config = get_config(root, manifest)

    console.print(f"[bold]Building manifest[/bold]")
    console.print(f"  Root: {config.content_root}")
    console.print(f"  Manifest: {config.manifest_path}")
    console.print()

    try:
        result = build_manifest(config.content_root, progress=progress)
    except ExplorerError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    write_manifest(result, config.manifest_path)
    console.print(
        f"[green]Wrote {len(result.folders)} pages, {result.file_count} PDFs "
        f"({format_size(result.total_bytes)})[/green]"
    )


@app.command()
def export(
    out: Path = typer.Option(None, "--out", help="Output folder (default: EXPORT_DIR)"),
    manifest: Path = typer.Option(None, "--manifest", help="Manifest path"),
    copy_files: bool = typer.Option(False, help="Copy the PDFs into the export"),
    progress: bool = typer.Option(True, help="Show a progress bar"),
):
    """Render one static page per folder from the manifest."""
    config = get_config(manifest_path=manifest)
    snapshot = load_manifest(config)
    out_dir = out or config.export_dir

    written = export_site(
        snapshot,
        out_dir,
        load_links(config.links_path),
        explorer_prefix=config.explorer_prefix,
        files_prefix=config.files_prefix,
        title=config.site_title,
        copy_files=copy_files,
        progress=progress,
    )
    console.print(f"[green]Exported {written} pages to {out_dir}[/green]")


@app.command()
def serve(
    host: str = typer.Option(None, help="Bind address (default: HOST)"),
    port: int = typer.Option(None, help="Port (default: PORT)"),
    manifest: Path = typer.Option(None, "--manifest", help="Manifest path"),
):
    """Serve listings and PDF downloads from the manifest."""
    import uvicorn
    from .web import create_app

    config = get_config(manifest_path=manifest)
    if host:
        config.host = host
    if port:
        config.port = port

    console.print(f"[bold]{config.site_title}[/bold]")
    console.print(f"  Manifest: {config.manifest_path}")
    console.print(f"  URL: http://{config.host}:{config.port}{config.explorer_prefix}")
    console.print()

    uvicorn.run(create_app(config), host=config.host, port=config.port)


@app.command()
def status(
    manifest: Path = typer.Option(None, "--manifest", help="Manifest path"),
):
    """Show a summary of the current manifest."""
    config = get_config(manifest_path=manifest)
    snapshot = load_manifest(config)

    table = Table(title="Manifest")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("content root", snapshot.content_root)
    table.add_row("generated", snapshot.generated_at)
    table.add_row("pages", str(len(snapshot.folders)))
    table.add_row("pdfs", str(snapshot.file_count))
    table.add_row("size", format_size(snapshot.total_bytes))

    empty = sum(1 for listing in snapshot.folders.values() if listing.is_empty)
    table.add_row("empty folders", str(empty), style="yellow" if empty else None)

    console.print(table)


@app.command()
def ls(
    path: str = typer.Argument("", help="Folder path relative to the content root"),
    manifest: Path = typer.Option(None, "--manifest", help="Manifest path"),
):
    """Show the listing for one folder."""
    config = get_config(manifest_path=manifest)
    snapshot = load_manifest(config)

    try:
        listing = snapshot.listing(path)
    except FolderNotFound as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"/{listing.path}")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("Size", justify="right")

    for folder in listing.folders:
        table.add_row("folder", folder.name, "", style="blue")
    for f in listing.files:
        table.add_row("pdf", f.name, format_size(f.size))

    if listing.is_empty:
        console.print("[yellow]Empty folder[/yellow]")
        return
    console.print(table)


@app.command()
def links():
    """Show the external link mapping."""
    config = get_config()
    mapping = load_links(config.links_path)
    if not mapping:
        console.print(f"[yellow]No links loaded from {config.links_path}[/yellow]")
        return

    table = Table(title=f"Links ({len(mapping)})")
    table.add_column("Path")
    table.add_column("URL")
    for key, url in sorted(mapping.items()):
        table.add_row(key, url)
    console.print(table)


def main():
    app()


if __name__ == "__main__":
    main()
