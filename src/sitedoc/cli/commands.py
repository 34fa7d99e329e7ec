"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from sitedoc.config import Settings, load_config
from sitedoc.core.document import DocumentRecord
from sitedoc.core.pipeline import run_read, write_documents
from sitedoc.core.site import Site
from sitedoc.core.utils.log import setup_logging
from sitedoc.errors import SitedocError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def build_cmd(
    source: Annotated[Optional[str], typer.Argument(help="Site source directory")] = None,
    dest: Annotated[Optional[str], typer.Option("--dest", help="Output directory")] = None,
    strict: Annotated[Optional[bool], typer.Option("--strict/--no-strict", help="Fail on any front matter error")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Reader threads")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Read every collection, then render and write the publishable documents."""
    setup_logging("DEBUG" if verbose else "WARNING")
    settings = _settings(overrides={
        "source": source, "destination": dest,
        "strict_front_matter": strict, "max_workers": workers,
    })
    site = Site(settings)
    output_dir = Path(settings.destination)

    try:
        docs = run_read(site)
    except SitedocError as e:
        _fail("Read failed", e)
    typer.echo(f"Read {len(docs)} document(s) from {site.source}/")

    try:
        results = write_documents(site, docs, output_dir)
    except (OSError, SitedocError) as e:
        _fail("Write failed", e)
    for doc, out_file in results:
        typer.echo(f"  {doc.relative_path} -> {out_file}")
    typer.echo(f"Wrote {len(results)} document(s) to {output_dir}/")


def show_cmd(
    path: Annotated[str, typer.Argument(help="Content file to resolve")],
    collection: Annotated[str, typer.Option("--collection", help="Collection label the file belongs to")] = "posts",
    source: Annotated[Optional[str], typer.Option("--source", help="Site source directory")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
    ):
    """Read one document and print its resolved record as JSON."""
    setup_logging("DEBUG" if verbose else "WARNING")
    settings = _settings(overrides={"source": source})
    if not Path(path).is_file():
        _fail(f"No such file: {path}")

    site = Site(settings)
    doc = DocumentRecord(path, site, site.collection(collection))
    try:
        doc.read()
        record = doc.to_dict(settings.destination)
    except SitedocError as e:
        _fail(f"Could not resolve {path}", e)
    typer.echo(json.dumps(record, indent=2, ensure_ascii=False, default=str))
