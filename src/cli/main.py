"""moddoc CLI."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from adapters.json_exporter import export_documentation_json
from cli import doctor
from cli.ui_components import (
    build_subdirs_table,
    build_summary_panel,
    build_symbols_table,
    build_versions_table,
    print_banner,
)
from core.config import AppSettings
from core.errors import ModdocError
from core.logging import setup_logging
from core.services.doc_service import DocService

app = typer.Typer(no_args_is_help=True, help="Documentation for Go modules served by a module proxy.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.command()
def doc(
    import_path: str = typer.Argument(..., help="Import path, e.g. golang.org/x/text/language."),
    version: str = typer.Argument(..., help="Module version, e.g. v0.14.0."),
    json_out: Path | None = typer.Option(None, "--json", help="Write the result as JSON to this path."),
    proxy_url: str | None = typer.Option(None, "--proxy", help="Override MODDOC_PROXY_URL."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the banner."),
) -> None:
    """Resolve, download and document IMPORT_PATH at VERSION."""

    settings = AppSettings()
    if proxy_url:
        settings = settings.model_copy(update={"proxy_url": proxy_url.rstrip("/")})
    setup_logging(settings.log_level)

    if not quiet:
        print_banner(_console)

    service = DocService(settings)
    try:
        with _console.status(f"Fetching {import_path}@{version}..."):
            result = asyncio.run(service.get_doc(import_path, version))
    except ModdocError as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    _console.print(build_summary_panel(result))
    _console.print(build_symbols_table(result))
    if result.subdirs:
        _console.print(build_subdirs_table(result))
    if result.versions:
        _console.print(build_versions_table(result))

    if json_out is not None:
        path = export_documentation_json(doc=result, output_path=json_out)
        _console.print(f"[green]Saved JSON to:[/green] {path}")


def run() -> None:
    app()
