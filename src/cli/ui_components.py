"""Componentes de UI para CLI (Rich).

Separa los detalles visuales de la lógica de comandos para poder reutilizar
tablas/paneles en varios comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Documentation


def print_banner(console: Console) -> None:
    title = Text("moddoc", style="bold cyan")
    subtitle = Text("Go module documentation from a module proxy", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_summary_panel(doc: Documentation) -> Panel:
    """Panel con la cabecera del paquete (nombre, módulo, versión)."""

    title = Text(f"package {doc.package_name or '?'}", style="bold yellow")
    body = Text()
    body.append("import ", style="dim")
    body.append(f'"{doc.import_path}"\n\n')
    body.append(f"Module:    {doc.module_root}\n")
    version_line = f"Version:   {doc.module_version}"
    if doc.latest:
        version_line += " (latest)"
    body.append(version_line + "\n")
    if doc.published_time:
        body.append(f"Published: {doc.published_time:%Y-%m-%d}\n")
    if doc.licenses:
        types = sorted({t for lic in doc.licenses for t in lic.types}) or ["unknown"]
        body.append(f"License:   {', '.join(types)}\n")
    if doc.package_doc:
        body.append("\n" + doc.package_doc.strip() + "\n", style="dim")
    return Panel(body, title=title, border_style="yellow")


def build_symbols_table(doc: Documentation) -> Table:
    table = Table(title="Index")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Signature", style="white")
    for value in doc.constants:
        table.add_row("const", value.signature_string.splitlines()[0] if value.signature_string else value.name)
    for value in doc.variables:
        table.add_row("var", value.signature_string.splitlines()[0] if value.signature_string else value.name)
    for func in doc.funcs:
        table.add_row("func", func.signature_string)
    for decl in doc.types:
        table.add_row("type", f"type {decl.name} {decl.type}".rstrip())
        for method in decl.methods:
            table.add_row("  method", method.signature_string)
    return table


def build_versions_table(doc: Documentation, limit: int = 15) -> Table:
    table = Table(title="Versions")
    table.add_column("Version", style="magenta")
    shown = doc.versions[-limit:]
    for version in reversed(shown):
        style = "bold green" if version == doc.module_version else None
        table.add_row(version, style=style)
    if len(doc.versions) > limit:
        table.caption = f"{len(doc.versions) - limit} older versions hidden"
    return table


def build_subdirs_table(doc: Documentation) -> Table:
    table = Table(title="Directories")
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Synopsis", style="dim")
    for subdir in doc.subdirs:
        table.add_row(subdir.name, subdir.synopsis)
    return table
