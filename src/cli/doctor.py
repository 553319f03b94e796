"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.proxy_client import ProxyClient
from core.config import AppSettings, write_user_env_vars
from core.errors import TransportError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

PROBE_MODULE = "golang.org/x/text"


async def _check_proxy(settings: AppSettings, module_path: str = PROBE_MODULE) -> tuple[bool, str]:
    async with build_async_client(settings) as client:
        proxy = ProxyClient(settings.proxy_url, client)
        try:
            body = await proxy.fetch_list(module_path)
        except TransportError as exc:
            return False, str(exc)
    if body is None:
        return False, f"no version list for {module_path}"
    return True, f"{len(body.splitlines())} versions of {module_path}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="moddoc Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Proxy URL", "OK", settings.proxy_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds}s")
    table.add_row("Request deadline", "OK", f"{settings.request_timeout_seconds}s")
    table.add_row("Scratch root", "OK", str(settings.scratch_root or "system temp dir"))

    ok_proxy, detail_proxy = asyncio.run(_check_proxy(settings))
    table.add_row("Proxy connectivity", "OK" if ok_proxy else "FAIL", detail_proxy)

    _console.print(table)

    if not ok_proxy:
        _console.print(
            "\n[yellow]Note:[/yellow] set MODDOC_PROXY_URL or run `moddoc doctor configure` "
            "to point at a reachable module proxy."
        )


@app.command()
def configure(
    proxy_url: str = typer.Option(None, help="Module proxy base URL."),
) -> None:
    """Store the proxy URL in the user config .env."""

    if proxy_url is None:
        proxy_url = typer.prompt(
            "Proxy URL",
            default=AppSettings().proxy_url,
            show_default=True,
        )
    proxy_url = proxy_url.strip().rstrip("/")
    if not proxy_url.startswith(("http://", "https://")):
        raise typer.BadParameter("proxy URL must start with http:// or https://")

    env_path = write_user_env_vars({"MODDOC_PROXY_URL": proxy_url})
    _console.print(f"[green]Saved proxy config to:[/green] {env_path}")
