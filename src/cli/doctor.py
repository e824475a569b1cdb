"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_broker(settings: AppSettings) -> tuple[bool, str]:
    """GET /version on the broker; any HTTP answer counts as reachable."""

    url = settings.broker_url.rstrip("/") + "/version"
    try:
        with build_client(settings) as client:
            response = client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _settings(ctx: typer.Context) -> AppSettings:
    return ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _settings(ctx)

    table = Table(title="orion-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Broker URL", "OK", settings.broker_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    ok_broker, detail_broker = _check_broker(settings)
    table.add_row("Broker connectivity", "OK" if ok_broker else "FAIL", detail_broker)

    _console.print(table)

    if not ok_broker:
        _console.print(
            "\n[yellow]Note:[/yellow] run `orion-client doctor setup-broker` or set ORION_CLIENT_BROKER_URL."
        )
        raise typer.Exit(code=1)


@app.command(name="setup-broker")
def setup_broker(ctx: typer.Context) -> None:
    """Interactive broker setup (stores config in the user config .env)."""

    settings = _settings(ctx)
    broker_url = typer.prompt("Broker URL", default=settings.broker_url, show_default=True).strip()
    timeout = typer.prompt(
        "HTTP timeout (seconds)",
        default=f"{settings.http_timeout_seconds:g}",
        show_default=True,
    ).strip()

    if not broker_url.startswith(("http://", "https://")):
        raise typer.BadParameter("broker URL must start with http:// or https://")
    try:
        if float(timeout) <= 0:
            raise ValueError(timeout)
    except ValueError as exc:
        raise typer.BadParameter("timeout must be a positive number") from exc

    env_path = write_user_env_vars(
        {
            "ORION_CLIENT_BROKER_URL": broker_url,
            "ORION_CLIENT_HTTP_TIMEOUT_SECONDS": timeout,
        }
    )

    _console.print(f"[green]Saved broker config to:[/green] {env_path}")
