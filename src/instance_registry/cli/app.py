"""Main CLI application."""

from importlib.metadata import PackageNotFoundError, version

import typer
from loguru import logger
from rich.table import Table

from instance_registry.cli.utils import CLI_LOG_FORMAT, console, load_target
from instance_registry.diagnostics import RegistryReport, check_registry
from instance_registry.logging import setup_logging
from instance_registry.registry import Registry
from instance_registry.settings import LOG_LEVELS, get_settings

DISTRIBUTION_NAME = "instance-registry"

app = typer.Typer(
    name="instance-registry",
    help="Instance registry CLI - developer tools",
    no_args_is_help=True,
)


def _print_report(report: RegistryReport) -> None:
    table = Table(title="Registry check")
    table.add_column("Identifier", style="cyan")
    table.add_column("State")
    table.add_column("Result")
    table.add_column("Details")
    table.add_column("Time (ms)", justify="right")

    for result in report.results:
        status = "[green]ok[/green]" if result.success else "[red]failed[/red]"
        details = result.instance_type if result.success else result.error
        elapsed = f"{result.execution_time_ms:.3f}" if result.execution_time_ms is not None else "-"
        table.add_row(result.identifier, str(result.initial_state), status, details or "", elapsed)

    console.print(table)


def _override_log_level(log_level: str) -> None:
    level = log_level.upper()
    if level not in LOG_LEVELS:
        console.print(f"[red]Error: Invalid log level: {log_level}. Must be one of: {', '.join(sorted(LOG_LEVELS))}[/red]")
        raise typer.Exit(1)
    setup_logging(level, colorize=get_settings().log_colorize, fmt=CLI_LOG_FORMAT)

@app.command()
def check(
    target: str = typer.Argument(..., help="Bootstrap function as 'module:function', called with a fresh Registry"),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Override the configured log level"),
):
    """Populate a fresh registry with a bootstrap function and resolve every entry.

    Exits with code 1 if the bootstrap function fails or any entry cannot be
    resolved.

    Examples:
        instance-registry check myapp.di:register_all_services
        instance-registry check myapp.di:register_all_services --log-level debug
    """
    if log_level is not None:
        _override_log_level(log_level)

    bootstrap = load_target(target)
    registry = Registry()

    console.print(f"[bold]Populating registry with {target}...[/bold]")
    try:
        bootstrap(registry)
    except Exception as e:
        logger.opt(exception=e).debug(f"Bootstrap {target} failed")
        console.print(f"[red]Error: {target} failed: {type(e).__name__}: {e}[/red]")
        raise typer.Exit(1) from None

    if not len(registry):
        console.print("[yellow]No entries registered[/yellow]")
        return

    report = check_registry(registry)
    _print_report(report)

    if not report.success:
        console.print(f"\n[red]{report.failed} of {report.total} entries failed to resolve[/red]")
        raise typer.Exit(1)

    console.print(f"\n[green]All {report.total} entries resolved[/green]")


@app.command(name="version")
def show_version():
    """Print the installed package version."""
    try:
        console.print(version(DISTRIBUTION_NAME))
    except PackageNotFoundError:
        console.print("0.1.0-dev")
