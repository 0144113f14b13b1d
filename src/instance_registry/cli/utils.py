"""CLI utility functions shared across commands."""

import importlib
from collections.abc import Callable
from typing import Any

import typer
from rich.console import Console

console = Console()

# Compact format: level + message, no timestamps
CLI_LOG_FORMAT = "<level>{level: <8}</level> | <level>{message}</level>"


def load_target(target: str) -> Callable[..., Any]:
    """Import a callable given as ``module.path:attribute``.

    Args:
        target: Import path of the callable, e.g. ``myapp.di:register_all_services``

    Returns:
        The imported callable

    Raises:
        typer.Exit: If the target is malformed, cannot be imported or is not callable
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        console.print(f"[red]Error: target must look like 'module:function', got: {target}[/red]")
        raise typer.Exit(1)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        console.print(f"[red]Error: cannot import module '{module_name}': {e}[/red]")
        raise typer.Exit(1) from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            console.print(f"[red]Error: '{module_name}' has no attribute '{attr_path}'[/red]")
            raise typer.Exit(1) from e

    if not callable(obj):
        console.print(f"[red]Error: {target} is not callable[/red]")
        raise typer.Exit(1)

    return obj
