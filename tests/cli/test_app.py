"""Tests for the instance-registry CLI."""

import importlib
import sys
import types

import pytest
from typer.testing import CliRunner

from instance_registry import Registry
from instance_registry.cli import app
from instance_registry.cli.utils import CLI_LOG_FORMAT, console
from instance_registry.settings import get_settings

# The package re-exports the Typer app under the submodule's name
cli_app = importlib.import_module("instance_registry.cli.app")
runner = CliRunner()


class Cache:
    pass


class Mailer:
    pass


def register_all(registry: Registry) -> None:
    registry.register_instance(Cache, Cache())
    registry.register_factory(Mailer, Mailer)


def register_broken(registry: Registry) -> None:
    def broken() -> Mailer:
        raise ValueError("missing SMTP host")

    registry.register_factory(Mailer, broken)


def register_nothing(registry: Registry) -> None:
    pass


def bootstrap_raises(registry: Registry) -> None:
    raise RuntimeError("config file missing")


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch):
    """Keep rich from wrapping long messages at the 80 column default."""
    monkeypatch.setattr(console, "width", 200)


@pytest.fixture
def bootstrap_module(monkeypatch: pytest.MonkeyPatch) -> str:
    """Expose the bootstrap functions above as an importable module."""
    module = types.ModuleType("fake_bootstrap")
    module.register_all = register_all
    module.register_broken = register_broken
    module.register_nothing = register_nothing
    module.bootstrap_raises = bootstrap_raises
    module.not_callable = 42
    monkeypatch.setitem(sys.modules, "fake_bootstrap", module)
    return "fake_bootstrap"


def test_check_success(bootstrap_module: str):
    result = runner.invoke(app, ["check", f"{bootstrap_module}:register_all"])
    assert result.exit_code == 0, result.output
    assert "All 2 entries resolved" in result.output


def test_check_reports_failures(bootstrap_module: str):
    result = runner.invoke(app, ["check", f"{bootstrap_module}:register_broken"])
    assert result.exit_code == 1
    assert "1 of 1 entries failed to resolve" in result.output


def test_check_empty_registry(bootstrap_module: str):
    result = runner.invoke(app, ["check", f"{bootstrap_module}:register_nothing"])
    assert result.exit_code == 0
    assert "No entries registered" in result.output


def test_check_bootstrap_failure(bootstrap_module: str):
    result = runner.invoke(app, ["check", f"{bootstrap_module}:bootstrap_raises"])
    assert result.exit_code == 1
    assert "config file missing" in result.output


@pytest.mark.parametrize(
    "target,expected",
    [
        ("no_colon_here", "must look like"),
        ("module_that_does_not_exist_xyz:func", "cannot import module"),
        ("fake_bootstrap:missing", "has no attribute"),
        ("fake_bootstrap:not_callable", "is not callable"),
    ],
)
def test_check_invalid_targets(bootstrap_module: str, target: str, expected: str):
    result = runner.invoke(app, ["check", target])
    assert result.exit_code == 1
    assert expected in result.output


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.output.strip()


def test_check_log_level_override_uses_cli_format(bootstrap_module: str, monkeypatch: pytest.MonkeyPatch):
    calls = []
    monkeypatch.setattr(cli_app, "setup_logging", lambda level, **kwargs: calls.append((level, kwargs)))

    result = runner.invoke(app, ["check", f"{bootstrap_module}:register_all", "--log-level", "debug"])

    assert result.exit_code == 0, result.output
    assert calls == [("DEBUG", {"colorize": get_settings().log_colorize, "fmt": CLI_LOG_FORMAT})]


def test_check_rejects_invalid_log_level(bootstrap_module: str):
    result = runner.invoke(app, ["check", f"{bootstrap_module}:register_all", "--log-level", "bogus"])
    assert result.exit_code == 1
    assert "Invalid log level: bogus" in result.output
