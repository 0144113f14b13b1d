"""CLI entry point.

Usage:
    python -m instance_registry.cli check myapp.di:register_all_services
    instance-registry check myapp.di:register_all_services
    instance-registry version
"""

from instance_registry.cli.app import app
from instance_registry.cli.utils import CLI_LOG_FORMAT
from instance_registry.logging import setup_logging
from instance_registry.settings import get_settings


def main() -> None:
    """CLI entry point with logging configuration."""
    settings = get_settings()
    setup_logging(settings.log_level, colorize=settings.log_colorize, fmt=CLI_LOG_FORMAT)
    app()


if __name__ == "__main__":
    main()
