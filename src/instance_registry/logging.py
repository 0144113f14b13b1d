"""Logging configuration for applications embedding the registry."""

import logging
import sys

from loguru import logger

PACKAGE_NAME = "instance_registry"


class InterceptHandler(logging.Handler):
    """Intercept standard logging messages toward loguru."""

    def emit(self, record):
        # Get corresponding loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(log_level: str, colorize: bool = True, fmt: str | None = None) -> None:
    """Configure loguru and enable the registry's own log messages.

    Args:
        log_level: Log level to use (usually from settings)
        colorize: Whether to colorize output
        fmt: Optional loguru format string, loguru's default if omitted
    """
    log_level = log_level.upper()

    logger.remove()  # Remove default handler
    options = {"level": log_level, "colorize": colorize}
    if fmt is not None:
        options["format"] = fmt
    logger.add(sys.stderr, **options)

    # The package disables itself on import
    logger.enable(PACKAGE_NAME)
    logger.debug(f"Log level set to: {log_level}")

    # Redirect all standard logging to loguru
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
