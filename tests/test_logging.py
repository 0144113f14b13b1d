"""Tests for logging setup."""

import logging

from loguru import logger

from instance_registry import Registry
from instance_registry.logging import setup_logging


def test_setup_logging_enables_package_messages():
    messages: list[str] = []
    setup_logging("DEBUG", colorize=False)
    sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
    try:
        registry = Registry()
        registry.register_factory("answer", lambda: 42)
        registry.get("answer")
    finally:
        logger.remove(sink_id)
        logger.disable("instance_registry")

    assert any("Registered pending entry for 'answer'" in m for m in messages)
    assert any("Resolved 'answer' -> int" in m for m in messages)


def test_stdlib_logging_is_intercepted():
    messages: list[str] = []
    setup_logging("INFO", colorize=False)
    sink_id = logger.add(messages.append, level="INFO", format="{message}")
    try:
        logging.getLogger("some.library").warning("from stdlib")
    finally:
        logger.remove(sink_id)
        logger.disable("instance_registry")

    assert any("from stdlib" in m for m in messages)
