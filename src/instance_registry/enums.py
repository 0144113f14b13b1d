"""Enums for the registry.

Kept in their own module so the CLI and tests can import them without pulling
in the registry itself.
"""

from enum import StrEnum


class RegisterPolicy(StrEnum):
    """Conflict rule applied when registering over an existing entry."""

    NONE = "none"  # Fail if already registered
    REPLACE = "replace"  # Fail if not yet registered
    SKIP_IF_REGISTERED = "skip_if_registered"
    ADD_OR_REPLACE = "add_or_replace"


class EntryState(StrEnum):
    """State of a registered identifier."""

    PENDING = "pending"
    RESOLVED = "resolved"
