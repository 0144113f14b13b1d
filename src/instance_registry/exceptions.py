"""Exceptions raised by the registry.

Every failure is a distinct, inspectable type carrying the identifier it
concerns, so callers can branch on the error kind instead of parsing messages.
"""

from collections.abc import Hashable

from .identifiers import describe_identifier


class RegistryError(Exception):
    """Base class for all registry errors."""

    def __init__(self, identifier: Hashable, message: str):
        self.identifier = identifier
        super().__init__(message)


class AlreadyRegisteredError(RegistryError):
    """Raised when a strict registration collides with an existing entry."""

    def __init__(self, identifier: Hashable):
        super().__init__(identifier, f"{describe_identifier(identifier)} is already registered")


class NotRegisteredError(RegistryError, LookupError):
    """Raised when an identifier has no entry.

    Used both by ``get`` on an unknown identifier and by ``REPLACE``
    registrations that have nothing to replace.
    """

    def __init__(self, identifier: Hashable, replacing: bool = False):
        self.replacing = replacing
        name = describe_identifier(identifier)
        if replacing:
            message = f"{name} is not yet registered, so it can't be replaced"
        else:
            message = f"{name} is not registered"
        super().__init__(identifier, message)


class ConstructionFailedError(RegistryError):
    """Raised when a registered factory fails while materializing its instance.

    The identifier stays pending, so a later ``get`` invokes the factory again.
    """

    def __init__(self, identifier: Hashable, error: BaseException):
        self.error = error
        super().__init__(
            identifier,
            f"Factory for {describe_identifier(identifier)} failed: {type(error).__name__}: {error}",
        )


class CircularResolutionError(RegistryError):
    """Raised when a factory requests its own identifier while it is being constructed."""

    def __init__(self, identifier: Hashable):
        super().__init__(identifier, f"{describe_identifier(identifier)} was requested while its own factory was running")


__all__ = [
    "AlreadyRegisteredError",
    "CircularResolutionError",
    "ConstructionFailedError",
    "NotRegisteredError",
    "RegistryError",
]
