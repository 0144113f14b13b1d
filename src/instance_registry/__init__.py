"""Thread-safe, process-wide instance registry."""

from loguru import logger

from .enums import EntryState, RegisterPolicy
from .exceptions import (
    AlreadyRegisteredError,
    CircularResolutionError,
    ConstructionFailedError,
    NotRegisteredError,
    RegistryError,
)
from .identifiers import ServiceKey, describe_identifier
from .registry import Factory, Registry, get_registry

# Library code stays silent unless the application opts in via setup_logging()
logger.disable(__name__)

__all__ = [
    "AlreadyRegisteredError",
    "CircularResolutionError",
    "ConstructionFailedError",
    "EntryState",
    "Factory",
    "NotRegisteredError",
    "RegisterPolicy",
    "Registry",
    "RegistryError",
    "ServiceKey",
    "describe_identifier",
    "get_registry",
]
