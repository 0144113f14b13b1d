"""Identifiers for registry entries.

Any hashable value can name an abstraction. Classes are the common case; a
``ServiceKey`` is available when there is no class to key by, or when one
class needs several independent registrations.

```python
from instance_registry import ServiceKey, get_registry

PRIMARY_DB = ServiceKey[Database]("primary_db")
REPLICA_DB = ServiceKey[Database]("replica_db")

registry = get_registry()
registry.register_factory(PRIMARY_DB, lambda: Database("primary"))
db = registry.get(PRIMARY_DB)  # typed as Database
```
"""

from collections.abc import Hashable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ServiceKey(Generic[T]):
    """Opaque, typed registry identifier.

    Keys compare and hash by identity: two keys with the same name are still
    different identifiers. The type parameter only informs static type
    checkers about what ``Registry.get`` returns.
    """

    __slots__ = ("name",)

    def __init__(self, name: str):
        if not name:
            raise ValueError("ServiceKey name must not be empty")
        self.name = name

    def __repr__(self) -> str:
        return f"ServiceKey({self.name!r})"


def describe_identifier(identifier: Any) -> str:
    """Return a human-readable name for an identifier, for messages and logs."""
    if isinstance(identifier, type):
        return f"{identifier.__module__}.{identifier.__qualname__}"
    if isinstance(identifier, ServiceKey):
        return f"ServiceKey {identifier.name!r}"
    return repr(identifier)


def ensure_hashable(identifier: Any) -> Hashable:
    """Validate that an identifier can be used as a registry key.

    Raises:
        TypeError: If the identifier is not hashable
    """
    try:
        hash(identifier)
    except TypeError as e:
        raise TypeError(f"Registry identifier must be hashable, got {type(identifier).__name__}") from e
    return identifier
