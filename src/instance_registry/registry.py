"""Thread-safe, process-wide instance registry.

Register a factory or a ready-made instance under an identifier, then ``get``
the single shared instance for it. Factories run lazily, at most once per
successful construction, even when many threads ask at the same time.

```python
from instance_registry import RegisterPolicy, get_registry

registry = get_registry()
registry.register_factory(EmailService, lambda: EmailService(smtp_host="localhost"))
registry.register_instance(Clock, SystemClock())

email = registry.get(EmailService)  # constructed here, cached from now on
assert registry.get(EmailService) is email

# Idempotent bootstrap code
registry.register_factory(EmailService, make_other_service, RegisterPolicy.SKIP_IF_REGISTERED)
```
"""

import threading
from collections.abc import Callable, Hashable
from concurrent.futures import Future
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, TypeAlias, TypeVar, overload

from loguru import logger

from .enums import EntryState, RegisterPolicy
from .exceptions import (
    AlreadyRegisteredError,
    CircularResolutionError,
    ConstructionFailedError,
    NotRegisteredError,
)
from .identifiers import ServiceKey, describe_identifier, ensure_hashable

T = TypeVar("T")

Factory: TypeAlias = Callable[[], T]


@dataclass(frozen=True, slots=True)
class _Entry:
    """A pending factory or a resolved instance."""

    state: EntryState
    value: Any


@dataclass(slots=True)
class _Construction:
    """A pending entry whose factory is currently running."""

    entry: _Entry
    owner: int
    future: Future = field(default_factory=Future)


class Registry:
    """Registry holding at most one instance per identifier.

    Each identifier maps to a single entry that is either pending (a factory
    that has not run yet) or resolved (the shared instance). Registration
    policies are therefore checked against whichever of the two is present:
    registering an instance for an identifier that already has a factory is a
    collision, just like registering the same factory twice.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._entries: dict[Hashable, _Entry] = {}
        self._in_flight: dict[Hashable, _Construction] = {}
        self._lock = threading.RLock()

    def register_factory(
        self,
        identifier: type[T] | ServiceKey[T] | Hashable,
        factory: Factory[T],
        policy: RegisterPolicy = RegisterPolicy.NONE,
    ) -> bool:
        """Register a factory that creates the instance on first ``get``.

        Args:
            identifier: The identifier consumers will request
            factory: Zero-argument callable producing the instance
            policy: Rule applied if the identifier is already registered

        Returns:
            True if the entry was written, False if skipped by ``SKIP_IF_REGISTERED``

        Raises:
            AlreadyRegisteredError: If policy is ``NONE`` and an entry exists
            NotRegisteredError: If policy is ``REPLACE`` and no entry exists
            TypeError: If the factory is not callable or the identifier is unhashable
        """
        if not callable(factory):
            raise TypeError(f"Factory for {describe_identifier(identifier)} must be callable: {factory!r}")
        return self._register(identifier, _Entry(EntryState.PENDING, factory), policy)

    def register_instance(
        self,
        identifier: type[T] | ServiceKey[T] | Hashable,
        instance: T,
        policy: RegisterPolicy = RegisterPolicy.NONE,
    ) -> bool:
        """Register an already constructed instance.

        The identifier is resolvable immediately; no factory is involved.
        Policies behave exactly as in ``register_factory``.
        """
        return self._register(identifier, _Entry(EntryState.RESOLVED, instance), policy)

    def _register(self, identifier: Hashable, entry: _Entry, policy: RegisterPolicy) -> bool:
        ensure_hashable(identifier)
        policy = RegisterPolicy(policy)
        name = describe_identifier(identifier)

        with self._lock:
            exists = identifier in self._entries
            match policy:
                case RegisterPolicy.NONE:
                    if exists:
                        raise AlreadyRegisteredError(identifier)
                case RegisterPolicy.REPLACE:
                    if not exists:
                        raise NotRegisteredError(identifier, replacing=True)
                case RegisterPolicy.SKIP_IF_REGISTERED:
                    if exists:
                        logger.trace(f"Skipping registration of {name}: already registered")
                        return False
                case RegisterPolicy.ADD_OR_REPLACE:
                    pass

            self._entries[identifier] = entry

        action = "Replaced" if exists else "Registered"
        logger.debug(f"{action} {entry.state} entry for {name} (policy={policy})")
        return True

    @overload
    def get(self, identifier: type[T] | ServiceKey[T]) -> T: ...

    @overload
    def get(self, identifier: Hashable) -> Any: ...

    def get(self, identifier):
        """Get the shared instance for an identifier, constructing it on first use.

        Args:
            identifier: The identifier the instance or factory was registered under

        Returns:
            The shared instance

        Raises:
            NotRegisteredError: If nothing is registered under the identifier
            ConstructionFailedError: If the factory raised; the entry stays pending
            CircularResolutionError: If the factory requested its own identifier
        """
        entry = self._entries.get(identifier)
        if entry is not None and entry.state is EntryState.RESOLVED:
            return entry.value
        return self._materialize(identifier)

    def try_get(self, identifier: Hashable, default: Any = None) -> Any:
        """Like ``get``, but return ``default`` if the identifier is not registered.

        Construction failures still raise.
        """
        try:
            return self.get(identifier)
        except NotRegisteredError:
            return default

    def _materialize(self, identifier: Hashable) -> Any:
        with self._lock:
            # Re-check under the lock, another thread may have finished meanwhile
            entry = self._entries.get(identifier)
            if entry is None:
                raise NotRegisteredError(identifier)
            if entry.state is EntryState.RESOLVED:
                return entry.value

            construction = self._in_flight.get(identifier)
            # A construction started for a since-replaced entry does not serve this call
            if construction is None or construction.entry is not entry:
                construction = _Construction(entry=entry, owner=threading.get_ident())
                self._in_flight[identifier] = construction
                is_owner = True
            elif construction.owner == threading.get_ident():
                raise CircularResolutionError(identifier)
            else:
                is_owner = False

        if not is_owner:
            logger.trace(f"Waiting for in-flight construction of {describe_identifier(identifier)}")
            return construction.future.result()

        return self._construct(identifier, construction)

    def _construct(self, identifier: Hashable, construction: _Construction) -> Any:
        name = describe_identifier(identifier)
        logger.debug(f"Constructing instance for {name}")

        try:
            instance = construction.entry.value()
        except Exception as e:
            error = ConstructionFailedError(identifier, e)
            error.__cause__ = e
            self._release(identifier, construction)
            logger.warning(f"Construction of {name} failed, entry left pending: {e}")
            construction.future.set_exception(error)
            raise error from e
        except BaseException as e:
            self._release(identifier, construction)
            construction.future.set_exception(e)
            raise

        with self._lock:
            self._release(identifier, construction)
            if self._entries.get(identifier) is construction.entry:
                self._entries[identifier] = _Entry(EntryState.RESOLVED, instance)
                stored = True
            else:
                stored = False

        if stored:
            logger.debug(f"Resolved {name} -> {type(instance).__name__}")
        else:
            logger.debug(f"{name} was re-registered during construction; result not cached")
        construction.future.set_result(instance)
        return instance

    def _release(self, identifier: Hashable, construction: _Construction) -> None:
        with self._lock:
            if self._in_flight.get(identifier) is construction:
                del self._in_flight[identifier]

    def is_registered(self, identifier: Hashable) -> bool:
        """Check whether the identifier has a pending or resolved entry."""
        return identifier in self._entries

    def is_resolved(self, identifier: Hashable) -> bool:
        """Check whether the identifier already holds a constructed instance."""
        return self.state(identifier) is EntryState.RESOLVED

    def state(self, identifier: Hashable) -> EntryState | None:
        """Get the entry state of an identifier, or None if it is not registered."""
        entry = self._entries.get(identifier)
        return entry.state if entry is not None else None

    def identifiers(self) -> list[Hashable]:
        """Get a snapshot of all registered identifiers in registration order."""
        with self._lock:
            return list(self._entries)

    def reset(self) -> None:
        """Remove every entry.

        Constructions already running finish for their waiting callers, but
        their results are not stored.
        """
        with self._lock:
            self._entries.clear()
            self._in_flight.clear()
        logger.debug("Registry reset")

    def __contains__(self, identifier: object) -> bool:
        return self.is_registered(identifier)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        with self._lock:
            resolved = sum(1 for entry in self._entries.values() if entry.state is EntryState.RESOLVED)
            return f"<Registry entries={len(self._entries)} resolved={resolved}>"


_registry_lock = threading.Lock()


@lru_cache(maxsize=1)
def _create_registry() -> Registry:
    return Registry()


def get_registry() -> Registry:
    """Get the process-wide registry, creating it on first call.

    ``lru_cache`` alone may run the constructor twice under a race, so the
    first creation is serialized with a module lock.

    Returns:
        The global registry instance
    """
    if _create_registry.cache_info().currsize:
        return _create_registry()
    with _registry_lock:
        return _create_registry()


__all__ = ["Factory", "Registry", "get_registry"]
