"""Registry diagnostics.

Resolves every registered identifier and reports what happened, so wiring
mistakes (missing registrations, factories that raise) show up at startup or
in CI instead of on the first request that needs the service.
"""

import arrow
from loguru import logger
from pydantic import BaseModel, Field

from .enums import EntryState
from .exceptions import RegistryError
from .identifiers import describe_identifier
from .registry import Registry


class ResolutionResult(BaseModel):
    """Outcome of resolving a single identifier."""

    model_config = {"use_enum_values": True}

    identifier: str
    initial_state: EntryState
    success: bool
    instance_type: str | None = None
    error: str | None = None
    execution_time_ms: float | None = None


class RegistryReport(BaseModel):
    """Outcome of resolving every identifier in a registry."""

    results: list[ResolutionResult] = Field(default_factory=list)
    executed_at: str = Field(default_factory=lambda: arrow.utcnow().isoformat())

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.results if not result.success)

    @property
    def success(self) -> bool:
        return self.failed == 0


def check_registry(registry: Registry) -> RegistryReport:
    """Resolve every registered identifier and collect the results.

    Resolution errors are recorded rather than raised. Identifiers resolved
    successfully stay resolved in the given registry.

    Args:
        registry: Registry to check

    Returns:
        Report with one result per identifier, in registration order
    """
    report = RegistryReport()

    for identifier in registry.identifiers():
        name = describe_identifier(identifier)
        state = registry.state(identifier)
        if state is None:
            # Removed by a concurrent reset()
            continue

        start = arrow.utcnow().float_timestamp
        try:
            instance = registry.get(identifier)
        except RegistryError as e:
            logger.debug(f"Resolution of {name} failed: {e}")
            result = ResolutionResult(identifier=name, initial_state=state, success=False, error=str(e))
        else:
            result = ResolutionResult(
                identifier=name,
                initial_state=state,
                success=True,
                instance_type=type(instance).__qualname__,
            )
        result.execution_time_ms = (arrow.utcnow().float_timestamp - start) * 1000
        report.results.append(result)

    logger.debug(f"Registry check finished: {report.total - report.failed}/{report.total} resolved")
    return report


__all__ = ["RegistryReport", "ResolutionResult", "check_registry"]
