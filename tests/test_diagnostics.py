"""Tests for registry diagnostics."""

from instance_registry import EntryState, Registry
from instance_registry.diagnostics import check_registry


class Cache:
    pass


class Mailer:
    pass


def test_check_registry_resolves_everything():
    registry = Registry()
    cache = Cache()
    registry.register_instance(Cache, cache)
    registry.register_factory(Mailer, Mailer)

    report = check_registry(registry)

    assert report.success
    assert report.total == 2
    assert report.failed == 0
    assert [r.initial_state for r in report.results] == [EntryState.RESOLVED, EntryState.PENDING]
    assert report.results[1].instance_type == "Mailer"
    assert all(r.execution_time_ms is not None and r.execution_time_ms >= 0 for r in report.results)
    assert registry.is_resolved(Mailer)
    assert registry.get(Cache) is cache


def test_check_registry_records_failures():
    registry = Registry()

    def broken() -> Mailer:
        raise ValueError("missing SMTP host")

    registry.register_factory(Mailer, broken)
    registry.register_factory(Cache, Cache)

    report = check_registry(registry)

    assert not report.success
    assert report.failed == 1
    failed = report.results[0]
    assert not failed.success
    assert "missing SMTP host" in failed.error
    assert failed.instance_type is None
    assert report.results[1].success
    assert not registry.is_resolved(Mailer)


def test_check_empty_registry():
    report = check_registry(Registry())
    assert report.success
    assert report.total == 0
    assert report.executed_at
