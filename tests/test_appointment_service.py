"""Tests for booking serialization in appointment_service."""

import asyncio
from types import SimpleNamespace

from agenda.services.appointment_service import lock_provider_schedule


def _fake_session(dialect_name):
    executed = []

    async def execute(statement):
        executed.append(statement)

    session = SimpleNamespace(
        get_bind=lambda: SimpleNamespace(dialect=SimpleNamespace(name=dialect_name)),
        execute=execute,
    )
    return session, executed


class TestLockProviderSchedule:
    def test_postgres_takes_advisory_lock(self):
        """On Postgres a transaction advisory lock keyed on the provider is taken."""
        session, executed = _fake_session("postgresql")
        asyncio.run(lock_provider_schedule(session, 7))
        assert len(executed) == 1
        compiled = executed[0].compile()
        assert "pg_advisory_xact_lock" in str(compiled)
        assert 7 in compiled.params.values()

    def test_other_backends_skip_lock(self):
        session, executed = _fake_session("sqlite")
        asyncio.run(lock_provider_schedule(session, 7))
        assert executed == []
