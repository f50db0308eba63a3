"""Tests for after-commit callbacks on the transactional session dependency."""

import pytest

from app.infrastructure.persistence import database
from app.infrastructure.persistence.database import after_commit, run_after_commit


class _Transaction:
    def __init__(self, session: "_Session") -> None:
        self.session = session

    async def __aenter__(self) -> None:
        return None

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self.session.events.append("rollback" if exc_type else "commit")
        return False


class _Session:
    def __init__(self) -> None:
        self.info: dict = {}
        self.events: list[str] = []

    async def __aenter__(self) -> "_Session":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False

    def begin(self) -> _Transaction:
        return _Transaction(self)


@pytest.fixture
def session(monkeypatch) -> _Session:
    fake = _Session()
    monkeypatch.setattr(database, "AsyncSessionLocal", lambda: fake)
    return fake


async def test_run_after_commit_runs_once_in_order() -> None:
    fake = _Session()
    calls: list[str] = []

    async def first() -> None:
        calls.append("first")

    async def second() -> None:
        calls.append("second")

    after_commit(fake, first)
    after_commit(fake, second)
    await run_after_commit(fake)
    await run_after_commit(fake)
    assert calls == ["first", "second"]
    assert fake.info == {}


async def test_callbacks_run_after_commit(session: _Session) -> None:
    gen = database.get_db_transactional()
    db = await gen.__anext__()

    async def invalidate() -> None:
        session.events.append("invalidate")

    after_commit(db, invalidate)
    assert session.events == []
    with pytest.raises(StopAsyncIteration):
        await gen.__anext__()
    assert session.events == ["commit", "invalidate"]


async def test_callbacks_dropped_on_rollback(session: _Session) -> None:
    gen = database.get_db_transactional()
    db = await gen.__anext__()

    async def invalidate() -> None:
        session.events.append("invalidate")

    after_commit(db, invalidate)
    with pytest.raises(RuntimeError):
        await gen.athrow(RuntimeError("write failed"))
    assert session.events == ["rollback"]
