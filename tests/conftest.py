"""Shared pytest fixtures: in-memory repositories, a recording asyncpg pool, HTTP test clients."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import asyncpg
import pytest
from fastapi.testclient import TestClient

from comments.repository import get_comment_repository
from core.db import Database
from core.errors import StoreError
from core.settings import Settings
from main import create_app
from projects.repository import SUMMARY_COLUMNS, get_project_repository

SUMMARY_FIELDS = [c.strip() for c in SUMMARY_COLUMNS.split(",")]


class InMemoryStore:
    """Two tables and their id sequences. No foreign key between them."""

    def __init__(self) -> None:
        self.projects: dict[int, dict[str, Any]] = {}
        self.comments: dict[int, dict[str, Any]] = {}
        self._next_project_id = 1
        self._next_comment_id = 1

    def next_project_id(self) -> int:
        value = self._next_project_id
        self._next_project_id += 1
        return value

    def next_comment_id(self) -> int:
        value = self._next_comment_id
        self._next_comment_id += 1
        return value


class InMemoryProjectRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _summary(self, row: dict[str, Any]) -> dict[str, Any]:
        return {k: row[k] for k in SUMMARY_FIELDS}

    async def list_projects(self) -> list[dict[str, Any]]:
        return [self._summary(r) for _, r in sorted(self.store.projects.items())]

    async def list_projects_by_tag(self, tag: str) -> list[dict[str, Any]]:
        return [
            self._summary(r)
            for _, r in sorted(self.store.projects.items())
            if tag in (r["tags"] or [])
        ]

    async def get_project(self, project_id: int) -> dict[str, Any] | None:
        row = self.store.projects.get(project_id)
        return dict(row) if row is not None else None

    async def create_project(self, **fields: Any) -> dict[str, Any]:
        row = {"id": self.store.next_project_id(), **fields}
        self.store.projects[row["id"]] = row
        return dict(row)

    async def delete_with_comments(self, project_id: int) -> tuple[int, int]:
        doomed = [cid for cid, c in self.store.comments.items() if c["project_id"] == project_id]
        for cid in doomed:
            del self.store.comments[cid]
        removed = self.store.projects.pop(project_id, None)
        return (0 if removed is None else 1), len(doomed)


class InMemoryCommentRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def list_by_project(self, project_id: int) -> list[dict[str, Any]]:
        return [dict(c) for _, c in sorted(self.store.comments.items()) if c["project_id"] == project_id]

    async def create_comment(self, *, project_id: int, text: str, name: str | None = None) -> dict[str, Any]:
        row = {"id": self.store.next_comment_id(), "project_id": project_id, "text": text, "name": name}
        self.store.comments[row["id"]] = row
        return dict(row)

    async def delete_comment(self, comment_id: int) -> int:
        return 0 if self.store.comments.pop(comment_id, None) is None else 1


class RecordingTransaction:
    def __init__(self, conn: RecordingConnection) -> None:
        self.conn = conn

    async def __aenter__(self) -> RecordingTransaction:
        self.conn.log.append("BEGIN")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self.conn.log.append("COMMIT" if exc_type is None else "ROLLBACK")
        return False


class RecordingConnection:
    """Records statements; answers with canned rows and command statuses."""

    def __init__(self, *, statuses: dict[str, str] | None = None, fail_on: str | None = None) -> None:
        self.log: list[str] = []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.statuses = statuses or {}
        self.fail_on = fail_on
        self.rows: list[dict[str, Any]] = []
        self.codecs: list[tuple[str, dict[str, Any]]] = []

    def _record(self, sql: str, args: tuple[Any, ...]) -> None:
        normalized = " ".join(sql.split())
        self.calls.append((normalized, args))
        self.log.append(normalized)
        if self.fail_on and self.fail_on in normalized:
            raise asyncpg.InterfaceError("connection was closed in the middle of operation")

    async def set_type_codec(self, typename: str, **kwargs: Any) -> None:
        self.codecs.append((typename, kwargs))

    def transaction(self) -> RecordingTransaction:
        return RecordingTransaction(self)

    async def execute(self, sql: str, *args: Any) -> str:
        self._record(sql, args)
        for prefix, status in self.statuses.items():
            if " ".join(sql.split()).startswith(prefix):
                return status
        return "DELETE 0"

    async def fetch(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self._record(sql, args)
        return list(self.rows)

    async def fetchrow(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self._record(sql, args)
        return self.rows[0] if self.rows else None

    async def fetchval(self, sql: str, *args: Any) -> Any:
        self._record(sql, args)
        return 1


class RecordingPool:
    def __init__(self, conn: RecordingConnection) -> None:
        self.conn = conn
        self.acquired = 0
        self.released = 0
        self.closed = False

    @asynccontextmanager
    async def acquire(self):
        self.acquired += 1
        try:
            yield self.conn
        finally:
            self.released += 1

    async def execute(self, sql: str, *args: Any) -> str:
        return await self.conn.execute(sql, *args)

    async def fetch(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        return await self.conn.fetch(sql, *args)

    async def fetchrow(self, sql: str, *args: Any) -> dict[str, Any] | None:
        return await self.conn.fetchrow(sql, *args)

    async def fetchval(self, sql: str, *args: Any) -> Any:
        return await self.conn.fetchval(sql, *args)

    async def close(self) -> None:
        self.closed = True


def recording_database(conn: RecordingConnection) -> tuple[Database, RecordingPool]:
    db = Database(Settings(database_url="postgresql://portfolio@localhost/portfolio"))
    pool = RecordingPool(conn)
    db._pool = pool
    return db, pool


class FailingRepository:
    """Every repository call fails the way an unreachable store does."""

    def __getattr__(self, name: str) -> Any:
        async def _fail(*args: Any, **kwargs: Any) -> Any:
            raise StoreError(f"{name}: connection refused")

        return _fail


class NullDatabase:
    """Stands in for `core.db.Database` during the app lifespan."""

    def __init__(self) -> None:
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        self.connected = True

    async def check_connection(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def client(store: InMemoryStore) -> TestClient:
    app = create_app(database=NullDatabase())
    app.dependency_overrides[get_project_repository] = lambda: InMemoryProjectRepository(store)
    app.dependency_overrides[get_comment_repository] = lambda: InMemoryCommentRepository(store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def failing_client() -> TestClient:
    app = create_app(database=NullDatabase())
    app.dependency_overrides[get_project_repository] = FailingRepository
    app.dependency_overrides[get_comment_repository] = FailingRepository
    with TestClient(app) as test_client:
        yield test_client
