"""Unit test fixtures with in-memory stand-ins for both stores.

FakeSessionFactory mimics the parts of async_sessionmaker/AsyncSession the
repositories use: add, flush (with primary key and unique constraint
checks), get, single-condition select, and begin() that commits on success
and rolls back on error. InMemoryDocumentStore implements the DocumentStore
protocol over a dict keyed by document path.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Any

import pytest
from sqlalchemy.exc import IntegrityError

from shared_kernel.document_store import (
    DocumentAlreadyExistsError,
    DocumentNotFoundError,
    DocumentPath,
    DocumentStoreError,
)


def _constraint_names(model: Any) -> list[tuple[str, list[str]]]:
    """Return (constraint name, column keys) pairs the fake enforces."""
    table = type(model).__table__
    constraints = [
        (f"{table.name}_pkey", [column.key for column in table.primary_key.columns])
    ]
    for column in table.columns:
        if column.unique:
            name = (
                f"ix_{table.name}_{column.key}"
                if column.index
                else f"{table.name}_{column.key}_key"
            )
            constraints.append((name, [column.key]))
    return constraints


def _primary_key(model: Any) -> tuple[Any, ...]:
    table = type(model).__table__
    return tuple(getattr(model, column.key) for column in table.primary_key.columns)


def _check_unique(model: Any, rows: Any) -> None:
    """Raise IntegrityError like PostgreSQL if model collides with rows."""
    for name, keys in _constraint_names(model):
        values = [getattr(model, key) for key in keys]
        for row in rows:
            if row is not model and [getattr(row, key) for key in keys] == values:
                raise IntegrityError(
                    "INSERT",
                    {},
                    Exception(
                        f'duplicate key value violates unique constraint "{name}"'
                    ),
                )


class FakeDatabase:
    """Committed rows, keyed by table name then primary key."""

    def __init__(self) -> None:
        self.tables: dict[str, dict[tuple[Any, ...], Any]] = defaultdict(dict)
        self.commits = 0
        self.rollbacks = 0
        self.commit_error: Exception | None = None

    def rows(self, table_name: str) -> list[Any]:
        return list(self.tables[table_name].values())


class _FakeResult:
    def __init__(self, row: Any) -> None:
        self._row = row

    def scalar_one_or_none(self) -> Any:
        return self._row


class _FakeTransaction:
    def __init__(self, session: FakeSession) -> None:
        self._session = session

    async def __aenter__(self) -> _FakeTransaction:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            await self._session.flush()
            self._session.commit_staged()
        else:
            self._session.rollback_staged()
        return False


class FakeSession:
    """Single-use session over a FakeDatabase."""

    def __init__(self, database: FakeDatabase) -> None:
        self._database = database
        self._pending: list[Any] = []
        self._staged: dict[str, dict[tuple[Any, ...], Any]] = defaultdict(dict)

    async def __aenter__(self) -> FakeSession:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self._pending.clear()
        self._staged.clear()
        return False

    def begin(self) -> _FakeTransaction:
        return _FakeTransaction(self)

    def add(self, model: Any) -> None:
        self._pending.append(model)

    def _visible(self, table_name: str) -> list[Any]:
        return [
            *self._database.tables[table_name].values(),
            *self._staged[table_name].values(),
        ]

    async def flush(self) -> None:
        while self._pending:
            model = self._pending.pop(0)
            table_name = type(model).__table__.name
            _check_unique(model, self._visible(table_name))
            self._staged[table_name][_primary_key(model)] = model

    async def get(self, model_class: Any, primary_key: Any) -> Any:
        table_name = model_class.__table__.name
        key = primary_key if isinstance(primary_key, tuple) else (primary_key,)
        return self._staged[table_name].get(key) or self._database.tables[
            table_name
        ].get(key)

    async def execute(self, statement: Any) -> _FakeResult:
        """Evaluate ``select(Model).where(Model.column == value)``."""
        model_class = statement.column_descriptions[0]["entity"]
        clause = statement.whereclause
        column, value = clause.left.key, clause.right.value
        for row in self._visible(model_class.__table__.name):
            if getattr(row, column) == value:
                return _FakeResult(row)
        return _FakeResult(None)

    def commit_staged(self) -> None:
        if self._database.commit_error is not None:
            self._database.rollbacks += 1
            raise self._database.commit_error
        for table_name, rows in self._staged.items():
            for model in rows.values():
                _check_unique(model, self._database.tables[table_name].values())
        for table_name, rows in self._staged.items():
            self._database.tables[table_name].update(rows)
        self._staged.clear()
        self._database.commits += 1

    def rollback_staged(self) -> None:
        self._pending.clear()
        self._staged.clear()
        self._database.rollbacks += 1


class FakeSessionFactory:
    """Callable producing FakeSessions, like async_sessionmaker."""

    def __init__(self, database: FakeDatabase) -> None:
        self.database = database

    def __call__(self) -> FakeSession:
        return FakeSession(self.database)


class InMemoryDocumentStore:
    """DocumentStore over a dict, with injectable failures and delays."""

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self._failures: dict[tuple[str, str], Exception] = {}
        self._delays: dict[tuple[str, str], float] = {}

    def fail(
        self, operation: str, collection: str, error: Exception | None = None
    ) -> None:
        """Make every ``operation`` on ``collection`` raise."""
        self._failures[(operation, collection)] = error or DocumentStoreError(
            f"{operation} on {collection} failed"
        )

    def stall(self, operation: str, collection: str, seconds: float) -> None:
        """Make every ``operation`` on ``collection`` sleep first."""
        self._delays[(operation, collection)] = seconds

    def clear_failures(self) -> None:
        self._failures.clear()
        self._delays.clear()

    async def _before(self, operation: str, path: DocumentPath) -> None:
        self.calls.append((operation, str(path)))
        delay = self._delays.get((operation, path.collection))
        if delay is not None:
            await asyncio.sleep(delay)
        error = self._failures.get((operation, path.collection))
        if error is not None:
            raise error

    async def insert(self, path: DocumentPath, data: dict[str, Any]) -> None:
        await self._before("insert", path)
        if str(path) in self.documents:
            raise DocumentAlreadyExistsError(path)
        self.documents[str(path)] = dict(data)

    async def update(self, path: DocumentPath, data: dict[str, Any]) -> None:
        await self._before("update", path)
        if str(path) not in self.documents:
            raise DocumentNotFoundError(path)
        self.documents[str(path)].update(data)

    async def get(self, path: DocumentPath) -> dict[str, Any] | None:
        await self._before("get", path)
        document = self.documents.get(str(path))
        return dict(document) if document is not None else None

    def collection(self, name: str) -> dict[str, dict[str, Any]]:
        """Documents whose immediate collection is ``name``, keyed by path."""
        return {
            path: data
            for path, data in self.documents.items()
            if path.split("/")[-2] == name
        }


@pytest.fixture
def database() -> FakeDatabase:
    """Provide an empty fake relational database."""
    return FakeDatabase()


@pytest.fixture
def session_factory(database: FakeDatabase) -> FakeSessionFactory:
    """Provide a session factory over the fake database."""
    return FakeSessionFactory(database)


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    """Provide an empty in-memory document store."""
    return InMemoryDocumentStore()
