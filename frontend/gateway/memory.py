"""
In-memory gateway for tests and offline use.

Keeps tables as lists of row dicts and records every call in `calls`, so
tests can assert on call order. Failures and row-level policy denials can be
injected per (operation, table).
"""

from __future__ import annotations

import copy
import itertools
import uuid
from collections.abc import Callable
from typing import Any, Literal

from frontend.gateway.base import (
    Filter,
    Gateway,
    GatewayError,
    NoSingleRowError,
    Order,
    Result,
    Session,
)
from state.types import now_iso

ViewBuilder = Callable[["MemoryGateway"], list[dict[str, Any]]]


class MemoryGateway(Gateway):
    """In-memory backend."""

    def __init__(self, primary_keys: dict[str, str] | None = None) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.primary_keys: dict[str, str] = primary_keys or {}
        self.views: dict[str, ViewBuilder] = {}
        self.calls: list[tuple[str, str]] = []
        self.auth_users: dict[str, dict[str, str]] = {}
        self.session: Session | None = None
        self._failures: dict[tuple[str, str], str] = {}
        self._denied: set[tuple[str, str]] = set()
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Test hooks
    # ------------------------------------------------------------------

    def register_view(self, name: str, builder: ViewBuilder) -> None:
        """A read-only joined view computed from the tables on every select."""
        self.views[name] = builder

    def fail(self, op: str, table: str, message: str = "backend failure") -> None:
        """Make the next and all later `op` calls on `table` raise GatewayError."""
        self._failures[(op, table)] = message

    def deny(self, op: str, table: str) -> None:
        """Row policy: `op` on `table` silently matches no rows."""
        self._denied.add((op, table))

    def seed(self, table: str, rows: list[dict[str, Any]]) -> None:
        self.tables.setdefault(table, []).extend(copy.deepcopy(rows))

    def ops(self, table: str | None = None) -> list[str]:
        """Recorded "op:table" strings, optionally for one table."""
        return [f"{op}:{t}" for op, t in self.calls if table is None or t == table]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _record(self, op: str, table: str) -> None:
        self.calls.append((op, table))
        message = self._failures.get((op, table))
        if message is not None:
            raise GatewayError(message, status=400)

    def _rows(self, table: str) -> list[dict[str, Any]]:
        if table in self.views:
            return self.views[table](self)
        return self.tables.setdefault(table, [])

    @staticmethod
    def _match(rows: list[dict[str, Any]], filters: list[Filter] | None) -> list[dict[str, Any]]:
        return [r for r in rows if all(f.matches(r) for f in filters or [])]

    @staticmethod
    def _project(row: dict[str, Any], columns: str) -> dict[str, Any]:
        if columns.strip() == "*":
            return copy.deepcopy(row)
        wanted = [c.strip() for c in columns.split(",") if c.strip()]
        return {c: copy.deepcopy(row.get(c)) for c in wanted}

    def _new_id(self) -> str:
        return str(next(self._ids))

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    async def select(
        self,
        table: str,
        columns: str = "*",
        *,
        filters: list[Filter] | None = None,
        order: Order | None = None,
        row_range: tuple[int, int] | None = None,
        count: Literal["exact", "estimated"] | None = None,
        single: bool = False,
        maybe_single: bool = False,
    ) -> Result:
        self._record("select", table)
        rows = self._match(self._rows(table), filters)
        if ("select", table) in self._denied:
            rows = []
        if order is not None:
            rows = sorted(
                rows,
                key=lambda r: (r.get(order.column) is None, r.get(order.column)),
                reverse=order.descending,
            )
        total = len(rows) if count else None
        if row_range is not None:
            rows = rows[row_range[0] : row_range[1] + 1]
        out = [self._project(r, columns) for r in rows]

        if single:
            if len(out) != 1:
                raise NoSingleRowError(matched=len(out))
            return Result(data=out[0], count=total)
        if maybe_single:
            if len(out) > 1:
                raise NoSingleRowError(matched=len(out))
            return Result(data=out[0] if out else None, count=total)
        return Result(data=out, count=total)

    async def insert(
        self,
        table: str,
        values: dict[str, Any] | list[dict[str, Any]],
        *,
        returning: bool = True,
        single: bool = False,
    ) -> Result:
        self._record("insert", table)
        if table in self.views:
            raise GatewayError(f'cannot insert into view "{table}"', status=400)
        batch = [values] if isinstance(values, dict) else list(values)
        if single and len(batch) != 1:
            raise NoSingleRowError(matched=len(batch))

        pk = self.primary_keys.get(table, "id")
        inserted: list[dict[str, Any]] = []
        for values_row in batch:
            row = copy.deepcopy(values_row)
            row.setdefault(pk, self._new_id())
            row.setdefault("created_at", now_iso())
            self.tables.setdefault(table, []).append(row)
            inserted.append(copy.deepcopy(row))

        if not returning:
            return Result(data=None)
        return Result(data=inserted[0] if single else inserted)

    async def update(
        self,
        table: str,
        values: dict[str, Any],
        *,
        filters: list[Filter],
        returning: bool = True,
        single: bool = False,
    ) -> Result:
        self._record("update", table)
        matched = [] if ("update", table) in self._denied else self._match(self._rows(table), filters)
        if single and len(matched) != 1:
            raise NoSingleRowError(matched=len(matched))
        for row in matched:
            row.update(copy.deepcopy(values))
        if not returning:
            return Result(data=None)
        out = [copy.deepcopy(r) for r in matched]
        return Result(data=out[0] if single else out)

    async def delete(
        self,
        table: str,
        *,
        filters: list[Filter],
        returning: bool = True,
    ) -> Result:
        self._record("delete", table)
        rows = self._rows(table)
        matched = [] if ("delete", table) in self._denied else self._match(rows, filters)
        removed = {id(r) for r in matched}
        self.tables[table] = [r for r in rows if id(r) not in removed]
        if not returning:
            return Result(data=None)
        return Result(data=[copy.deepcopy(r) for r in matched])

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    async def sign_up(self, email: str, password: str) -> Session:
        self._record("sign_up", "auth")
        if email in self.auth_users:
            raise GatewayError("User already registered", status=422)
        user_id = str(uuid.uuid4())
        self.auth_users[email] = {"id": user_id, "password": password}
        self.session = Session(user_id=user_id, email=email, access_token=uuid.uuid4().hex)
        return self.session

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        self._record("sign_in", "auth")
        user = self.auth_users.get(email)
        if user is None or user["password"] != password:
            raise GatewayError("Invalid login credentials", status=400)
        self.session = Session(user_id=user["id"], email=email, access_token=uuid.uuid4().hex)
        return self.session

    async def get_session(self) -> Session | None:
        self._record("get_session", "auth")
        return self.session

    async def sign_out(self) -> None:
        self._record("sign_out", "auth")
        self.session = None
