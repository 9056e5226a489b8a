"""
Remote data gateway - contract.

The hosted backend provides table-style CRUD, an auth subsystem and inline
encoded image payloads. Everything in this package talks to it through the
Gateway interface below. Implement over HTTP for production, or in memory
for tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class GatewayError(Exception):
    """A backend call failed. `message` is the backend's reason, verbatim."""

    def __init__(self, message: str, status: int | None = None, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details or {}


class NoSingleRowError(GatewayError):
    """A single-row request matched zero or several rows."""

    def __init__(self, matched: int):
        super().__init__(
            "JSON object requested, multiple (or no) rows returned",
            status=406,
            details={"matched": matched},
        )
        self.matched = matched


# ---------------------------------------------------------------------------
# Request / response types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Filter:
    """Column filter. `op` is "eq" (equality) or "in" (membership)."""

    column: str
    op: Literal["eq", "in"]
    value: Any

    def matches(self, row: dict[str, Any]) -> bool:
        if self.op == "eq":
            return row.get(self.column) == self.value
        return row.get(self.column) in self.value


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def in_(column: str, values: list[Any]) -> Filter:
    return Filter(column, "in", list(values))


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = False


@dataclass
class Result:
    """
    Rows returned by a table call.

    `data` is a list of row dicts, or a single row dict (or None) when the
    call asked for one row. `count` is set only when a count was requested.
    """

    data: Any
    count: int | None = None

    @property
    def rows(self) -> list[dict[str, Any]]:
        if self.data is None:
            return []
        if isinstance(self.data, dict):
            return [self.data]
        return list(self.data)


@dataclass
class Session:
    """An authenticated identity."""

    user_id: str
    email: str
    access_token: str | None = None
    refresh_token: str | None = None


def page_range(page: int, per_page: int) -> tuple[int, int]:
    """
    Inclusive row range for a 1-based page.
    page_range(2, 10) == (10, 19)
    """
    start = (page - 1) * per_page
    return start, start + per_page - 1


# ---------------------------------------------------------------------------
# Gateway protocol
# ---------------------------------------------------------------------------


class Gateway:
    """
    Abstract backend interface.

    Table calls raise GatewayError on failure. `single=True` demands exactly
    one row (NoSingleRowError otherwise); `maybe_single=True` returns the row
    or None and fails only on several rows.
    """

    # Tables

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
        raise NotImplementedError

    async def insert(
        self,
        table: str,
        values: dict[str, Any] | list[dict[str, Any]],
        *,
        returning: bool = True,
        single: bool = False,
    ) -> Result:
        raise NotImplementedError

    async def update(
        self,
        table: str,
        values: dict[str, Any],
        *,
        filters: list[Filter],
        returning: bool = True,
        single: bool = False,
    ) -> Result:
        raise NotImplementedError

    async def delete(
        self,
        table: str,
        *,
        filters: list[Filter],
        returning: bool = True,
    ) -> Result:
        raise NotImplementedError

    # Auth

    async def sign_up(self, email: str, password: str) -> Session:
        raise NotImplementedError

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        raise NotImplementedError

    async def get_session(self) -> Session | None:
        raise NotImplementedError

    async def sign_out(self) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        """Release network resources. No-op by default."""
        return None
