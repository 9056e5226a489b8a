"""
HTTP gateway for the hosted backend.

Tables are served over a PostgREST-style REST API under /rest/v1, auth by a
GoTrue-style API under /auth/v1. Both expect the project API key in the
`apikey` header; authenticated calls carry the session's bearer token.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Literal

import httpx

from frontend.config import Settings
from frontend.gateway.base import (
    Filter,
    Gateway,
    GatewayError,
    NoSingleRowError,
    Order,
    Result,
    Session,
)
from frontend.local_storage import SESSION_KEY, LocalStorage

logger = logging.getLogger(__name__)

_SINGLE_OBJECT = "application/vnd.pgrst.object+json"


def _filter_params(filters: list[Filter] | None) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = []
    for f in filters or []:
        if f.op == "eq":
            params.append((f.column, f"eq.{f.value}"))
        else:
            joined = ",".join(str(v) for v in f.value)
            params.append((f.column, f"in.({joined})"))
    return params


def _parse_count(content_range: str | None) -> int | None:
    """Content-Range looks like "10-19/25" or "*/0"."""
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None


def _error_message(response: httpx.Response) -> str:
    """Pull the backend's own message out of an error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


class HttpGateway(Gateway):
    """Gateway over the backend's REST and auth endpoints."""

    def __init__(
        self,
        settings: Settings,
        local_storage: LocalStorage | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        if not settings.API_URL:
            raise RuntimeError("BLOG_API_URL environment variable is required")
        self.api_url = settings.API_URL
        self.api_key = settings.API_KEY
        self.local_storage = local_storage
        self.client = client or httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT)
        self._session: Session | None = self._load_session()

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        token = self._session.access_token if self._session else None
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token or self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: list[tuple[str, str]] | None = None,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        url = f"{self.api_url}{path}"
        try:
            response = await self.client.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=self._headers(headers),
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise GatewayError(str(e) or type(e).__name__) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            raise GatewayError(message, status=response.status_code)
        return response

    @staticmethod
    def _body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        return response.json()

    def _finish(
        self,
        response: httpx.Response,
        *,
        single: bool = False,
        maybe_single: bool = False,
        returning: bool = True,
    ) -> Result:
        count = _parse_count(response.headers.get("content-range"))
        if not returning:
            return Result(data=None, count=count)
        data = self._body(response)
        if single:
            return Result(data=data, count=count)
        rows = data if isinstance(data, list) else ([] if data is None else [data])
        if maybe_single:
            if len(rows) > 1:
                raise NoSingleRowError(matched=len(rows))
            return Result(data=rows[0] if rows else None, count=count)
        return Result(data=rows, count=count)

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
        params = [("select", columns), *_filter_params(filters)]
        if order is not None:
            params.append(("order", f"{order.column}.{'desc' if order.descending else 'asc'}"))

        headers: dict[str, str] = {}
        if row_range is not None:
            headers["Range-Unit"] = "items"
            headers["Range"] = f"{row_range[0]}-{row_range[1]}"
        if count is not None:
            headers["Prefer"] = f"count={count}"
        if single:
            headers["Accept"] = _SINGLE_OBJECT

        response = await self._request("GET", f"/rest/v1/{table}", params=params, headers=headers)
        return self._finish(response, single=single, maybe_single=maybe_single)

    async def insert(
        self,
        table: str,
        values: dict[str, Any] | list[dict[str, Any]],
        *,
        returning: bool = True,
        single: bool = False,
    ) -> Result:
        headers = {"Prefer": "return=representation" if returning else "return=minimal"}
        if single:
            headers["Accept"] = _SINGLE_OBJECT
        response = await self._request("POST", f"/rest/v1/{table}", json_body=values, headers=headers)
        return self._finish(response, single=single, returning=returning)

    async def update(
        self,
        table: str,
        values: dict[str, Any],
        *,
        filters: list[Filter],
        returning: bool = True,
        single: bool = False,
    ) -> Result:
        headers = {"Prefer": "return=representation" if returning else "return=minimal"}
        if single:
            headers["Accept"] = _SINGLE_OBJECT
        response = await self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=_filter_params(filters),
            json_body=values,
            headers=headers,
        )
        return self._finish(response, single=single, returning=returning)

    async def delete(
        self,
        table: str,
        *,
        filters: list[Filter],
        returning: bool = True,
    ) -> Result:
        headers = {"Prefer": "return=representation" if returning else "return=minimal"}
        response = await self._request(
            "DELETE",
            f"/rest/v1/{table}",
            params=_filter_params(filters),
            headers=headers,
        )
        return self._finish(response, returning=returning)

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def _load_session(self) -> Session | None:
        if self.local_storage is None:
            return None
        raw = self.local_storage.get_item(SESSION_KEY)
        if not raw:
            return None
        try:
            return Session(**json.loads(raw))
        except (ValueError, TypeError) as e:
            logger.warning("Discarding unreadable stored session: %s", e)
            return None

    def _store_session(self, session: Session | None) -> None:
        self._session = session
        if self.local_storage is None:
            return
        if session is None:
            self.local_storage.remove_item(SESSION_KEY)
        else:
            self.local_storage.set_item(SESSION_KEY, json.dumps(session.__dict__))

    @staticmethod
    def _session_from(body: dict[str, Any]) -> Session:
        user = body.get("user") or body
        if not user.get("id"):
            raise GatewayError("Auth response did not include a user")
        return Session(
            user_id=str(user["id"]),
            email=user.get("email", ""),
            access_token=body.get("access_token"),
            refresh_token=body.get("refresh_token"),
        )

    async def sign_up(self, email: str, password: str) -> Session:
        response = await self._request(
            "POST",
            "/auth/v1/signup",
            json_body={"email": email, "password": password},
        )
        session = self._session_from(response.json())
        # Projects with email confirmation return no token until confirmed
        if session.access_token:
            self._store_session(session)
        return session

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        response = await self._request(
            "POST",
            "/auth/v1/token",
            params=[("grant_type", "password")],
            json_body={"email": email, "password": password},
        )
        session = self._session_from(response.json())
        self._store_session(session)
        return session

    async def get_session(self) -> Session | None:
        if self._session is None or not self._session.access_token:
            return None
        try:
            response = await self._request("GET", "/auth/v1/user")
        except GatewayError as e:
            if e.status in (401, 403):
                self._store_session(None)
                return None
            raise
        user = response.json()
        self._session.user_id = str(user.get("id", self._session.user_id))
        self._session.email = user.get("email", self._session.email)
        return self._session

    async def sign_out(self) -> None:
        if self._session is None:
            return
        try:
            await self._request("POST", "/auth/v1/logout")
        finally:
            self._store_session(None)

    async def close(self) -> None:
        await self.client.aclose()
