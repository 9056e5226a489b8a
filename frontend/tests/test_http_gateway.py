"""Tests for HttpGateway with a mocked transport."""

from __future__ import annotations

import json

import httpx
import pytest

from frontend.gateway import GatewayError, Order, eq, in_
from frontend.gateway.http import HttpGateway
from frontend.local_storage import SESSION_KEY, LocalStorage

pytestmark = pytest.mark.asyncio(loop_scope="session")


class Recorder:
    """MockTransport handler returning queued responses and keeping requests."""

    def __init__(self, *responses: httpx.Response | Exception):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_gateway(settings, recorder, local_storage=None) -> HttpGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return HttpGateway(settings, local_storage=local_storage, client=client)


async def test_requires_api_url(settings):
    settings.API_URL = ""
    with pytest.raises(RuntimeError):
        HttpGateway(settings)


async def test_select_page_with_count(settings):
    recorder = Recorder(httpx.Response(206, json=[{"id": 11}], headers={"Content-Range": "10-19/25"}))
    gateway = make_gateway(settings, recorder)

    result = await gateway.select(
        "tblBlog",
        "id,title",
        order=Order("created_at", descending=True),
        row_range=(10, 19),
        count="exact",
    )

    assert result.rows == [{"id": 11}]
    assert result.count == 25
    request = recorder.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/tblBlog"
    assert request.url.params["select"] == "id,title"
    assert request.url.params["order"] == "created_at.desc"
    assert request.headers["Range"] == "10-19"
    assert request.headers["Prefer"] == "count=exact"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer anon-key"


async def test_filters_encode_eq_and_in(settings):
    recorder = Recorder(httpx.Response(200, json=[]))
    gateway = make_gateway(settings, recorder)

    await gateway.delete("tblimage", filters=[in_("imageID", ["1", "2"]), eq("blogID", "7")])

    params = recorder.requests[0].url.params
    assert params["imageID"] == "in.(1,2)"
    assert params["blogID"] == "eq.7"
    assert recorder.requests[0].headers["Prefer"] == "return=representation"


async def test_single_insert_asks_for_object(settings):
    recorder = Recorder(httpx.Response(201, json={"commentID": 5, "content": "hi"}))
    gateway = make_gateway(settings, recorder)

    result = await gateway.insert("tblcomment", {"content": "hi"}, single=True)

    assert result.data == {"commentID": 5, "content": "hi"}
    request = recorder.requests[0]
    assert request.headers["Accept"] == "application/vnd.pgrst.object+json"
    assert json.loads(request.content) == {"content": "hi"}


async def test_maybe_single_empty(settings):
    gateway = make_gateway(settings, Recorder(httpx.Response(200, json=[])))

    result = await gateway.select("tbluser", filters=[eq("userID", "u1")], maybe_single=True)

    assert result.data is None


async def test_backend_message_passed_through(settings):
    recorder = Recorder(httpx.Response(409, json={"message": "duplicate key value violates unique constraint"}))
    gateway = make_gateway(settings, recorder)

    with pytest.raises(GatewayError) as exc:
        await gateway.insert("tbluser", {"email": "ann@gmail.com"})

    assert exc.value.message == "duplicate key value violates unique constraint"
    assert exc.value.status == 409


async def test_transport_error_becomes_gateway_error(settings):
    recorder = Recorder(httpx.ConnectError("connection refused"))
    gateway = make_gateway(settings, recorder)

    with pytest.raises(GatewayError) as exc:
        await gateway.select("tblBlog")

    assert "connection refused" in exc.value.message


async def test_sign_in_persists_session(settings, tmp_path):
    storage = LocalStorage(tmp_path / "storage.json")
    recorder = Recorder(
        httpx.Response(
            200,
            json={"access_token": "tok", "refresh_token": "ref", "user": {"id": "u1", "email": "ann@gmail.com"}},
        ),
        httpx.Response(200, json=[]),
    )
    gateway = make_gateway(settings, recorder, storage)

    session = await gateway.sign_in_with_password("ann@gmail.com", "secret")
    await gateway.select("tblBlog")

    assert session.user_id == "u1"
    assert recorder.requests[0].url.path == "/auth/v1/token"
    assert recorder.requests[0].url.params["grant_type"] == "password"
    assert recorder.requests[1].headers["Authorization"] == "Bearer tok"
    assert json.loads(storage.get_item(SESSION_KEY))["access_token"] == "tok"


async def test_sign_in_failure_message(settings):
    body = {"error": "invalid_grant", "error_description": "Invalid login credentials"}
    recorder = Recorder(httpx.Response(400, json=body))
    gateway = make_gateway(settings, recorder)

    with pytest.raises(GatewayError) as exc:
        await gateway.sign_in_with_password("ann@gmail.com", "wrong")

    assert exc.value.message == "Invalid login credentials"


async def test_stored_session_is_restored(settings, tmp_path):
    storage = LocalStorage(tmp_path / "storage.json")
    storage.set_item(SESSION_KEY, json.dumps({"user_id": "u1", "email": "ann@gmail.com", "access_token": "tok"}))
    recorder = Recorder(httpx.Response(200, json={"id": "u1", "email": "ann@gmail.com"}))
    gateway = make_gateway(settings, recorder, storage)

    session = await gateway.get_session()

    assert session.user_id == "u1"
    assert recorder.requests[0].url.path == "/auth/v1/user"
    assert recorder.requests[0].headers["Authorization"] == "Bearer tok"


async def test_expired_session_is_dropped(settings, tmp_path):
    storage = LocalStorage(tmp_path / "storage.json")
    storage.set_item(SESSION_KEY, json.dumps({"user_id": "u1", "email": "a@gmail.com", "access_token": "old"}))
    gateway = make_gateway(settings, Recorder(httpx.Response(401, json={"msg": "JWT expired"})), storage)

    assert await gateway.get_session() is None
    assert storage.get_item(SESSION_KEY) is None


async def test_no_session_means_no_request(settings):
    recorder = Recorder()
    gateway = make_gateway(settings, recorder)

    assert await gateway.get_session() is None
    assert recorder.requests == []


async def test_sign_out_clears_session_even_on_failure(settings, tmp_path):
    storage = LocalStorage(tmp_path / "storage.json")
    storage.set_item(SESSION_KEY, json.dumps({"user_id": "u1", "email": "a@gmail.com", "access_token": "tok"}))
    gateway = make_gateway(settings, Recorder(httpx.Response(500, text="")), storage)

    with pytest.raises(GatewayError):
        await gateway.sign_out()

    assert storage.get_item(SESSION_KEY) is None
    assert await gateway.get_session() is None


async def test_sign_up_without_confirmation_token(settings, tmp_path):
    """Projects with email confirmation return the user but no session yet."""
    storage = LocalStorage(tmp_path / "storage.json")
    recorder = Recorder(httpx.Response(200, json={"id": "u2", "email": "bob@gmail.com"}))
    gateway = make_gateway(settings, recorder, storage)

    session = await gateway.sign_up("bob@gmail.com", "secret")

    assert session.user_id == "u2"
    assert session.access_token is None
    assert storage.get_item(SESSION_KEY) is None
