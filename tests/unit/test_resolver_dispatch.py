"""
Tests for ResolverDispatch.

Covers the auth short-circuit, the single backend call per invocation,
response mapping and error normalization.
"""
from __future__ import annotations

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock
from respx import MockRouter

from shake_gateway.backend_client import BackendClient
from shake_gateway.enums import HttpMethod
from shake_gateway.errors import AuthMissingError, BackendError, TransportError, UnknownOperationError
from shake_gateway.models import BackendFailure, BackendSuccess, MessageResult, RequestContext, TokenResult
from shake_gateway.operation_registry import DEFAULT_OPERATIONS, build_registry
from shake_gateway.resolver_dispatch import ResolverDispatch

ANONYMOUS = RequestContext()
AUTHED = RequestContext(raw_headers={"authorization": "tok"}, token="tok")

AUTH_REQUIRED = [d.name for d in DEFAULT_OPERATIONS if d.requires_auth]

# Operations whose response is reshaped rather than passed through
SHAPED_OPERATIONS = {
    "post_login": {"email": "a", "password": "b"},
    "post_register": {"email": "a", "name": "n", "password": "b"},
    "check": {},
    "get_ready": {},
    "post_ready": {"room_id": "r1"},
    "post_shake": {"power": 1},
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_backend():
    backend = AsyncMock()
    backend.call.return_value = BackendSuccess(200, {"message": "ok"})
    return backend


@pytest.fixture
def mock_broker():
    broker = MagicMock()
    broker.schedule.side_effect = lambda name: f"Operation: {name} scheduled!"
    return broker


@pytest.fixture
def dispatch(mock_backend, mock_broker):
    return ResolverDispatch(build_registry(), mock_backend, mock_broker)


# ---------------------------------------------------------------------------
# Auth short-circuit
# ---------------------------------------------------------------------------

class TestAuth:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation_name", AUTH_REQUIRED)
    async def test_missing_token_never_reaches_backend(self, dispatch, mock_backend, operation_name):
        with pytest.raises(AuthMissingError) as exc_info:
            await dispatch.execute(operation_name, {}, ANONYMOUS)
        assert exc_info.value.operation_name == operation_name
        mock_backend.call.assert_not_called()

    @pytest.mark.asyncio
    async def test_token_passed_to_backend(self, dispatch, mock_backend):
        await dispatch.execute("post_ready", {"room_id": "r1"}, AUTHED)
        mock_backend.call.assert_awaited_once_with(HttpMethod.POST, "/ready", {"room_id": "r1"}, "tok")

    @pytest.mark.asyncio
    async def test_public_operation_does_not_forward_token(self, dispatch, mock_backend):
        await dispatch.execute("post_shake", {"power": 9}, AUTHED)
        mock_backend.call.assert_awaited_once_with(HttpMethod.POST, "/shake", {"power": 9}, None)

    @pytest.mark.asyncio
    async def test_override_makes_shake_require_auth(self, mock_backend, mock_broker):
        dispatch = ResolverDispatch(build_registry({"post_shake": {"requires_auth": True}}), mock_backend, mock_broker)
        with pytest.raises(AuthMissingError):
            await dispatch.execute("post_shake", {"power": 9}, ANONYMOUS)
        mock_backend.call.assert_not_called()


# ---------------------------------------------------------------------------
# Success / failure paths
# ---------------------------------------------------------------------------

class TestExecute:
    @pytest.mark.asyncio
    async def test_exactly_one_backend_call(self, dispatch, mock_backend):
        result = await dispatch.execute("post_shake", {"power": 3}, ANONYMOUS)
        assert result == MessageResult(message="ok")
        assert mock_backend.call.await_count == 1

    @pytest.mark.asyncio
    async def test_get_rooms_identity(self, dispatch, mock_backend):
        rooms = [{"id": "r1"}, {"id": "r2"}]
        mock_backend.call.return_value = BackendSuccess(200, rooms)
        assert await dispatch.execute("get_rooms", {}, ANONYMOUS) == rooms
        mock_backend.call.assert_awaited_once_with(HttpMethod.GET, "/rooms", None, None)

    @pytest.mark.asyncio
    async def test_backend_failure_is_normalized(self, dispatch, mock_backend):
        mock_backend.call.return_value = BackendFailure(401, {"reason": "INVALID_CREDENTIALS"})
        with pytest.raises(BackendError) as exc_info:
            await dispatch.execute("post_login", {"email": "a", "password": "b"}, ANONYMOUS)
        assert str(exc_info.value) == "INVALID_CREDENTIALS"
        assert mock_backend.call.await_count == 1

    @pytest.mark.asyncio
    async def test_transport_failure(self, dispatch, mock_backend):
        mock_backend.call.return_value = BackendFailure(None, detail="ReadTimeout: timed out")
        with pytest.raises(TransportError, match="request failed"):
            await dispatch.execute("get_rooms", {}, ANONYMOUS)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation_name,args", list(SHAPED_OPERATIONS.items()))
    @pytest.mark.parametrize("body", [None, "text", [], {}, ["x"], {"unexpected": "shape"}])
    async def test_malformed_success_is_not_fabricated(self, dispatch, mock_backend, operation_name, args, body):
        mock_backend.call.return_value = BackendSuccess(200, body)
        with pytest.raises(BackendError) as exc_info:
            await dispatch.execute(operation_name, args, AUTHED)
        # Only the generic message reaches the client, never interpreter text
        assert str(exc_info.value) == "request failed"
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_operation(self, dispatch, mock_backend):
        with pytest.raises(UnknownOperationError):
            await dispatch.execute("foo", {}, AUTHED)
        mock_backend.call.assert_not_called()


class TestScheduleOperation:
    @pytest.mark.asyncio
    async def test_schedule_is_local(self, dispatch, mock_backend, mock_broker):
        ack = await dispatch.execute("scheduleOperation", {"name": "X"}, ANONYMOUS)
        assert ack == "Operation: X scheduled!"
        mock_broker.schedule.assert_called_once_with("X")
        mock_backend.call.assert_not_called()


# ---------------------------------------------------------------------------
# End to end with a real BackendClient over respx
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_login_failure_end_to_end(respx_mock: MockRouter, mock_broker) -> None:
    route = respx_mock.post("http://backend.test/login").mock(
        return_value=httpx.Response(400, json={"error": True, "reason": "INVALID_CREDENTIALS"})
    )
    async with httpx.AsyncClient(base_url="http://backend.test/") as http_client:
        dispatch = ResolverDispatch(build_registry(), BackendClient(http_client), mock_broker)
        with pytest.raises(BackendError) as exc_info:
            await dispatch.execute("post_login", {"email": "a@b.c", "password": "wrong"}, ANONYMOUS)

    assert exc_info.value.message == "INVALID_CREDENTIALS"
    assert route.call_count == 1


@pytest.mark.asyncio
async def test_login_success_end_to_end(respx_mock: MockRouter, mock_broker) -> None:
    respx_mock.post("http://backend.test/login").mock(return_value=httpx.Response(200, json={"token": "jwt"}))
    async with httpx.AsyncClient(base_url="http://backend.test/") as http_client:
        dispatch = ResolverDispatch(build_registry(), BackendClient(http_client), mock_broker)
        result = await dispatch.execute("post_login", {"email": "a@b.c", "password": "pw"}, ANONYMOUS)

    assert result == TokenResult(token="jwt")
