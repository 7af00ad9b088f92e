from __future__ import annotations

import httpx
import pytest

from src.domain.entities.errors import MalformedPayloadError, RequestFailedError
from src.domain.entities.time_series import DensePayload, Granularity
from src.domain.services.dense_decoder import decode
from src.infrastructure.gateways.semetric_gateway import SemetricTimeseriesGateway


class _StubResponse:
    def __init__(self, status_code: int, json_data=None, invalid_json: bool = False):
        self.status_code = status_code
        self._json = json_data
        self._invalid_json = invalid_json
        self.text = "error"

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value")
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "http://api")
            response = httpx.Response(self.status_code, request=request, text=self.text)
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, response=None, error: Exception | None = None):
        self._response = response
        self._error = error
        self.requests: list[tuple[str, dict]] = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url, params=None, **kwargs):
        self.requests.append((url, params or {}))
        if self._error is not None:
            raise self._error
        return self._response


def _install(monkeypatch, client: _StubAsyncClient) -> _StubAsyncClient:
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)
    return client


def _gateway(**kwargs) -> SemetricTimeseriesGateway:
    return SemetricTimeseriesGateway(
        "http://api.semetric.com/", "fe66302b", token="secret", **kwargs
    )


@pytest.mark.asyncio
async def test_fetch_dense_unwraps_successful_envelope(monkeypatch) -> None:
    body = {
        "success": True,
        "response": {
            "start_time": 0,
            "end_time": 1209600,
            "period": 604800,
            "data": [10, None, 30],
        },
    }
    client = _install(monkeypatch, _StubAsyncClient(_StubResponse(200, body)))

    payload = await _gateway().fetch_dense("/fans/facebook")

    assert payload == DensePayload(
        start_time=0, end_time=1209600, period=604800, data=(10, None, 30)
    )
    url, params = client.requests[0]
    assert url == "http://api.semetric.com/artist/fe66302b/fans/facebook"
    assert params == {"granularity": "week", "token": "secret"}


@pytest.mark.asyncio
async def test_fetch_dense_uses_requested_granularity(monkeypatch) -> None:
    body = {
        "success": True,
        "response": {"start_time": 0, "end_time": 0, "period": 86400, "data": []},
    }
    client = _install(monkeypatch, _StubAsyncClient(_StubResponse(200, body)))

    await _gateway().fetch_dense("fans/total", Granularity.DAY)

    url, params = client.requests[0]
    assert url.endswith("/artist/fe66302b/fans/total")
    assert params["granularity"] == "day"


def test_build_url_keeps_id_space_prefix() -> None:
    gateway = SemetricTimeseriesGateway("http://api", "lastfm:lady gaga")

    assert gateway.build_url("/fans/total") == (
        "http://api/artist/lastfm:lady%20gaga/fans/total"
    )


@pytest.mark.asyncio
async def test_fetch_dense_raises_on_unsuccessful_envelope(monkeypatch) -> None:
    body = {"success": False, "error": {"code": 404, "msg": "Unknown artist"}}
    _install(monkeypatch, _StubAsyncClient(_StubResponse(200, body)))

    with pytest.raises(RequestFailedError) as exc:
        await _gateway().fetch_dense("/fans/total")

    assert exc.value.key == "/fans/total"
    assert exc.value.details["error"]["msg"] == "Unknown artist"


@pytest.mark.asyncio
async def test_fetch_dense_raises_when_response_missing(monkeypatch) -> None:
    _install(monkeypatch, _StubAsyncClient(_StubResponse(200, {"success": True})))

    with pytest.raises(RequestFailedError):
        await _gateway().fetch_dense("/fans/total")


@pytest.mark.asyncio
async def test_fetch_dense_handles_http_error(monkeypatch) -> None:
    _install(monkeypatch, _StubAsyncClient(_StubResponse(500)))

    with pytest.raises(RequestFailedError) as exc:
        await _gateway().fetch_dense("/fans/total")

    assert exc.value.details["status_code"] == 500


@pytest.mark.asyncio
async def test_fetch_dense_handles_transport_error(monkeypatch) -> None:
    error = httpx.ConnectError("connection refused")
    _install(monkeypatch, _StubAsyncClient(error=error))

    with pytest.raises(RequestFailedError):
        await _gateway().fetch_dense("/fans/total")


@pytest.mark.asyncio
async def test_fetch_dense_handles_invalid_json(monkeypatch) -> None:
    _install(monkeypatch, _StubAsyncClient(_StubResponse(200, invalid_json=True)))

    with pytest.raises(RequestFailedError):
        await _gateway().fetch_dense("/fans/total")


@pytest.mark.asyncio
async def test_fetch_dense_propagates_malformed_payload(monkeypatch) -> None:
    body = {"success": True, "response": {"start_time": 0, "period": 60}}
    _install(monkeypatch, _StubAsyncClient(_StubResponse(200, body)))

    with pytest.raises(MalformedPayloadError):
        await _gateway().fetch_dense("/fans/total")


@pytest.mark.parametrize("flag", ["false", "true", 1])
@pytest.mark.asyncio
async def test_fetch_dense_requires_boolean_success_flag(monkeypatch, flag) -> None:
    body = {
        "success": flag,
        "response": {"start_time": 0, "end_time": 0, "period": 60, "data": [1]},
    }
    _install(monkeypatch, _StubAsyncClient(_StubResponse(200, body)))

    with pytest.raises(RequestFailedError):
        await _gateway().fetch_dense("/fans/total")


@pytest.mark.asyncio
async def test_non_finite_samples_in_raw_body_fail_decoding(monkeypatch) -> None:
    raw = (
        b'{"success": true, "response": '
        b'{"start_time": 0, "end_time": 120, "period": 60, "data": [1, NaN, 5]}}'
    )
    response = httpx.Response(
        200, content=raw, request=httpx.Request("GET", "http://api")
    )
    _install(monkeypatch, _StubAsyncClient(response))

    payload = await _gateway().fetch_dense("/fans/total")

    with pytest.raises(MalformedPayloadError) as exc:
        decode(payload)
    assert exc.value.details["index"] == 1
