# (c) Copyright Datacraft, 2026
"""Tests for the HTTP transport."""
import logging

import httpx
import pytest

from scanto.core.device import DeviceSession, TransportClient, TransportError
from scanto.core.device.transport import DEFAULT_TIMEOUT


def make_client(handler, debug=False):
    session = DeviceSession(host="192.168.1.11", debug=debug)
    return TransportClient(session, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_execute_returns_status_headers_and_text():
    def handler(request):
        assert str(request.url) == "http://192.168.1.11/Scan/Status"
        return httpx.Response(200, headers={"ETag": "abc"}, text="<ScanStatus/>")

    async with make_client(handler) as client:
        response = await client.execute("GET", "/Scan/Status")

    assert response.status == 200
    assert response.headers["etag"] == "abc"
    assert response.text == "<ScanStatus/>"


@pytest.mark.asyncio
async def test_zero_or_missing_timeout_uses_default():
    seen = []

    def handler(request):
        seen.append(request.extensions["timeout"]["read"])
        return httpx.Response(200)

    async with make_client(handler) as client:
        await client.execute("GET", "/a", timeout=0)
        await client.execute("GET", "/a")
        await client.execute("GET", "/a", timeout=5)

    assert seen == [DEFAULT_TIMEOUT, DEFAULT_TIMEOUT, 5]


@pytest.mark.asyncio
async def test_job_port_and_absolute_urls():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200)

    async with make_client(handler) as client:
        await client.execute("GET", "/Scan/Jobs/1", job_port=True)
        await client.execute("GET", "http://10.0.0.5:8080/Scan/Jobs/2")

    assert seen == [
        "http://192.168.1.11:8080/Scan/Jobs/1",
        "http://10.0.0.5:8080/Scan/Jobs/2",
    ]


@pytest.mark.asyncio
async def test_non_2xx_raises_with_response_metadata():
    def handler(request):
        return httpx.Response(409, headers={"X-Reason": "busy"}, text="conflict")

    async with make_client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.execute("POST", "/Scan/Jobs", content="<x/>")

    error = exc_info.value
    assert error.status == 409
    assert error.headers["x-reason"] == "busy"
    assert error.body == "conflict"
    assert not error.unreachable
    assert "HTTP 409" in str(error)


@pytest.mark.asyncio
async def test_connection_failure_is_unreachable():
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.execute("GET", "/EventMgmt/EventTable")

    error = exc_info.value
    assert error.unreachable
    assert error.status is None
    assert error.headers is None
    assert error.body is None
    assert isinstance(error.cause, httpx.ConnectError)


@pytest.mark.asyncio
async def test_debug_logs_numbered_request_and_response(caplog):
    def handler(request):
        return httpx.Response(200, text="ok")

    caplog.set_level(logging.INFO, logger="scanto.core.device.transport")
    async with make_client(handler, debug=True) as client:
        await client.execute("GET", "/one")
        await client.execute("GET", "/two")

    messages = [
        record.getMessage() for record in caplog.records
        if record.name == "scanto.core.device.transport"
    ]
    assert messages[0].startswith("0001 -> ")
    assert "http://192.168.1.11/one" in messages[0]
    assert messages[1].startswith("0001 <- ")
    assert '"status": 200' in messages[1]
    assert messages[2].startswith("0002 -> ")
    assert messages[3].startswith("0002 <- ")


@pytest.mark.asyncio
async def test_no_diagnostics_without_debug(caplog):
    def handler(request):
        return httpx.Response(200)

    caplog.set_level(logging.INFO, logger="scanto.core.device.transport")
    async with make_client(handler) as client:
        await client.execute("GET", "/one")

    assert not [r for r in caplog.records if r.name == "scanto.core.device.transport"]


@pytest.mark.asyncio
async def test_stream_reads_body_and_raises_on_error():
    def handler(request):
        if request.url.path == "/missing":
            return httpx.Response(404, text="not here")
        return httpx.Response(200, content=b"\xff\xd8image")

    async with make_client(handler) as client:
        async with client.stream("GET", "/page", job_port=True) as response:
            body = await response.aread()
        assert body == b"\xff\xd8image"

        with pytest.raises(TransportError) as exc_info:
            async with client.stream("GET", "/missing", job_port=True):
                pass

    assert exc_info.value.status == 404
    assert exc_info.value.body == "not here"
