# (c) Copyright Datacraft, 2026
"""Tests for the device session."""
import httpx
import pytest

from scanto.core.device import DeviceSession, TransportClient


def test_set_host_moves_both_addresses():
    session = DeviceSession(host="192.168.1.11", job_port=8080)

    session.set_host("10.0.0.7")

    assert session.host == "10.0.0.7"
    assert session.base_url == "http://10.0.0.7:80"
    assert session.job_base_url == "http://10.0.0.7:8080"


def test_call_ids_increase():
    session = DeviceSession(host="192.168.1.11")

    assert [session.next_call_id() for _ in range(3)] == [1, 2, 3]


@pytest.mark.asyncio
async def test_requests_follow_new_host():
    seen = []

    def handler(request):
        seen.append(request.url.host)
        return httpx.Response(200)

    session = DeviceSession(host="192.168.1.11")
    async with TransportClient(session, transport=httpx.MockTransport(handler)) as client:
        await client.execute("GET", "/Scan/Status")
        session.set_host("10.0.0.7")
        await client.execute("GET", "/Scan/Jobs/1", job_port=True)

    assert seen == ["192.168.1.11", "10.0.0.7"]
