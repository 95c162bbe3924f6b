# (c) Copyright Datacraft, 2026
"""Tests for destination registration."""
import httpx
import pytest

from scanto.core.device import (
    DestinationRegistry,
    DeviceSession,
    ProtocolError,
    TransportClient,
    TransportError,
)
from scanto.core.device.destinations import locator_path
from scanto.core.device.models import Destination, DestinationKind

WALKUP_SCAN_DESTINATION = """<?xml version="1.0" encoding="UTF-8"?>
<wus:WalkupScanDestination xmlns:wus="http://www.hp.com/schemas/imaging/con/rest/walkupscan/2009/09/21"
                           xmlns:dd="http://www.hp.com/schemas/imaging/con/dictionaries/1.0/">
  <dd:ResourceURI>/WalkupScan/WalkupScanDestinations/5</dd:ResourceURI>
  <dd:Name>office-pc</dd:Name>
  <dd:Hostname>office-pc</dd:Hostname>
  <dd:LinkType>Network</dd:LinkType>
</wus:WalkupScanDestination>
"""

SCAN_TO_COMP_DESTINATION = """<?xml version="1.0" encoding="UTF-8"?>
<wus:WalkupScanToCompDestination xmlns:wus="http://www.hp.com/schemas/imaging/con/rest/walkupscan/2009/09/21"
                                 xmlns:dd="http://www.hp.com/schemas/imaging/con/dictionaries/1.0/">
  <dd:Name>office-pc</dd:Name>
  <dd:Hostname>office-pc</dd:Hostname>
  <dd:LinkType>Network</dd:LinkType>
  <wus:WalkupScanToCompSettings>
    <wus:Shortcut>SavePDF</wus:Shortcut>
  </wus:WalkupScanToCompSettings>
</wus:WalkupScanToCompDestination>
"""

SCAN_TO_COMP_DESTINATIONS = """<?xml version="1.0" encoding="UTF-8"?>
<wus:WalkupScanToCompDestinations xmlns:wus="http://www.hp.com/schemas/imaging/con/rest/walkupscan/2009/09/21"
                                  xmlns:dd="http://www.hp.com/schemas/imaging/con/dictionaries/1.0/">
  <wus:WalkupScanToCompDestination>
    <dd:ResourceURI>/WalkupScanToComp/WalkupScanToCompDestinations/1</dd:ResourceURI>
    <dd:Name>office-pc</dd:Name>
    <dd:Hostname>office-pc</dd:Hostname>
  </wus:WalkupScanToCompDestination>
  <wus:WalkupScanToCompDestination>
    <dd:ResourceURI>/WalkupScanToComp/WalkupScanToCompDestinations/2</dd:ResourceURI>
    <dd:Name>laptop</dd:Name>
    <dd:Hostname>laptop</dd:Hostname>
  </wus:WalkupScanToCompDestination>
</wus:WalkupScanToCompDestinations>
"""


def make_registry(handler):
    session = DeviceSession(host="192.168.1.11")
    transport = TransportClient(session, transport=httpx.MockTransport(handler))
    return DestinationRegistry(transport)


def test_locator_path():
    assert locator_path("/WalkupScan/WalkupScanDestinations/5") == "/WalkupScan/WalkupScanDestinations/5"
    assert locator_path("http://192.168.1.11:80/WalkupScan/WalkupScanDestinations/5") == (
        "/WalkupScan/WalkupScanDestinations/5"
    )


@pytest.mark.asyncio
async def test_register_returns_location_path():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(
            201,
            headers={"Location": "http://192.168.1.11:80/WalkupScan/WalkupScanDestinations/5"},
        )

    destination = Destination(kind=DestinationKind.WALKUP_SCAN, name="office-pc", hostname="office-pc")
    locator = await make_registry(handler).register(destination)

    assert locator == "/WalkupScan/WalkupScanDestinations/5"
    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/WalkupScan/WalkupScanDestinations"
    assert request.headers["content-type"] == "text/xml"
    body = request.content.decode()
    assert "<dd:Name>office-pc</dd:Name>" in body
    assert "WalkupScanSettings" not in body


@pytest.mark.asyncio
async def test_register_scan_to_comp_with_shortcut():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(
            201,
            headers={"Location": "/WalkupScanToComp/WalkupScanToCompDestinations/1c8"},
        )

    destination = Destination(
        kind=DestinationKind.WALKUP_SCAN_TO_COMP,
        name="R&D <lab>",
        hostname="lab",
        shortcut="SavePDF",
    )
    locator = await make_registry(handler).register(destination)

    assert locator == "/WalkupScanToComp/WalkupScanToCompDestinations/1c8"
    assert requests[0].url.path == "/WalkupScanToComp/WalkupScanToCompDestinations"
    body = requests[0].content.decode()
    assert "<dd:Name>R&amp;D &lt;lab&gt;</dd:Name>" in body
    assert "<Shortcut>SavePDF</Shortcut>" in body


@pytest.mark.asyncio
async def test_register_unexpected_status_is_protocol_error():
    def handler(request):
        return httpx.Response(200, headers={"Location": "/WalkupScan/WalkupScanDestinations/5"})

    destination = Destination(kind=DestinationKind.WALKUP_SCAN, name="pc", hostname="pc")
    with pytest.raises(ProtocolError) as exc_info:
        await make_registry(handler).register(destination)

    assert exc_info.value.status == 200


@pytest.mark.asyncio
async def test_register_rejected_is_protocol_error():
    def handler(request):
        return httpx.Response(400, text="bad destination")

    destination = Destination(kind=DestinationKind.WALKUP_SCAN, name="pc", hostname="pc")
    with pytest.raises(ProtocolError) as exc_info:
        await make_registry(handler).register(destination)

    assert exc_info.value.status == 400
    assert exc_info.value.body == "bad destination"


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"Location": ""}])
async def test_register_without_location_is_protocol_error(headers):
    def handler(request):
        return httpx.Response(201, headers=headers)

    destination = Destination(kind=DestinationKind.WALKUP_SCAN, name="pc", hostname="pc")
    with pytest.raises(ProtocolError):
        await make_registry(handler).register(destination)


@pytest.mark.asyncio
async def test_register_unreachable_stays_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    destination = Destination(kind=DestinationKind.WALKUP_SCAN, name="pc", hostname="pc")
    with pytest.raises(TransportError) as exc_info:
        await make_registry(handler).register(destination)

    assert not isinstance(exc_info.value, ProtocolError)
    assert exc_info.value.unreachable


@pytest.mark.asyncio
async def test_remove_accepts_path_or_url():
    paths = []

    def handler(request):
        paths.append((request.method, request.url.path))
        return httpx.Response(204 if len(paths) == 1 else 200)

    registry = make_registry(handler)
    assert await registry.remove("/WalkupScan/WalkupScanDestinations/5") is True
    assert await registry.remove("http://192.168.1.11:80/WalkupScan/WalkupScanDestinations/5") is True

    assert paths == [
        ("DELETE", "/WalkupScan/WalkupScanDestinations/5"),
        ("DELETE", "/WalkupScan/WalkupScanDestinations/5"),
    ]


@pytest.mark.asyncio
async def test_remove_unknown_is_protocol_error():
    def handler(request):
        return httpx.Response(404)

    with pytest.raises(ProtocolError) as exc_info:
        await make_registry(handler).remove("/WalkupScan/WalkupScanDestinations/9")

    assert exc_info.value.status == 404


@pytest.mark.asyncio
async def test_fetch_dispatches_on_locator():
    def handler(request):
        if "WalkupScanToComp" in request.url.path:
            return httpx.Response(200, text=SCAN_TO_COMP_DESTINATION)
        return httpx.Response(200, text=WALKUP_SCAN_DESTINATION)

    registry = make_registry(handler)

    walkup = await registry.fetch("/WalkupScan/WalkupScanDestinations/5")
    assert walkup.kind is DestinationKind.WALKUP_SCAN
    assert walkup.name == "office-pc"
    assert walkup.resource_uri == "/WalkupScan/WalkupScanDestinations/5"

    to_comp = await registry.fetch("/WalkupScanToComp/WalkupScanToCompDestinations/1c8")
    assert to_comp.kind is DestinationKind.WALKUP_SCAN_TO_COMP
    assert to_comp.shortcut == "SavePDF"
    assert to_comp.resource_uri == "/WalkupScanToComp/WalkupScanToCompDestinations/1c8"


@pytest.mark.asyncio
async def test_list_and_find():
    def handler(request):
        assert request.url.path == "/WalkupScanToComp/WalkupScanToCompDestinations"
        return httpx.Response(200, text=SCAN_TO_COMP_DESTINATIONS)

    registry = make_registry(handler)

    destinations = await registry.list_all(DestinationKind.WALKUP_SCAN_TO_COMP)
    assert [d.name for d in destinations] == ["office-pc", "laptop"]

    found = await registry.find(DestinationKind.WALKUP_SCAN_TO_COMP, "laptop")
    assert len(found) == 1
    assert found[0].resource_uri == "/WalkupScanToComp/WalkupScanToCompDestinations/2"
