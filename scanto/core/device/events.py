# (c) Copyright Datacraft, 2026
"""Conditional long-polling of the device event feed."""
import logging

from .base import DeviceComponent
from .exceptions import ProtocolError, TransportError
from .models import EventSnapshot, EventTable, WalkupScanToCompEvent

logger = logging.getLogger(__name__)


EVENT_TABLE_PATH = '/EventMgmt/EventTable'
# device units are deciseconds: 1200 = 2 minutes
DEFAULT_EVENT_TIMEOUT = 1200
# the HTTP timeout must outlast the device's own long-poll
TIMEOUT_MARGIN = 1.1


def event_table_url(timeout: int | None = None) -> str:
	if timeout is None:
		timeout = DEFAULT_EVENT_TIMEOUT
	if timeout > 0:
		return f"{EVENT_TABLE_PATH}?timeout={timeout}"
	return EVENT_TABLE_PATH


def conditional_headers(etag: str) -> dict[str, str]:
	headers = {}
	if etag != '':
		headers['If-None-Match'] = etag
	return headers


class EventWatcher(DeviceComponent):
	"""
	Watches ``/EventMgmt/EventTable``.

	The caller keeps the entity tag between polls and loops forever; this
	class never retries.
	"""

	async def poll(self, etag: str = '', timeout: int | None = None) -> EventSnapshot:
		"""
		Wait for the event table to change.

		Args:
			etag: Tag of the last table seen, '' when there is none
			timeout: Device-side wait in deciseconds (default 1200, 0 = none)

		Returns:
			EventSnapshot with the new table and tag, or an empty table and
			the same ``etag`` when nothing changed

		Raises:
			ProtocolError: 200 answer without an ETag header
			TransportError: any other status, or no answer
		"""
		if timeout is None:
			timeout = DEFAULT_EVENT_TIMEOUT

		try:
			response = await self._transport.execute(
				'GET',
				event_table_url(timeout),
				headers=conditional_headers(etag),
				timeout=timeout / 10 * TIMEOUT_MARGIN,
			)
		except TransportError as e:
			if e.status == 304:
				logger.debug(f"Event table unchanged (etag={etag})")
				return EventSnapshot(etag=etag, table=EventTable())
			raise

		if response.status != 200:
			raise ProtocolError.from_response(
				f"Event table answered with status {response.status}", response
			)

		etag_received = response.headers.get('etag')
		if etag_received is None:
			raise ProtocolError.from_response(
				'Event table answered without an ETag header', response
			)

		table = self._parse(response, EventTable.parse)
		logger.debug(f"Event table changed: {len(table)} events (etag={etag_received})")
		return EventSnapshot(etag=etag_received, table=table)

	async def get_comp_event(self, uri: str) -> WalkupScanToCompEvent:
		"""Fetch the scan-to-computer event a scan event points at."""
		return await self._get_document(uri, WalkupScanToCompEvent.parse)
