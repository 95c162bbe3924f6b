# (c) Copyright Datacraft, 2026
"""Base class for components that talk to the device over HTTP."""
import logging
import xml.etree.ElementTree as ET
from typing import Callable, TypeVar

from .exceptions import ProtocolError, TransportError
from .transport import TransportClient, TransportResponse

logger = logging.getLogger(__name__)

T = TypeVar('T')


class DeviceComponent:
	"""Shares one transport; adds status checking and document parsing."""

	def __init__(self, transport: TransportClient):
		self._transport = transport

	@property
	def session(self):
		return self._transport.session

	async def _request(
		self,
		method: str,
		path: str,
		expected: tuple[int, ...],
		**kwargs,
	) -> TransportResponse:
		"""
		Perform a request that must answer with one of ``expected``.

		An answer with any other status becomes ``ProtocolError``. Failures
		without an answer stay ``TransportError`` so callers can tell an
		unreachable device from a misbehaving one.
		"""
		try:
			response = await self._transport.execute(method, path, **kwargs)
		except ProtocolError:
			raise
		except TransportError as e:
			if e.unreachable:
				raise
			raise ProtocolError.from_transport_error(
				f"{method} {path}: unexpected status {e.status}", e
			) from e

		if response.status not in expected:
			raise ProtocolError.from_response(
				f"{method} {path}: unexpected status {response.status}", response
			)
		return response

	async def _get_document(self, path: str, parse: Callable[[str], T]) -> T:
		"""GET ``path`` expecting 200 and parse the body."""
		response = await self._request('GET', path, (200,))
		return self._parse(response, parse)

	def _parse(self, response: TransportResponse, parse: Callable[[str], T]) -> T:
		try:
			return parse(response.text)
		except ET.ParseError as e:
			logger.error(f"Malformed document from device: {e}")
			raise ProtocolError(
				f"Malformed XML from device: {e}",
				status=response.status,
				headers=response.headers,
				body=response.text,
				cause=e,
			) from e
