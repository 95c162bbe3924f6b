# (c) Copyright Datacraft, 2026
"""Registration of the destinations a device button press can target."""
import logging
from urllib.parse import urlparse

from .base import DeviceComponent
from .exceptions import ProtocolError
from .models import Destination, DestinationKind

logger = logging.getLogger(__name__)


def locator_path(locator: str) -> str:
	"""Path component of a locator given either as a path or as a full URL."""
	if locator.startswith(('http://', 'https://')):
		path = urlparse(locator).path
		if not path:
			raise ValueError(f"Invalid destination locator: {locator}")
		return path
	return locator


class DestinationRegistry(DeviceComponent):
	"""Registers, fetches, lists and removes walkup scan destinations."""

	async def register(self, destination: Destination) -> str:
		"""
		Register ``destination`` with the device.

		Returns:
			Path of the new destination (from the ``Location`` header)

		Raises:
			ProtocolError: Anything but 201 with a ``Location`` header
		"""
		kind = destination.kind
		response = await self._request(
			'POST',
			kind.collection_path,
			(201,),
			headers={'Content-Type': 'text/xml'},
			content=destination.to_xml(),
		)

		location = response.headers.get('location')
		if not location:
			raise ProtocolError.from_response(
				"Destination registered without a usable Location header", response
			)

		locator = urlparse(location).path
		logger.info(f"Registered {kind.value} destination '{destination.name}' at {locator}")
		return locator

	async def remove(self, locator: str) -> bool:
		"""
		Remove a registered destination.

		Raises:
			ProtocolError: Anything but 200 or 204
		"""
		path = locator_path(locator)
		await self._request('DELETE', path, (200, 204))
		logger.info(f"Removed destination {path}")
		return True

	async def fetch(self, locator: str) -> Destination:
		"""Fetch a destination, parsed according to the variant its path names."""
		kind = DestinationKind.for_locator(locator)
		destination = await self._get_document(locator, kind.parse)
		if destination.resource_uri is None:
			destination.resource_uri = locator_path(locator)
		return destination

	async def list_all(
		self,
		kind: DestinationKind,
		uri: str | None = None,
	) -> list[Destination]:
		"""All destinations of one variant, from its collection or ``uri``."""
		return await self._get_document(uri or kind.collection_path, kind.parse_many)

	async def find(self, kind: DestinationKind, name: str) -> list[Destination]:
		"""Registered destinations of ``kind`` carrying ``name``."""
		return [
			destination for destination in await self.list_all(kind)
			if destination.name == name
		]
