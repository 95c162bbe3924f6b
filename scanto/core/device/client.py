# (c) Copyright Datacraft, 2026
"""Single entry point bundling every device component over one session."""
import httpx

from .capabilities import CapabilitiesReader
from .destinations import DestinationRegistry
from .events import EventWatcher
from .jobs import JobController
from .reachability import ReachabilityMonitor
from .session import DeviceSession
from .transport import TransportClient


class HPDevice:
	"""
	An HP all-in-one reachable over its LEDM HTTP API.

	All components share the session and one HTTP client, so requests go out
	strictly in the order they are awaited.
	"""

	def __init__(
		self,
		session: DeviceSession,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self.session = session
		self.transport = TransportClient(session, transport=transport)
		self.reachability = ReachabilityMonitor(session)
		self.events = EventWatcher(self.transport)
		self.destinations = DestinationRegistry(self.transport)
		self.jobs = JobController(self.transport)
		self.capabilities = CapabilitiesReader(self.transport)

	async def close(self):
		await self.transport.aclose()

	async def __aenter__(self):
		return self

	async def __aexit__(self, *args):
		await self.close()

	def __repr__(self):
		return f"{self.__class__.__name__}({self.session.host})"
