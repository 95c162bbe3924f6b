# (c) Copyright Datacraft, 2026
"""Raw TCP liveness probe for the device."""
import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable

from .exceptions import ConnectivityError
from .session import DeviceSession

logger = logging.getLogger(__name__)


DEFAULT_PROBE_TIMEOUT = 10.0  # seconds
RETRY_DELAY = 1.0  # seconds


class ReachabilityMonitor:
	"""
	Tells whether the device accepts connections.

	Does not use HTTP: a plain TCP connect to the management port is enough
	and is much cheaper than a request.
	"""

	def __init__(
		self,
		session: DeviceSession,
		retry_delay: float = RETRY_DELAY,
		sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
	):
		self._session = session
		self.retry_delay = retry_delay
		self._sleep = sleep
		# set after the first failed check, cleared on recovery
		self._reported_down = False

	@property
	def reported_down(self) -> bool:
		return self._reported_down

	async def is_alive(self, timeout: float | None = None) -> bool:
		"""
		Check whether the device accepts a TCP connection.

		The connection attempt races a timer; the first to finish decides and
		the other is cancelled. A successful connection is closed at once.

		Args:
			timeout: Seconds to wait (default 10)

		Returns:
			True if the connection succeeded in time
		"""
		try:
			await self._probe(timeout or DEFAULT_PROBE_TIMEOUT)
		except ConnectivityError as e:
			logger.debug(f"{e}: {e.cause!r}")
			return False
		return True

	async def _probe(self, timeout: float) -> None:
		host, port = self._session.host, self._session.port
		try:
			# wait_for cancels the pending connect when the timer wins
			_, writer = await asyncio.wait_for(
				asyncio.open_connection(host, port),
				timeout=timeout,
			)
		except (OSError, asyncio.TimeoutError) as e:
			raise ConnectivityError(host, port, e) from e

		writer.close()
		try:
			await writer.wait_closed()
		except OSError:
			pass

	async def wait_until_up(self) -> None:
		"""
		Block until the device is reachable.

		Retries forever with a fixed delay. Logs one line when the device is
		first seen down and one line when it comes back, nothing in between.
		"""
		while not await self.is_alive():
			if not self._reported_down:
				logger.warning(
					f"Device ip: {self._session.host} is down! "
					f"[{datetime.now().isoformat()}]"
				)
				self._reported_down = True
			await self._sleep(self.retry_delay)

		if self._reported_down:
			logger.info(
				f"Device ip: {self._session.host} is up again! "
				f"[{datetime.now().isoformat()}]"
			)
			self._reported_down = False
