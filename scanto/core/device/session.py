# (c) Copyright Datacraft, 2026
"""Per-run device context shared by every component."""
import itertools
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


DEFAULT_PORT = 80
DEFAULT_JOB_PORT = 8080


@dataclass
class DeviceSession:
	"""
	Address of the device plus the diagnostics state of one run.

	The management API and the job API live on the same host but on
	different ports. The host must only be changed through ``set_host``
	and never while requests are in flight.
	"""
	host: str
	port: int = DEFAULT_PORT
	job_port: int = DEFAULT_JOB_PORT
	debug: bool = False
	_calls: itertools.count = field(
		default_factory=lambda: itertools.count(1),
		init=False,
		repr=False,
		compare=False,
	)

	@property
	def base_url(self) -> str:
		return f"http://{self.host}:{self.port}"

	@property
	def job_base_url(self) -> str:
		return f"http://{self.host}:{self.job_port}"

	def set_host(self, host: str) -> None:
		logger.info(f"Device address changed from {self.host} to {host}")
		self.host = host

	def next_call_id(self) -> int:
		return next(self._calls)
