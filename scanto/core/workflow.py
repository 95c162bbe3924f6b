# (c) Copyright Datacraft, 2026
"""Scan-to-computer loop built from the device primitives."""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable

from scanto.core.device import HPDevice, TransportError
from scanto.core.device.destinations import locator_path
from scanto.core.device.events import DEFAULT_EVENT_TIMEOUT
from scanto.core.device.models import (
	Destination,
	DestinationKind,
	JobState,
	ScanJobSettings,
	WalkupScanToCompEvent,
)

logger = logging.getLogger(__name__)


DESTINATION_KIND = DestinationKind.WALKUP_SCAN_TO_COMP


@dataclass
class ScanResult:
	"""Outcome of one device-initiated scan."""
	job_locator: str
	state: JobState
	pages: list[Path] = field(default_factory=list)
	scan_time_ms: float = 0

	@property
	def success(self) -> bool:
		return self.state is JobState.COMPLETED


class ScanToComputer:
	"""
	Waits for "scan to computer" on the device panel and saves the pages.

	Registers a destination named ``label``, long-polls the event feed until
	the user picks it and asks for a scan, then runs the job and downloads
	each page as soon as the device offers it. Losing the device is expected:
	the loop waits for it and registers again. Any other error propagates.
	"""

	def __init__(
		self,
		device: HPDevice,
		label: str,
		output_dir: Path,
		resolution: int = 200,
		event_timeout: int = DEFAULT_EVENT_TIMEOUT,
		poll_interval: float = 1.0,
		sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
	):
		self.device = device
		self.label = label
		self.output_dir = Path(output_dir)
		self.resolution = resolution
		self.event_timeout = event_timeout
		self.poll_interval = poll_interval
		self._sleep = sleep

		self.destination_locator: str | None = None
		self.etag = ''

	async def register_destination(self) -> str:
		"""Replace any destination left over with our label by a fresh one."""
		registry = self.device.destinations
		for stale in await registry.find(DESTINATION_KIND, self.label):
			if stale.resource_uri:
				await registry.remove(stale.resource_uri)

		destination = Destination(
			kind=DESTINATION_KIND,
			name=self.label,
			hostname=self.label,
			shortcut='SaveJPEG',
		)
		self.destination_locator = await registry.register(destination)
		return self.destination_locator

	async def unregister_destination(self) -> None:
		if self.destination_locator is None:
			return
		await self.device.destinations.remove(self.destination_locator)
		self.destination_locator = None

	def _is_ours(self, uri: str | None) -> bool:
		if uri is None or self.destination_locator is None:
			return False
		return locator_path(uri) == locator_path(self.destination_locator)

	async def wait_for_scan_request(self) -> WalkupScanToCompEvent:
		"""Poll events until the device asks to scan into our destination."""
		while True:
			snapshot = await self.device.events.poll(self.etag, self.event_timeout)
			self.etag = snapshot.etag

			for event in snapshot.table.scan_events:
				if not self._is_ours(event.destination_uri) or not event.comp_event_uri:
					continue
				comp_event = await self.device.events.get_comp_event(event.comp_event_uri)
				logger.debug(f"Scan event for {self.label}: {comp_event.event_type.value}")
				if comp_event.wants_scan:
					return comp_event

	def page_path(self, scan_index: int, page_number: int) -> Path:
		return self.output_dir / f"scan{scan_index}_page{page_number}.jpg"

	async def run_job(self, scan_index: int) -> ScanResult:
		"""Submit a job, follow it to the end and download every page once."""
		start_time = time.time()
		jobs = self.device.jobs

		status = await jobs.scan_status()
		settings = ScanJobSettings(
			input_source=status.input_source,
			resolution=self.resolution,
		)
		job_locator = await jobs.submit(settings)

		downloaded: dict[int, Path] = {}
		while True:
			job = await jobs.status(job_locator)

			for page in job.pages_ready():
				if page.number in downloaded:
					continue
				downloaded[page.number] = await jobs.download_page(
					page.binary_url,
					self.page_path(scan_index, page.number),
				)

			if job.is_finished:
				break
			await self._sleep(self.poll_interval)

		if job.is_failed:
			logger.warning(f"Scan job {job_locator} ended as {job.state.value}")

		return ScanResult(
			job_locator=job_locator,
			state=job.state,
			pages=[downloaded[number] for number in sorted(downloaded)],
			scan_time_ms=(time.time() - start_time) * 1000,
		)

	async def _connect(self) -> None:
		"""Wait for the device and register our destination, even if it drops meanwhile."""
		while True:
			await self.device.reachability.wait_until_up()
			# a restarted device has forgotten our destination and event state
			self.etag = ''
			try:
				await self.register_destination()
				return
			except TransportError as e:
				if not e.unreachable:
					raise
				logger.warning(f"Lost contact with the device while registering: {e}")

	async def listen(self, max_scans: int | None = None) -> list[ScanResult]:
		"""
		Serve scan requests until ``max_scans`` are done, or forever.

		Returns:
			Results of the scans performed
		"""
		self.output_dir.mkdir(parents=True, exist_ok=True)
		results: list[ScanResult] = []

		await self._connect()
		logger.info(f"Waiting for scan requests to '{self.label}'")

		while max_scans is None or len(results) < max_scans:
			try:
				await self.wait_for_scan_request()
				result = await self.run_job(len(results) + 1)
			except TransportError as e:
				if not e.unreachable:
					raise
				logger.warning(f"Lost contact with the device: {e}")
				await self._connect()
				continue

			results.append(result)
			logger.info(f"Scan {len(results)} done: {len(result.pages)} pages")

		return results
