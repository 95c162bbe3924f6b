# (c) Copyright Datacraft, 2026
"""Scan job submission, status polling and page download."""
import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable

import aiofiles

from .base import DeviceComponent
from .exceptions import ProtocolError
from .models import Job, ScanJobSettings, ScanStatus
from .transport import TransportClient

logger = logging.getLogger(__name__)


SCAN_JOBS_PATH = '/Scan/Jobs'
SCAN_STATUS_PATH = '/Scan/Status'
# the device refuses jobs posted right after destination/event handling
SUBMIT_SETTLE_DELAY = 0.5  # seconds
CHUNK_SIZE = 8192


class JobController(DeviceComponent):
	"""
	Primitives of the scan job life cycle.

	A job goes Created -> Polling -> Completed or Failed. The loop that polls
	``status`` and downloads pages as they appear belongs to the caller; no
	method here retries.
	"""

	def __init__(
		self,
		transport: TransportClient,
		sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
	):
		super().__init__(transport)
		self._sleep = sleep

	async def scan_status(self) -> ScanStatus:
		"""Current scanner state (idle, busy, feeder loaded...)."""
		return await self._get_document(SCAN_STATUS_PATH, ScanStatus.parse)

	async def submit(self, settings: ScanJobSettings) -> str:
		"""
		Create a scan job.

		Waits ``SUBMIT_SETTLE_DELAY`` first, then posts the settings to the
		job port.

		Returns:
			Full job URL from the ``Location`` header

		Raises:
			ProtocolError: Anything but 201 with a ``Location`` header
		"""
		await self._sleep(SUBMIT_SETTLE_DELAY)

		response = await self._request(
			'POST',
			SCAN_JOBS_PATH,
			(201,),
			headers={'Content-Type': 'text/xml'},
			content=settings.to_xml(),
			job_port=True,
		)

		location = response.headers.get('location')
		if not location:
			raise ProtocolError.from_response(
				"Scan job created without a usable Location header", response
			)

		logger.info(f"Scan job submitted: {location}")
		return location

	async def status(self, job_locator: str) -> Job:
		"""
		Read the job's current state. Always fetched, never cached.

		Raises:
			ProtocolError: Anything but 200
		"""
		job = await self._get_document(job_locator, Job.parse)
		logger.debug(f"Job {job_locator}: {job.state.value}, {len(job.pages)} pages")
		return job

	async def download_page(self, page_locator: str, destination: str | Path) -> Path:
		"""
		Stream one page image from the job port into ``destination``.

		Returns once the file is flushed and closed. A partial file is left
		behind on failure; cleaning it up is the caller's business.
		"""
		destination = Path(destination)
		size = 0

		async with self._transport.stream('GET', page_locator, job_port=True) as response:
			async with aiofiles.open(destination, 'wb') as f:
				async for chunk in response.aiter_bytes(CHUNK_SIZE):
					await f.write(chunk)
					size += len(chunk)
				await f.flush()

		logger.info(f"Page {page_locator} saved to {destination} ({size} bytes)")
		return destination
