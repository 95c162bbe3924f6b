# (c) Copyright Datacraft, 2026
"""HTTP transport to the device management and job APIs."""
import json
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Mapping

import httpx

from .exceptions import TransportError
from .session import DeviceSession

logger = logging.getLogger(__name__)


# seconds; no request may block forever
DEFAULT_TIMEOUT = 100.0


class TransportResponse:
	"""Status, headers and text body of a successful exchange."""

	__slots__ = ('status', 'headers', 'text')

	def __init__(self, status: int, headers: Mapping[str, str], text: str):
		self.status = status
		self.headers = headers
		self.text = text

	def __repr__(self):
		return f"TransportResponse(status={self.status})"


class TransportClient:
	"""
	Issues HTTP requests against the device.

	Knows nothing about scanning. Relative paths are resolved against the
	session's management address, or its job address when ``job_port`` is
	set; absolute URLs are used as they are. 2xx responses are returned,
	everything else raises ``TransportError``.
	"""

	def __init__(
		self,
		session: DeviceSession,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self._session = session
		self._client = httpx.AsyncClient(
			transport=transport,
			timeout=DEFAULT_TIMEOUT,
			follow_redirects=False,
		)

	@property
	def session(self) -> DeviceSession:
		return self._session

	async def aclose(self):
		"""Close HTTP client."""
		await self._client.aclose()

	async def __aenter__(self):
		return self

	async def __aexit__(self, *args):
		await self.aclose()

	def url_for(self, path: str, job_port: bool = False) -> str:
		if path.startswith(('http://', 'https://')):
			return path
		base = self._session.job_base_url if job_port else self._session.base_url
		if not path.startswith('/'):
			path = '/' + path
		return base + path

	async def execute(
		self,
		method: str,
		path: str,
		*,
		headers: Mapping[str, str] | None = None,
		content: str | bytes | None = None,
		timeout: float | None = None,
		job_port: bool = False,
	) -> TransportResponse:
		"""
		Perform one request and read the whole body as text.

		Args:
			method: HTTP method
			path: Path relative to the device, or an absolute URL
			headers: Extra request headers
			content: Request body
			timeout: Seconds; ``None`` or ``0`` means ``DEFAULT_TIMEOUT``
			job_port: Resolve ``path`` against the job API port

		Returns:
			TransportResponse of a 2xx answer

		Raises:
			TransportError: On a non-2xx answer (with its metadata) or when no
				answer was received at all (without metadata)
		"""
		call_id = self._session.next_call_id()
		request = self._client.build_request(
			method,
			self.url_for(path, job_port),
			headers=headers,
			content=content,
			timeout=timeout or DEFAULT_TIMEOUT,
		)
		self._log_request(call_id, request, content)

		try:
			response = await self._client.send(request)
		except httpx.TransportError as e:
			self._log_failure(call_id, e)
			raise TransportError(
				f"{method} {request.url} failed: {e!r}",
				cause=e,
			) from e

		self._log_response(call_id, response)
		self._raise_for_status(method, request, response)

		return TransportResponse(response.status_code, response.headers, response.text)

	@asynccontextmanager
	async def stream(
		self,
		method: str,
		path: str,
		*,
		headers: Mapping[str, str] | None = None,
		timeout: float | None = None,
		job_port: bool = False,
	) -> AsyncIterator[httpx.Response]:
		"""Like ``execute`` but yields the response with its body unread."""
		call_id = self._session.next_call_id()
		request = self._client.build_request(
			method,
			self.url_for(path, job_port),
			headers=headers,
			timeout=timeout or DEFAULT_TIMEOUT,
		)
		self._log_request(call_id, request, None)

		try:
			response = await self._client.send(request, stream=True)
		except httpx.TransportError as e:
			self._log_failure(call_id, e)
			raise TransportError(
				f"{method} {request.url} failed: {e!r}",
				cause=e,
			) from e

		try:
			self._log_response(call_id, response)
			if not response.is_success:
				await response.aread()
				self._raise_for_status(method, request, response)
			yield response
		finally:
			await response.aclose()

	def _raise_for_status(
		self,
		method: str,
		request: httpx.Request,
		response: httpx.Response,
	) -> None:
		if response.is_success:
			return
		raise TransportError(
			f"{method} {request.url} answered {response.reason_phrase}",
			status=response.status_code,
			headers=response.headers,
			body=response.text,
		)

	# Diagnostics

	def _debug(self, call_id: int, is_request: bool, describe: Callable[[], dict]) -> None:
		if not self._session.debug:
			return
		try:
			content = json.dumps(describe(), default=str)
			arrow = ' -> ' if is_request else ' <- '
			logger.info(f"{call_id:04d}{arrow}{content}")
		except Exception as e:
			logger.debug(f"Could not log call {call_id}: {e!r}")

	def _log_request(self, call_id: int, request: httpx.Request, content) -> None:
		self._debug(call_id, True, lambda: {
			'method': request.method,
			'url': str(request.url),
			'headers': dict(request.headers),
			'data': content.decode('utf-8', 'replace') if isinstance(content, bytes) else content,
		})

	def _log_response(self, call_id: int, response: httpx.Response) -> None:
		self._debug(call_id, False, lambda: {
			'status': response.status_code,
			'statusText': response.reason_phrase,
			'headers': dict(response.headers),
			'data': response.text if _is_read(response) else '<stream>',
		})

	def _log_failure(self, call_id: int, error: Exception) -> None:
		self._debug(call_id, False, lambda: {'error': repr(error)})


def _is_read(response: httpx.Response) -> bool:
	try:
		response.content
	except httpx.ResponseNotRead:
		return False
	return True
