# (c) Copyright Datacraft, 2026
"""Errors raised while talking to the device."""
from typing import Mapping


class DeviceError(Exception):
	"""Base class for device communication errors."""

	def __init__(self, message: str, cause: Exception | None = None):
		self.message = message
		self.cause = cause
		super().__init__(message)


class ConnectivityError(DeviceError):
	"""The device did not accept a raw TCP connection."""

	def __init__(self, host: str, port: int, cause: Exception | None = None):
		self.host = host
		self.port = port
		super().__init__(f"Device {host}:{port} is unreachable", cause)


class TransportError(DeviceError):
	"""
	The HTTP exchange failed.

	When the device answered, ``status``, ``headers`` and ``body`` hold what it
	sent. When it did not (refused, reset, DNS failure, timeout) they are all
	``None`` and ``unreachable`` is true.
	"""

	def __init__(
		self,
		message: str,
		status: int | None = None,
		headers: Mapping[str, str] | None = None,
		body: str | None = None,
		cause: Exception | None = None,
	):
		self.status = status
		self.headers = dict(headers) if headers is not None else None
		self.body = body
		super().__init__(message, cause)

	@property
	def unreachable(self) -> bool:
		return self.status is None

	def __str__(self) -> str:
		if self.status is None:
			return self.message
		return f"{self.message} (HTTP {self.status})"


class ProtocolError(TransportError):
	"""The device answered, but not the way the operation requires."""

	@classmethod
	def from_response(cls, message: str, response) -> "ProtocolError":
		return cls(
			message,
			status=response.status,
			headers=response.headers,
			body=response.text,
		)

	@classmethod
	def from_transport_error(
		cls,
		message: str,
		error: TransportError,
	) -> "ProtocolError":
		return cls(
			message,
			status=error.status,
			headers=error.headers,
			body=error.body,
			cause=error,
		)
