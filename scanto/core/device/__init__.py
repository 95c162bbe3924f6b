# (c) Copyright Datacraft, 2026
"""Client for the LEDM HTTP API of HP all-in-one devices."""
from .capabilities import CapabilitiesReader
from .client import HPDevice
from .destinations import DestinationRegistry
from .events import EventWatcher
from .exceptions import ConnectivityError, DeviceError, ProtocolError, TransportError
from .jobs import JobController
from .reachability import ReachabilityMonitor
from .session import DeviceSession
from .transport import TransportClient, TransportResponse

__all__ = [
	'CapabilitiesReader',
	'HPDevice',
	'DestinationRegistry',
	'EventWatcher',
	'ConnectivityError',
	'DeviceError',
	'ProtocolError',
	'TransportError',
	'JobController',
	'ReachabilityMonitor',
	'DeviceSession',
	'TransportClient',
	'TransportResponse',
]
