# (c) Copyright Datacraft, 2026
"""Typed views of the device's XML documents."""
from .destination import CompEventType, Destination, DestinationKind, WalkupScanToCompEvent
from .discovery import DiscoveryTree, Manifest, Resource, ScanCaps, WalkupScanToCompCaps
from .events import Event, EventPayload, EventSnapshot, EventTable
from .job import InputSource, Job, JobPage, JobState, PageState, ScanJobSettings, ScanStatus

__all__ = [
	'CompEventType',
	'Destination',
	'DestinationKind',
	'WalkupScanToCompEvent',
	'DiscoveryTree',
	'Manifest',
	'Resource',
	'ScanCaps',
	'WalkupScanToCompCaps',
	'Event',
	'EventPayload',
	'EventSnapshot',
	'EventTable',
	'InputSource',
	'Job',
	'JobPage',
	'JobState',
	'PageState',
	'ScanJobSettings',
	'ScanStatus',
]
