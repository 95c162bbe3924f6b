# (c) Copyright Datacraft, 2026
"""Event table documents served by ``/EventMgmt/EventTable``."""
from dataclasses import dataclass, field

from .xml import find_text, parse_root


SCAN_EVENT = 'ScanEvent'


@dataclass
class EventPayload:
	"""A resource an event refers to."""
	resource_uri: str
	resource_type: str

	@property
	def type_name(self) -> str:
		"""Resource type without its prefix (``wus:Foo`` -> ``Foo``)."""
		return self.resource_type.rsplit(':', 1)[-1]


@dataclass
class Event:
	"""One entry of the event table."""
	category: str
	aging_stamp: str | None = None
	payloads: list[EventPayload] = field(default_factory=list)

	@property
	def is_scan_event(self) -> bool:
		return self.category == SCAN_EVENT

	def _uri_of(self, *type_names: str) -> str | None:
		for payload in self.payloads:
			if payload.type_name in type_names:
				return payload.resource_uri
		return None

	@property
	def destination_uri(self) -> str | None:
		"""Locator of the destination selected on the device, if any."""
		return self._uri_of('WalkupScanToCompDestination', 'WalkupScanDestination')

	@property
	def comp_event_uri(self) -> str | None:
		return self._uri_of('WalkupScanToCompEvent')


@dataclass
class EventTable:
	"""Parsed event feed."""
	events: list[Event] = field(default_factory=list)

	def __len__(self) -> int:
		return len(self.events)

	def __iter__(self):
		return iter(self.events)

	@property
	def scan_events(self) -> list[Event]:
		return [event for event in self.events if event.is_scan_event]

	@classmethod
	def parse(cls, xml_text: str) -> "EventTable":
		root = parse_root(xml_text)
		events = []
		for node in root.findall('{*}Event'):
			payloads = [
				EventPayload(
					resource_uri=find_text(payload, '{*}ResourceURI', ''),
					resource_type=find_text(payload, '{*}ResourceType', ''),
				)
				for payload in node.findall('{*}Payload')
			]
			events.append(Event(
				category=find_text(node, '{*}UnqualifiedEventCategory', ''),
				aging_stamp=find_text(node, '{*}AgingStamp'),
				payloads=payloads,
			))
		return cls(events)


@dataclass(frozen=True)
class EventSnapshot:
	"""
	Event table together with the entity tag that identifies it.

	When the device reports the feed unchanged, ``table`` is empty and
	``etag`` is the tag that was sent, not a new one.
	"""
	etag: str
	table: EventTable
