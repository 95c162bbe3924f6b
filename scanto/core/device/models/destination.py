# (c) Copyright Datacraft, 2026
"""Walkup scan destinations and scan-to-computer events."""
from dataclasses import dataclass
from enum import Enum

from .xml import NAMESPACES, find_text, parse_root, escape_text


class DestinationKind(str, Enum):
	"""
	The two destination flavours the device understands.

	Both play the same role but live under different endpoints and use
	different XML shapes. All variant-specific choices go through this enum.
	"""
	WALKUP_SCAN = 'walkup_scan'
	WALKUP_SCAN_TO_COMP = 'walkup_scan_to_comp'

	@property
	def collection_path(self) -> str:
		if self is DestinationKind.WALKUP_SCAN_TO_COMP:
			return '/WalkupScanToComp/WalkupScanToCompDestinations'
		return '/WalkupScan/WalkupScanDestinations'

	@property
	def element_name(self) -> str:
		if self is DestinationKind.WALKUP_SCAN_TO_COMP:
			return 'WalkupScanToCompDestination'
		return 'WalkupScanDestination'

	@property
	def namespace(self) -> str:
		if self is DestinationKind.WALKUP_SCAN_TO_COMP:
			return NAMESPACES['wustc']
		return NAMESPACES['wus']

	@property
	def settings_element(self) -> str:
		if self is DestinationKind.WALKUP_SCAN_TO_COMP:
			return 'WalkupScanToCompSettings'
		return 'WalkupScanSettings'

	@classmethod
	def for_locator(cls, locator: str) -> "DestinationKind":
		"""Variant a destination locator belongs to."""
		if 'WalkupScanToComp' in locator:
			return cls.WALKUP_SCAN_TO_COMP
		return cls.WALKUP_SCAN

	def parse(self, xml_text: str) -> "Destination":
		return Destination.from_element(self, parse_root(xml_text))

	def parse_many(self, xml_text: str) -> list["Destination"]:
		root = parse_root(xml_text)
		return [
			Destination.from_element(self, node)
			for node in root.findall(f'.//{{*}}{self.element_name}')
		]


@dataclass
class Destination:
	"""A target the device can scan into when its button is pressed."""
	kind: DestinationKind
	name: str
	hostname: str
	link_type: str = 'Network'
	# SavePDF, SaveJPEG, EmailPDF... chosen on the device panel
	shortcut: str | None = None
	resource_uri: str | None = None

	@classmethod
	def from_element(cls, kind: DestinationKind, node) -> "Destination":
		return cls(
			kind=kind,
			name=find_text(node, '{*}Name', ''),
			hostname=find_text(node, '{*}Hostname', '') or find_text(node, '{*}HostName', ''),
			link_type=find_text(node, '{*}LinkType', 'Network'),
			shortcut=find_text(node, f'{{*}}{kind.settings_element}/{{*}}Shortcut'),
			resource_uri=find_text(node, '{*}ResourceURI'),
		)

	def to_xml(self) -> str:
		kind = self.kind
		xml = f'''<?xml version="1.0" encoding="UTF-8"?>
<{kind.element_name} xmlns="{kind.namespace}"
                     xmlns:dd="{NAMESPACES['dd']}"
                     xmlns:dd3="{NAMESPACES['dd3']}">
    <dd:Hostname>{escape_text(self.hostname)}</dd:Hostname>
    <dd:Name>{escape_text(self.name)}</dd:Name>
    <dd:LinkType>{escape_text(self.link_type)}</dd:LinkType>'''

		if self.shortcut:
			xml += f'''
    <{kind.settings_element}>
        <ScanSettings>
            <dd3:ScanPlexMode>Simplex</dd3:ScanPlexMode>
        </ScanSettings>
        <Shortcut>{escape_text(self.shortcut)}</Shortcut>
    </{kind.settings_element}>'''

		xml += f'\n</{kind.element_name}>'
		return xml


class CompEventType(str, Enum):
	"""What the user just did on the device panel."""
	HOST_SELECTED = 'HostSelected'
	SCAN_REQUESTED = 'ScanRequested'
	SCAN_NEW_PAGE_REQUESTED = 'ScanNewPageRequested'
	SCAN_PAGES_COMPLETE = 'ScanPagesComplete'
	UNKNOWN = 'Unknown'

	@classmethod
	def _missing_(cls, value):
		return cls.UNKNOWN


@dataclass
class WalkupScanToCompEvent:
	"""Document behind a scan-to-computer event payload."""
	event_type: CompEventType

	@property
	def wants_scan(self) -> bool:
		return self.event_type in (
			CompEventType.SCAN_REQUESTED,
			CompEventType.SCAN_NEW_PAGE_REQUESTED,
		)

	@classmethod
	def parse(cls, xml_text: str) -> "WalkupScanToCompEvent":
		root = parse_root(xml_text)
		return cls(CompEventType(find_text(root, '{*}WalkupScanToCompEventType', '')))
