# (c) Copyright Datacraft, 2026
"""Discovery tree, manifests and capability documents."""
from dataclasses import dataclass, field

from .xml import find_bool, find_int, find_text, parse_root


@dataclass
class Resource:
	uri: str
	resource_type: str

	@property
	def type_name(self) -> str:
		return self.resource_type.rsplit(':', 1)[-1]


@dataclass
class DiscoveryTree:
	"""Root of the device's self-description (``/DevMgmt/DiscoveryTree.xml``)."""
	resources: list[Resource] = field(default_factory=list)

	def resource_uri(self, type_name: str) -> str | None:
		for resource in self.resources:
			if resource.type_name == type_name:
				return resource.uri
		return None

	@property
	def walkup_scan_manifest_uri(self) -> str | None:
		return self.resource_uri('WalkupScanManifest')

	@property
	def walkup_scan_to_comp_manifest_uri(self) -> str | None:
		return self.resource_uri('WalkupScanToCompManifest')

	@property
	def scan_job_manifest_uri(self) -> str | None:
		return self.resource_uri('ScanJobManifest')

	@classmethod
	def parse(cls, xml_text: str) -> "DiscoveryTree":
		root = parse_root(xml_text)
		resources = []
		for node in root.findall('{*}SupportedTree') + root.findall('{*}SupportedIfc'):
			uri = find_text(node, '{*}ResourceURI')
			if uri:
				resources.append(Resource(uri, find_text(node, '{*}ResourceType', '')))
		return cls(resources)


@dataclass
class Manifest:
	"""Map of resource type name to URI published under one base node."""
	resources: dict[str, str] = field(default_factory=dict)

	def uri_for(self, type_name: str) -> str | None:
		return self.resources.get(type_name)

	@classmethod
	def parse(cls, xml_text: str) -> "Manifest":
		root = parse_root(xml_text)
		resources = {}
		for node in root.findall('.//{*}ResourceNode'):
			base = find_text(node, '{*}ResourceLink/{*}ResourceURI', '')
			for resource in node.findall('{*}Resources/{*}Resource'):
				uri = find_text(resource, '{*}ResourceLink/{*}ResourceURI')
				type_node = resource.find('{*}ResourceType')
				if uri is None or type_node is None:
					continue
				# the type is wrapped in a per-service element
				names = [child.text.strip() for child in type_node if child.text]
				type_name = names[0] if names else (type_node.text or '').strip()
				if type_name:
					resources[type_name.rsplit(':', 1)[-1]] = base + uri
		return cls(resources)


@dataclass
class ScanCaps:
	"""Physical limits of the flatbed and document feeder."""
	platen_max_width: int | None = None
	platen_max_height: int | None = None
	adf_max_width: int | None = None
	adf_max_height: int | None = None
	has_adf: bool = False
	has_adf_duplex: bool = False
	resolutions: list[int] = field(default_factory=list)

	@classmethod
	def parse(cls, xml_text: str) -> "ScanCaps":
		root = parse_root(xml_text)
		caps = cls()

		platen = root.find('{*}Platen/{*}InputSourceCaps')
		if platen is not None:
			caps.platen_max_width = find_int(platen, '{*}MaxWidth')
			caps.platen_max_height = find_int(platen, '{*}MaxHeight')

		adf = root.find('{*}Adf')
		if adf is not None:
			caps.has_adf = True
			caps.adf_max_width = find_int(adf, '{*}InputSourceCaps/{*}MaxWidth')
			caps.adf_max_height = find_int(adf, '{*}InputSourceCaps/{*}MaxHeight')
			caps.has_adf_duplex = any(
				(option.text or '').strip() == 'Duplex'
				for option in adf.findall('.//{*}AdfOption')
			)

		resolutions = set()
		for node in root.findall('.//{*}Resolution'):
			value = find_int(node, '{*}XResolution')
			if value:
				resolutions.add(value)
		caps.resolutions = sorted(resolutions)
		return caps


@dataclass
class WalkupScanToCompCaps:
	supports_multi_item_scan_from_platen: bool = False

	@classmethod
	def parse(cls, xml_text: str) -> "WalkupScanToCompCaps":
		root = parse_root(xml_text)
		return cls(
			supports_multi_item_scan_from_platen=find_bool(
				root, '{*}SupportsMultiItemScanFromPlaten'
			),
		)
