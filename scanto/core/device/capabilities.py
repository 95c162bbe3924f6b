# (c) Copyright Datacraft, 2026
"""Read-only device self-description: discovery tree, manifests, caps."""
from .base import DeviceComponent
from .models import DiscoveryTree, Manifest, ScanCaps, WalkupScanToCompCaps


DISCOVERY_TREE_PATH = '/DevMgmt/DiscoveryTree.xml'


class CapabilitiesReader(DeviceComponent):
	"""Fetches the static documents describing what the device supports."""

	async def discovery_tree(self) -> DiscoveryTree:
		return await self._get_document(DISCOVERY_TREE_PATH, DiscoveryTree.parse)

	async def walkup_scan_manifest(self, uri: str) -> Manifest:
		return await self._get_document(uri, Manifest.parse)

	async def walkup_scan_to_comp_manifest(self, uri: str) -> Manifest:
		return await self._get_document(uri, Manifest.parse)

	async def scan_job_manifest(self, uri: str) -> Manifest:
		return await self._get_document(uri, Manifest.parse)

	async def scan_caps(self, uri: str) -> ScanCaps:
		return await self._get_document(uri, ScanCaps.parse)

	async def walkup_scan_to_comp_caps(self, uri: str) -> WalkupScanToCompCaps:
		return await self._get_document(uri, WalkupScanToCompCaps.parse)

	async def supports_scan_to_comp(self) -> bool:
		"""Whether the device publishes the scan-to-computer service."""
		tree = await self.discovery_tree()
		return tree.walkup_scan_to_comp_manifest_uri is not None
