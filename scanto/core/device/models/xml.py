# (c) Copyright Datacraft, 2026
"""Shared helpers for the device's LEDM XML documents."""
import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape

# LEDM XML namespaces
NAMESPACES = {
	'dd': 'http://www.hp.com/schemas/imaging/con/dictionaries/1.0/',
	'dd3': 'http://www.hp.com/schemas/imaging/con/dictionaries/2009/04/06',
	'ev': 'http://www.hp.com/schemas/imaging/con/ledm/events/2007/09/16',
	'wus': 'http://www.hp.com/schemas/imaging/con/rest/walkupscan/2009/09/21',
	'wustc': 'http://www.hp.com/schemas/imaging/con/rest/walkupscantocomp/2010/09/28',
	'scan': 'http://www.hp.com/schemas/imaging/con/cnx/scan/2008/08/19',
	'j': 'http://www.hp.com/schemas/imaging/con/ledm/jobs/2009/04/30',
	'ledm': 'http://www.hp.com/schemas/imaging/con/ledm/2007/09/21',
	'man': 'http://www.hp.com/schemas/imaging/con/ledm/manifest/2009/03/25',
	'map': 'http://www.hp.com/schemas/imaging/con/ledm/resourcemap/2009/03/25',
}


def parse_root(xml_text: str) -> ET.Element:
	"""Parse a document; raises ``ET.ParseError`` on malformed input."""
	return ET.fromstring(xml_text)


def find_text(element: ET.Element, path: str, default: str | None = None) -> str | None:
	"""
	Text of the first match of ``path``.

	Firmware versions disagree on namespaces, so paths are written with the
	``{*}`` wildcard, e.g. ``'{*}Payload/{*}ResourceURI'``.
	"""
	found = element.find(path)
	if found is None or found.text is None:
		return default
	return found.text.strip()


def find_int(element: ET.Element, path: str, default: int | None = None) -> int | None:
	text = find_text(element, path)
	if text is None:
		return default
	try:
		return int(text)
	except ValueError:
		return default


def find_bool(element: ET.Element, path: str, default: bool = False) -> bool:
	text = find_text(element, path)
	if text is None:
		return default
	return text.lower() == 'true'


def escape_text(value: object) -> str:
	return escape(str(value))
