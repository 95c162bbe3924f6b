# (c) Copyright Datacraft, 2026
"""Scan job settings, job documents and scanner status."""
from dataclasses import dataclass, field
from enum import Enum

from .xml import NAMESPACES, find_int, find_text, parse_root, escape_text


class InputSource(str, Enum):
	PLATEN = 'Platen'
	ADF = 'Adf'


class JobState(str, Enum):
	"""State of a job as reported by the device."""
	PENDING = 'Pending'
	PROCESSING = 'Processing'
	COMPLETED = 'Completed'
	CANCELED = 'Canceled'
	ABORTED = 'Aborted'
	UNKNOWN = 'Unknown'

	@classmethod
	def _missing_(cls, value):
		return cls.UNKNOWN


class PageState(str, Enum):
	PREPARING_SCAN = 'PreparingScan'
	READY_TO_UPLOAD = 'ReadyToUpload'
	UPLOAD_COMPLETED = 'UploadCompleted'
	CANCELED_BY_DEVICE = 'CanceledByDevice'
	CANCEL_JOB_REQUEST = 'CancelJobRequest'
	UNKNOWN = 'Unknown'

	@classmethod
	def _missing_(cls, value):
		return cls.UNKNOWN


@dataclass
class ScanJobSettings:
	"""Settings posted to ``/Scan/Jobs``. Dimensions are in 1/300 inch."""
	input_source: InputSource = InputSource.PLATEN
	resolution: int = 200
	content_type: str = 'Document'  # Document, Photo
	format: str = 'Jpeg'
	color_space: str = 'Color'  # Color, Gray
	width: int = 2550  # Letter width
	height: int = 3300  # Letter height
	duplex: bool = False
	compression_q_factor: int = 25

	def to_xml(self) -> str:
		xml = f'''<?xml version="1.0" encoding="UTF-8"?>
<ScanSettings xmlns="{NAMESPACES['scan']}"
              xmlns:dd="{NAMESPACES['dd']}">
    <XResolution>{self.resolution}</XResolution>
    <YResolution>{self.resolution}</YResolution>
    <XStart>0</XStart>
    <YStart>0</YStart>
    <Width>{self.width}</Width>
    <Height>{self.height}</Height>
    <Format>{escape_text(self.format)}</Format>
    <CompressionQFactor>{self.compression_q_factor}</CompressionQFactor>
    <ColorSpace>{escape_text(self.color_space)}</ColorSpace>
    <BitDepth>8</BitDepth>
    <InputSource>{self.input_source.value}</InputSource>
    <GrayRendering>NTSC</GrayRendering>
    <ToneMap>
        <Gamma>1000</Gamma>
        <Brightness>1000</Brightness>
        <Contrast>1000</Contrast>
        <Highlite>179</Highlite>
        <Shadow>25</Shadow>
    </ToneMap>
    <ContentType>{escape_text(self.content_type)}</ContentType>'''

		if self.duplex and self.input_source is InputSource.ADF:
			xml += '\n    <AdfOptions>\n        <AdfOption>Duplex</AdfOption>\n    </AdfOptions>'

		xml += '\n</ScanSettings>'
		return xml


@dataclass
class JobPage:
	"""A page of a job, merged from its pre-scan and post-scan entries."""
	number: int
	state: PageState = PageState.UNKNOWN
	binary_url: str | None = None
	width: int | None = None
	height: int | None = None
	total_lines: int | None = None


@dataclass
class Job:
	"""Point-in-time read of a scan job. Never cached."""
	state: JobState
	job_url: str | None = None
	category: str | None = None
	state_update: str | None = None
	pages: list[JobPage] = field(default_factory=list)

	@property
	def is_processing(self) -> bool:
		return self.state in (JobState.PENDING, JobState.PROCESSING)

	@property
	def is_completed(self) -> bool:
		return self.state is JobState.COMPLETED

	@property
	def is_failed(self) -> bool:
		if self.state in (JobState.CANCELED, JobState.ABORTED):
			return True
		return any(
			page.state in (PageState.CANCELED_BY_DEVICE, PageState.CANCEL_JOB_REQUEST)
			for page in self.pages
		)

	@property
	def is_finished(self) -> bool:
		return self.is_completed or self.is_failed

	def pages_ready(self) -> list[JobPage]:
		"""Pages whose image can be downloaded."""
		return [
			page for page in self.pages
			if page.binary_url and page.state is PageState.READY_TO_UPLOAD
		]

	@classmethod
	def parse(cls, xml_text: str) -> "Job":
		root = parse_root(xml_text)
		pages: dict[int, JobPage] = {}

		for node in root.findall('.//{*}PreScanPage'):
			number = find_int(node, '{*}PageNumber', 0)
			page = pages.setdefault(number, JobPage(number))
			page.state = PageState(find_text(node, '{*}PageState', ''))
			page.binary_url = find_text(node, '{*}BinaryURL')
			page.width = find_int(node, '{*}BufferInfo/{*}ImageWidth')
			page.height = find_int(node, '{*}BufferInfo/{*}ImageHeight')

		# post-scan entries describe the page after upload and win
		for node in root.findall('.//{*}PostScanPage'):
			number = find_int(node, '{*}PageNumber', 0)
			page = pages.setdefault(number, JobPage(number))
			page.state = PageState(find_text(node, '{*}PageState', ''))
			page.total_lines = find_int(node, '{*}TotalLines')

		return cls(
			state=JobState(find_text(root, '{*}JobState', '')),
			job_url=find_text(root, '{*}JobUrl'),
			category=find_text(root, '{*}JobCategory'),
			state_update=find_text(root, '{*}JobStateUpdate'),
			pages=[pages[number] for number in sorted(pages)],
		)


@dataclass
class ScanStatus:
	"""Scanner state from ``/Scan/Status``."""
	scanner_state: str
	adf_state: str | None = None

	@property
	def is_idle(self) -> bool:
		return self.scanner_state == 'Idle'

	@property
	def is_loaded(self) -> bool:
		"""Paper is waiting in the document feeder."""
		return self.adf_state == 'Loaded'

	@property
	def input_source(self) -> InputSource:
		return InputSource.ADF if self.is_loaded else InputSource.PLATEN

	@classmethod
	def parse(cls, xml_text: str) -> "ScanStatus":
		root = parse_root(xml_text)
		return cls(
			scanner_state=find_text(root, '{*}ScannerState', ''),
			adf_state=find_text(root, '{*}AdfState'),
		)
