# (c) Copyright Datacraft, 2026
"""Application settings configuration."""
import socket
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from scanto.core.device.session import DEFAULT_JOB_PORT, DEFAULT_PORT, DeviceSession


class Settings(BaseSettings):
	device_ip: str = '192.168.1.11'
	device_port: int = Field(gt=0, default=DEFAULT_PORT)
	job_port: int = Field(gt=0, default=DEFAULT_JOB_PORT)
	# log every request/response pair
	debug: bool = False
	log_config: Path | None = None

	# Name shown on the device panel
	label: str = Field(default_factory=socket.gethostname)
	output_dir: Path = Path('scans')

	# Scan job
	resolution: int = Field(gt=0, default=200)
	# deciseconds the device may hold an event poll open
	event_timeout: int = Field(ge=0, default=1200)
	job_poll_interval: float = Field(gt=0, default=1.0)

	model_config = SettingsConfigDict(
		env_prefix='scanto_',
		env_file='.env',
		env_file_encoding='utf-8',
		extra='ignore',
	)

	def session(self) -> DeviceSession:
		return DeviceSession(
			host=self.device_ip,
			port=self.device_port,
			job_port=self.job_port,
			debug=self.debug,
		)


_settings: Settings | None = None


def get_settings() -> Settings:
	global _settings
	if _settings is None:
		_settings = Settings()
	return _settings
