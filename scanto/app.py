# (c) Copyright Datacraft, 2026
import asyncio
import logging
import os
from logging.config import dictConfig
from pathlib import Path

import yaml

from scanto.core.config import Settings, get_settings
from scanto.core.device import HPDevice, TransportError
from scanto.core.workflow import ScanToComputer

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
	logging_config_path = settings.log_config or Path(
		os.environ.get("SCANTO_LOGGING_CFG", "/etc/scanto/logging.yaml")
	)

	if logging_config_path.exists() and logging_config_path.is_file():
		with open(logging_config_path, "r") as stream:
			config = yaml.load(stream, Loader=yaml.FullLoader)

		dictConfig(config)
		return

	logging.basicConfig(
		level=logging.DEBUG if settings.debug else logging.INFO,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)


async def main(settings: Settings) -> None:
	logger.info(f"Connecting to device {settings.device_ip}...")

	async with HPDevice(settings.session()) as device:
		workflow = ScanToComputer(
			device,
			label=settings.label,
			output_dir=settings.output_dir,
			resolution=settings.resolution,
			event_timeout=settings.event_timeout,
			poll_interval=settings.job_poll_interval,
		)
		try:
			await workflow.listen()
		finally:
			if device.reachability.reported_down:
				logger.debug("Device is down, leaving the destination registered")
			else:
				try:
					await workflow.unregister_destination()
				except TransportError as e:
					# must not mask the error that ended the loop
					logger.warning(f"Could not remove destination {workflow.destination_locator}: {e}")


def run() -> None:
	settings = get_settings()
	setup_logging(settings)

	try:
		asyncio.run(main(settings))
	except KeyboardInterrupt:
		logger.info("Stopped")


if __name__ == "__main__":
	run()
