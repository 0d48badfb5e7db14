# (c) Copyright Datacraft, 2026
"""Logging setup from a YAML dictConfig file."""
import logging
from logging.config import dictConfig
from pathlib import Path

import yaml

from .settings import get_settings


def configure_logging(path: Path | str | None = None) -> bool:
	"""
	Configure logging from a YAML file.

	Falls back to ``Settings.log_config`` when no path is given. When no file
	is available the root logger level is set from ``Settings.log_level``.

	Returns:
		True if a config file was loaded
	"""
	settings = get_settings()
	config_path = Path(path) if path is not None else settings.log_config

	if config_path is not None and config_path.exists() and config_path.is_file():
		with open(config_path, "r") as stream:
			config = yaml.safe_load(stream)
		dictConfig(config)
		return True

	logging.getLogger().setLevel(settings.log_level.upper())
	return False
