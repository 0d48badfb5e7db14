# (c) Copyright Datacraft, 2026
"""Engine settings configuration."""
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	log_config: Path | None = None
	log_level: str = "INFO"

	# Condition trees deeper than this are rejected by the validator, 0 disables
	max_condition_depth: int = Field(ge=0, default=32)

	model_config = SettingsConfigDict(
		env_prefix='gk_',
		env_file='.env',
		env_file_encoding='utf-8',
		extra='ignore',
	)


_settings: Settings | None = None


def get_settings() -> Settings:
	global _settings
	if _settings is None:
		_settings = Settings()
	return _settings
