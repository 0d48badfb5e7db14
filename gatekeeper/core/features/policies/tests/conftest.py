# (c) Copyright Datacraft, 2026
"""Pytest fixtures for policy condition tests."""
import logging
from datetime import datetime, timezone

import pytest

from gatekeeper.core.config import settings as settings_module
from gatekeeper.core.features.policies.context import MapAttributes, resolve_path
from gatekeeper.core.features.policies.engine import ConditionEngine


class CountingResolver:
	"""Resolver that records every attribute lookup."""

	def __init__(self, attributes: dict):
		self.attributes = attributes
		self.lookups: list[str] = []

	def resolve(self, name: str):
		self.lookups.append(name)
		return resolve_path(self.attributes, name)


@pytest.fixture
def engine():
	"""Engine with the default handlers."""
	return ConditionEngine()


@pytest.fixture
def counting_resolver():
	"""Factory for resolvers that count lookups."""
	return CountingResolver


@pytest.fixture
def request_attributes():
	"""Nested attribute context for a typical access request."""
	return MapAttributes({
		"subject": {
			"id": "u-42",
			"roles": ["editor", "reviewer"],
			"department": {"name": "finance", "level": 3},
			"clearance": 2,
		},
		"resource": {
			"type": "document",
			"tags": ["invoice", "2024"],
			"classification": "internal",
			"size": 2048,
		},
		"environment": {
			"time": datetime(2024, 6, 15, 9, 30, tzinfo=timezone.utc),
			"ip": "10.0.0.7",
		},
		"action": "read",
	})


@pytest.fixture
def fresh_settings(monkeypatch):
	"""Drop the settings singleton so get_settings rebuilds it."""
	monkeypatch.setattr(settings_module, "_settings", None)
	yield
	settings_module._settings = None


@pytest.fixture
def restore_root_level():
	"""Restore the root logger level after the test."""
	root = logging.getLogger()
	level = root.level
	yield root
	root.setLevel(level)
