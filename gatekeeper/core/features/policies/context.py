# (c) Copyright Datacraft, 2026
"""
Attribute context for condition evaluation.

A resolver answers ``resolve(name) -> (value, present)``. Names may be dotted
paths ("subject.department.name") that descend through nested mappings and
record-like objects (dataclasses, named tuples, pydantic models, plain
objects). ``present`` is True whenever the final key exists, even if its
value is None.
"""
import dataclasses
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

_MISSING: tuple[Any, bool] = (None, False)


@runtime_checkable
class AttributeResolver(Protocol):
	def resolve(self, name: str) -> tuple[Any, bool]: ...


class MapAttributes(dict):
	"""Dict-backed resolver supporting dotted paths."""

	def resolve(self, name: str) -> tuple[Any, bool]:
		return resolve_path(self, name)


def resolve_path(root: Any, name: str) -> tuple[Any, bool]:
	"""
	Walk a dotted name left to right starting at root.

	Mapping segments are matched exactly, record fields case-insensitively.
	Empty segments (leading, trailing or doubled dots) never match. Never
	raises.
	"""
	if not isinstance(name, str) or not name:
		return _MISSING

	current = root
	for segment in name.split("."):
		if not segment:
			return _MISSING
		if isinstance(current, Mapping):
			try:
				if segment not in current:
					return _MISSING
				current = current[segment]
			except (KeyError, TypeError):
				return _MISSING
			continue

		field = _match_field(current, segment)
		if field is None:
			return _MISSING
		try:
			current = getattr(current, field)
		except AttributeError:
			return _MISSING

	return current, True


def as_resolver(context: Any) -> AttributeResolver:
	"""Wrap a plain mapping in MapAttributes, pass resolvers through."""
	if isinstance(context, AttributeResolver):
		return context
	if isinstance(context, Mapping):
		return MapAttributes(context)
	raise TypeError(f"context must be a mapping or an AttributeResolver, got {type(context).__name__}")


def _match_field(record: Any, segment: str) -> str | None:
	wanted = segment.lower()
	for field in _field_names(record):
		if field.lower() == wanted:
			return field
	return None


def _field_names(record: Any) -> list[str]:
	if record is None or isinstance(record, (str, bytes, bytearray, int, float, list, tuple, set, frozenset)):
		# Named tuples are the one tuple flavour with fields
		if isinstance(record, tuple) and hasattr(record, "_fields"):
			return [f for f in record._fields if not f.startswith("_")]
		return []

	if dataclasses.is_dataclass(record) and not isinstance(record, type):
		return [f.name for f in dataclasses.fields(record) if not f.name.startswith("_")]

	names: list[str] = []
	model_fields = getattr(type(record), "model_fields", None)
	if isinstance(model_fields, Mapping):
		names.extend(model_fields)
	if hasattr(record, "__dict__"):
		names.extend(vars(record))
	for cls in type(record).__mro__:
		slots = cls.__dict__.get("__slots__", ())
		if isinstance(slots, str):
			slots = (slots,)
		names.extend(slots)
	return [name for name in dict.fromkeys(names) if not name.startswith("_")]
