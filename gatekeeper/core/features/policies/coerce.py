# (c) Copyright Datacraft, 2026
"""
Best-effort value coercion for condition operands.

Attribute values arrive loosely typed (JSON documents, ORM rows, request
headers), so operators convert both sides before comparing them. Each
converter either returns a value of the target type or raises CoercionError
naming the input it could not handle.
"""
import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum, auto
from numbers import Real
from typing import Any

from .errors import CoercionError


# Tried in order, first successful parse wins
TIME_FORMATS: tuple[str, ...] = (
	"%Y-%m-%dT%H:%M:%S%z",     # RFC 3339
	"%Y-%m-%dT%H:%M:%S.%f%z",  # RFC 3339 with fractional seconds
	"%Y-%m-%dT%H:%M:%SZ",
	"%Y-%m-%dT%H:%M:%S",
	"%Y-%m-%d %H:%M:%S",
	"%Y-%m-%d",
	"%m/%d/%Y",
	"%m/%d/%Y %H:%M:%S",
)

# strptime's %f stops at microseconds
_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


class ValueKind(Enum):
	"""Primitive classification used by ordering comparisons."""
	NULL = auto()
	BOOLEAN = auto()
	INTEGER = auto()
	FLOATING = auto()
	STRING = auto()
	AGGREGATE = auto()
	OTHER = auto()


def value_kind(value: Any) -> ValueKind:
	if value is None:
		return ValueKind.NULL
	if isinstance(value, bool):
		return ValueKind.BOOLEAN
	if isinstance(value, int):
		return ValueKind.INTEGER
	if isinstance(value, float):
		return ValueKind.FLOATING
	if isinstance(value, str):
		return ValueKind.STRING
	if isinstance(value, (Mapping, list, tuple, set, frozenset, bytes, bytearray)):
		return ValueKind.AGGREGATE
	return ValueKind.OTHER


def to_number(value: Any) -> float:
	"""
	Convert a value to float.

	Accepts real numbers, Decimal, numeric strings and bytes (surrounding
	whitespace is ignored). Other objects are converted through str() as a
	last resort.

	Raises:
		CoercionError: for None, booleans, empty or non-numeric text
	"""
	if value is None:
		raise CoercionError("cannot convert nil value to number", value)
	if isinstance(value, bool):
		raise CoercionError(f"not numeric: {value!r}", value)
	if isinstance(value, (Real, Decimal)):
		try:
			return float(value)
		except OverflowError as e:
			raise CoercionError(f"number out of float range: {type(value).__name__}", value) from e

	try:
		if isinstance(value, (bytes, bytearray)):
			text = bytes(value).decode("utf-8")
		elif isinstance(value, str):
			text = value
		else:
			text = str(value)
	except UnicodeDecodeError as e:
		raise CoercionError(f"not numeric: {value!r}", value) from e

	text = text.strip()
	if not text:
		raise CoercionError("cannot convert empty string to number", value)
	try:
		return float(text)
	except ValueError as e:
		raise CoercionError(f"not numeric: {value!r}", value) from e


def to_string(value: Any) -> str:
	"""Convert a value to its string form; datetimes are rendered as RFC 3339."""
	if value is None:
		raise CoercionError("cannot convert nil value to string", value)
	if isinstance(value, str):
		return value
	if isinstance(value, (bytes, bytearray)):
		return bytes(value).decode("utf-8", errors="replace")
	if isinstance(value, bool):
		return "true" if value else "false"
	if isinstance(value, (datetime, date)):
		return format_rfc3339(to_time(value))
	try:
		return str(value)
	except ValueError as e:
		# int-to-str digit limit
		raise CoercionError(f"cannot convert {type(value).__name__} to string", value) from e


def to_time(value: Any) -> datetime:
	"""
	Convert a value to a timezone-aware datetime.

	Naive datetimes and zone-less strings are read as UTC. Integers are Unix
	epoch seconds. Strings are parsed against TIME_FORMATS in order.

	Raises:
		CoercionError: when the value cannot be read as an instant
	"""
	if isinstance(value, datetime):
		return ensure_aware(value)
	if isinstance(value, date):
		return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
	if isinstance(value, int) and not isinstance(value, bool):
		try:
			return datetime.fromtimestamp(value, tz=timezone.utc)
		except (OverflowError, OSError, ValueError) as e:
			raise CoercionError(f"epoch out of range: {value}", value) from e
	if isinstance(value, str):
		return _parse_time(value)
	raise CoercionError(f"unsupported time type: {type(value).__name__}", value)


def format_rfc3339(value: datetime) -> str:
	text = ensure_aware(value).isoformat(timespec="seconds")
	if text.endswith("+00:00"):
		return text[:-6] + "Z"
	return text


def deep_equal(left: Any, right: Any) -> bool:
	"""
	Structural equality without coercion.

	Booleans only equal booleans, mappings and lists/tuples are compared
	recursively, and an object always equals itself (so NaN is reflexive).
	"""
	if left is right:
		return True
	if isinstance(left, bool) or isinstance(right, bool):
		return isinstance(left, bool) and isinstance(right, bool) and left == right

	if isinstance(left, Mapping) or isinstance(right, Mapping):
		if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
			return False
		if left.keys() != right.keys():
			return False
		return all(deep_equal(left[key], right[key]) for key in left)

	if isinstance(left, (list, tuple)) or isinstance(right, (list, tuple)):
		if not (isinstance(left, (list, tuple)) and isinstance(right, (list, tuple))):
			return False
		if len(left) != len(right):
			return False
		return all(deep_equal(a, b) for a, b in zip(left, right))

	try:
		return bool(left == right)
	except (TypeError, ValueError):
		return False


def ensure_aware(value: datetime) -> datetime:
	"""Read a naive datetime as UTC."""
	if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
		return value.replace(tzinfo=timezone.utc)
	return value


def _parse_time(text: str) -> datetime:
	candidate = _EXTRA_FRACTION.sub(r"\1", text)
	for fmt in TIME_FORMATS:
		try:
			parsed = datetime.strptime(candidate, fmt)
		except ValueError:
			continue
		return ensure_aware(parsed)
	raise CoercionError(f"unable to parse time string: {text}", text)
