# (c) Copyright Datacraft, 2026
"""
Half-open validity interval ``[start, end)`` for policies.

An interval without an end is open-ended. Instances are immutable; the
``with_*`` methods return new ranges and re-check the invariants.
"""
from datetime import datetime, timedelta
from typing import Any

from .coerce import ensure_aware, to_time


class TimeRangeError(ValueError):
	"""Invalid time range."""
	pass


class ZeroStartError(TimeRangeError):
	"""Range start is missing or the zero instant."""
	pass


class EndBeforeStartError(TimeRangeError):
	"""Range end precedes its start."""
	pass


class SplitOutsideError(TimeRangeError):
	"""Split point does not fall strictly inside the range."""
	pass


def _is_zero(value: datetime) -> bool:
	return value.replace(tzinfo=None) == datetime.min


class TimeRange:
	"""
	Time interval with an inclusive start and an exclusive, optional end.

	Naive datetimes are read as UTC.

	Usage:
		period = TimeRange(datetime(2026, 1, 1, tzinfo=timezone.utc))
		if period.contains(now):
			...
	"""

	__slots__ = ("_start", "_end")

	def __init__(self, start: datetime | None, end: datetime | None = None):
		if start is None or _is_zero(start):
			raise ZeroStartError("start time cannot be zero")
		start = ensure_aware(start)
		if end is not None:
			end = ensure_aware(end)
			if end < start:
				raise EndBeforeStartError("end time cannot be before start")
		self._start = start
		self._end = end

	@property
	def start(self) -> datetime:
		return self._start

	@property
	def end(self) -> datetime | None:
		return self._end

	@property
	def is_open_ended(self) -> bool:
		return self._end is None

	@property
	def is_empty(self) -> bool:
		return self._end is not None and self._start == self._end

	@property
	def duration(self) -> timedelta:
		"""Length of the range; open-ended ranges report zero."""
		if self._end is None:
			return timedelta(0)
		return self._end - self._start

	def contains(self, at: datetime) -> bool:
		at = ensure_aware(at)
		if at < self._start:
			return False
		return self._end is None or at < self._end

	def __contains__(self, at: datetime) -> bool:
		return self.contains(at)

	def overlaps(self, other: "TimeRange") -> bool:
		return self.intersect(other) is not None

	def intersect(self, other: "TimeRange") -> "TimeRange | None":
		"""Return the common part of both ranges, None if they do not meet."""
		start = max(self._start, other._start)
		if self._end is None:
			end = other._end
		elif other._end is None:
			end = self._end
		else:
			end = min(self._end, other._end)

		if end is not None and not start < end:
			return None
		return TimeRange(start, end)

	def clamp(self, bounds: "TimeRange") -> "TimeRange | None":
		return self.intersect(bounds)

	def split(self, at: datetime) -> tuple["TimeRange", "TimeRange"]:
		at = ensure_aware(at)
		if not self.contains(at) or at == self._start:
			raise SplitOutsideError("split time outside range")
		return TimeRange(self._start, at), TimeRange(at, self._end)

	def with_start(self, start: datetime) -> "TimeRange":
		return TimeRange(start, self._end)

	def with_end(self, end: datetime | None) -> "TimeRange":
		return TimeRange(self._start, end)

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, TimeRange):
			return NotImplemented
		return self._start == other._start and self._end == other._end

	def __hash__(self) -> int:
		return hash((self._start, self._end))

	def __repr__(self) -> str:
		end = self._end.isoformat() if self._end else None
		return f"TimeRange(start={self._start.isoformat()!r}, end={end!r})"

	def to_dict(self) -> dict:
		return {
			"start": self._start.isoformat(),
			"end": self._end.isoformat() if self._end else None,
		}

	@classmethod
	def from_dict(cls, data: dict[str, Any]) -> "TimeRange":
		start = data.get("start")
		end = data.get("end")
		return cls(
			to_time(start) if start is not None else None,
			to_time(end) if end is not None else None,
		)
