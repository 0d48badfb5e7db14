# (c) Copyright Datacraft, 2026
"""Range operator: between."""
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..coerce import to_number, to_string, to_time
from ..errors import CoercionError, InvalidBetweenSpecError, PolicyError, TypeMismatchError
from ..operators import Operator
from .base import resolve_required


@dataclass(frozen=True)
class Bounds:
	"""Parsed ``between`` operand."""
	low: Any
	high: Any
	inclusive: bool = True


def parse_bounds(value: Any, operator: str | None = None) -> Bounds:
	"""
	Read a ``between`` operand.

	Accepted shapes:
		[min, max]
		[min, max, inclusive]
		{"min": ..., "max": ..., "inclusive": ...}   (inclusive optional)

	``inclusive`` defaults to True and must be a boolean.
	"""
	if value is None:
		raise InvalidBetweenSpecError("between requires min and max", operator=operator)

	if isinstance(value, (list, tuple)):
		if not 2 <= len(value) <= 3:
			raise InvalidBetweenSpecError(
				"between requires 2 or 3 args: min, max, (inclusive)",
				operator=operator,
			)
		inclusive = value[2] if len(value) == 3 else True
		return Bounds(value[0], value[1], _check_inclusive(inclusive, operator))

	if isinstance(value, Mapping):
		if "min" not in value or "max" not in value:
			raise InvalidBetweenSpecError("between requires min and max in map form", operator=operator)
		inclusive = value.get("inclusive", True)
		return Bounds(value["min"], value["max"], _check_inclusive(inclusive, operator))

	raise InvalidBetweenSpecError(
		f"unsupported between value type: {type(value).__name__}",
		operator=operator,
	)


def _check_inclusive(flag: Any, operator: str | None) -> bool:
	if not isinstance(flag, bool):
		raise InvalidBetweenSpecError("inclusive flag must be a boolean", operator=operator)
	return flag


class RangeHandler:
	"""
	Evaluates ``between``.

	The operands are tried as instants, then numbers, then strings; the first
	representation all three values share decides the comparison. A reversed
	numeric or string range (min > max) contains nothing.
	"""

	def evaluate(self, condition, resolver) -> bool:
		op = str(condition.operator)
		if condition.operator != Operator.BETWEEN:
			raise PolicyError(f"unsupported range operator: {op}", operator=op)

		actual = resolve_required(condition, resolver)
		bounds = parse_bounds(condition.value, op)

		for convert, check_order in ((to_time, False), (to_number, True), (to_string, True)):
			try:
				value = convert(actual)
				low = convert(bounds.low)
				high = convert(bounds.high)
			except CoercionError:
				continue
			if check_order and low > high:
				return False
			return _within(value, low, high, bounds.inclusive)

		raise TypeMismatchError(
			"mismatched types for between: "
			f"{type(actual).__name__}, {type(bounds.low).__name__}, {type(bounds.high).__name__}",
			operator=op,
			attribute=condition.attribute,
		)


def _within(value: Any, low: Any, high: Any, inclusive: bool) -> bool:
	if inclusive:
		return low <= value <= high
	return low < value < high
