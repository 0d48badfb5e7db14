# (c) Copyright Datacraft, 2026
"""
Comparison operators: eq, neq, gt, gte, lt, lte.

Equality is structural on the raw values. Ordering first tries to read
both sides as instants; failing that, both sides must share a primitive
kind (integer, floating or string) and are compared natively.
"""
from typing import Any

from ..coerce import ValueKind, deep_equal, to_time, value_kind
from ..errors import CoercionError, PolicyError, TypeMismatchError
from ..operators import Operator
from .base import resolve_required

_ORDERED_KINDS = frozenset({ValueKind.INTEGER, ValueKind.FLOATING, ValueKind.STRING})


class ComparisonHandler:
	"""Evaluates the comparison operators; a missing attribute is an error."""

	def evaluate(self, condition, resolver) -> bool:
		actual = resolve_required(condition, resolver)
		expected = condition.value
		op = str(condition.operator)

		match condition.operator:
			case Operator.EQUAL:
				return deep_equal(actual, expected)
			case Operator.NOT_EQUAL:
				return not deep_equal(actual, expected)
			case Operator.GREATER_THAN:
				return greater(actual, expected, op)
			case Operator.GREATER_THAN_OR_EQUAL:
				return greater(actual, expected, op) or deep_equal(actual, expected)
			case Operator.LESS_THAN:
				gt = greater(actual, expected, op)
				return not gt and not deep_equal(actual, expected)
			case Operator.LESS_THAN_OR_EQUAL:
				return not greater(actual, expected, op) or deep_equal(actual, expected)
			case _:
				raise PolicyError(f"unsupported comparison operator: {op}", operator=op)


def greater(left: Any, right: Any, operator: str | None = None) -> bool:
	"""
	Strict ``left > right`` under the comparison typing rules.

	Raises:
		TypeMismatchError: if the sides differ in kind or the kind is unordered
	"""
	try:
		left_time, right_time = to_time(left), to_time(right)
	except CoercionError:
		pass
	else:
		return left_time > right_time

	left_kind = value_kind(left)
	right_kind = value_kind(right)
	if left_kind is not right_kind:
		raise TypeMismatchError(
			f"cannot compare different types: {type(left).__name__} x {type(right).__name__}",
			operator=operator,
		)
	if left_kind not in _ORDERED_KINDS:
		raise TypeMismatchError(
			f"unsupported type for comparison: {type(left).__name__}",
			operator=operator,
		)
	return left > right
