# (c) Copyright Datacraft, 2026
"""Temporal operators: before, after."""
from ..coerce import to_time
from ..errors import PolicyError
from ..operators import Operator
from .base import resolve_required


class TemporalHandler:
	"""Compares attribute and value as instants; both must parse as times."""

	def evaluate(self, condition, resolver) -> bool:
		actual = to_time(resolve_required(condition, resolver))
		expected = to_time(condition.value)

		match condition.operator:
			case Operator.BEFORE:
				return actual < expected
			case Operator.AFTER:
				return actual > expected
			case _:
				op = str(condition.operator)
				raise PolicyError(f"unsupported temporal operator: {op}", operator=op)
