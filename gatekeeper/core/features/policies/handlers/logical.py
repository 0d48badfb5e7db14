# (c) Copyright Datacraft, 2026
"""
Logical operators: and, or, not.

Children are evaluated through the engine callback, in declared order.
``and`` stops at the first False or the first error. ``or`` stops at the
first True; errors from earlier children are dropped when a later child
succeeds, otherwise the last error is re-raised. ``not`` needs exactly one
child.
"""
import logging

from ..errors import ArityError, PolicyError
from ..operators import Operator
from .base import EvalFunc

logger = logging.getLogger(__name__)


class LogicalHandler:
	"""Evaluates logical nodes by calling back into the engine for each child."""

	def __init__(self, evaluate: EvalFunc):
		self._evaluate = evaluate

	def evaluate(self, condition, resolver) -> bool:
		match condition.operator:
			case Operator.AND:
				return self._all(condition, resolver)
			case Operator.OR:
				return self._any(condition, resolver)
			case Operator.NOT:
				return self._negate(condition, resolver)
			case _:
				op = str(condition.operator)
				raise PolicyError(f"unsupported logical operator: {op}", operator=op)

	def _all(self, condition, resolver) -> bool:
		for child in condition.conditions:
			if not self._evaluate(child, resolver):
				return False
		return True

	def _any(self, condition, resolver) -> bool:
		last_error: PolicyError | None = None
		for child in condition.conditions:
			try:
				if self._evaluate(child, resolver):
					return True
			except PolicyError as e:
				logger.debug(f"or: child {child.operator!s} failed: {e}")
				last_error = e
		if last_error is not None:
			raise last_error
		return False

	def _negate(self, condition, resolver) -> bool:
		if len(condition.conditions) != 1:
			raise ArityError(
				f"not requires exactly one condition, got {len(condition.conditions)}",
				operator=str(Operator.NOT),
			)
		return not self._evaluate(condition.conditions[0], resolver)
