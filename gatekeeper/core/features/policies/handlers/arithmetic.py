# (c) Copyright Datacraft, 2026
"""Arithmetic operators: mod."""
import math

from ..coerce import to_number
from ..errors import DivisionByZeroError, PolicyError
from ..operators import Operator
from .base import resolve_required

# Remainders this close to zero count as exact divisibility
MOD_TOLERANCE = 1e-9


class ArithmeticHandler:
	"""
	Evaluates ``mod`` as a divisibility test: true when attribute % value == 0.

	Both sides go through to_number, so numeric strings are accepted.
	"""

	def evaluate(self, condition, resolver) -> bool:
		op = str(condition.operator)
		if condition.operator != Operator.MOD:
			raise PolicyError(f"unsupported arithmetic operator: {op}", operator=op)

		dividend = to_number(resolve_required(condition, resolver))
		divisor = to_number(condition.value)
		if divisor == 0:
			raise DivisionByZeroError("modulo by zero", operator=op, attribute=condition.attribute)

		# Infinite or NaN operands divide nothing
		if not (math.isfinite(dividend) and math.isfinite(divisor)):
			return False
		return abs(math.fmod(dividend, divisor)) < MOD_TOLERANCE
