# (c) Copyright Datacraft, 2026
"""
Errors raised while validating and evaluating policy conditions.

Every evaluation failure is a PolicyError, so callers can catch the whole
family with one except clause. The logical ``or`` operator relies on this to
tell evaluation failures apart from programming errors.
"""
from typing import Any


class PolicyError(Exception):
	"""Base class for condition evaluation and validation errors."""

	def __init__(self, message: str, operator: str | None = None, attribute: str | None = None):
		self.message = message
		self.operator = operator
		self.attribute = attribute
		super().__init__(message)


class UnknownOperatorError(PolicyError):
	"""Operator tag is not in the registry."""

	def __init__(self, operator: Any):
		super().__init__(f"unknown operator: {operator}", operator=str(operator))


class UnsupportedKindError(PolicyError):
	"""Operator is registered but no handler serves its kind."""

	def __init__(self, operator: str, kind: Any):
		self.kind = kind
		super().__init__(
			f"unsupported operator kind: {getattr(kind, 'name', kind)} (operator {operator})",
			operator=operator,
		)


class MissingAttributeError(PolicyError):
	"""A leaf operator that requires its attribute could not resolve it."""

	def __init__(self, attribute: str, operator: str | None = None):
		super().__init__(
			f"missing required attribute: {attribute}",
			operator=operator,
			attribute=attribute,
		)


class ArityError(PolicyError):
	"""Logical operator received the wrong number of child conditions."""


class TypeMismatchError(PolicyError):
	"""Operand types cannot be reconciled for the operator."""


class CoercionError(PolicyError, ValueError):
	"""A value could not be converted to a number, string or time."""

	def __init__(self, message: str, value: Any = None):
		self.value = value
		super().__init__(message)


class InvalidRegexError(PolicyError):
	"""The ``matches`` pattern does not compile."""


class DivisionByZeroError(PolicyError):
	"""``mod`` was asked to divide by zero."""


class InvalidBetweenSpecError(PolicyError):
	"""The ``between`` operand is not a valid range description."""


class InvalidConditionError(PolicyError):
	"""Structural problem found by the validator."""


class ConditionTooComplexError(PolicyError):
	"""Condition tree exceeds the configured depth limit."""
