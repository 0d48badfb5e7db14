# (c) Copyright Datacraft, 2026
"""
Structural validation of condition trees.

The engine evaluates whatever it is given; validation is a separate step,
run when a policy is accepted rather than on every request.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from gatekeeper.core.config import get_settings

from .errors import (
	ArityError, ConditionTooComplexError, InvalidConditionError, PolicyError,
	UnknownOperatorError,
)
from .operators import get_operator_spec

if TYPE_CHECKING:
	from .models import Condition


def condition_depth(condition: Condition) -> int:
	"""Number of nodes on the longest root-to-leaf path (a leaf is 1)."""
	deepest = 0
	stack = [(condition, 1)]
	while stack:
		node, depth = stack.pop()
		deepest = max(deepest, depth)
		stack.extend((child, depth + 1) for child in node.conditions)
	return deepest


def validate_condition(condition: Condition, *, max_depth: int | None = None) -> None:
	"""
	Validate a condition tree.

	Args:
		condition: Root of the tree
		max_depth: Depth limit, defaults to Settings.max_condition_depth; 0 disables

	Raises:
		ConditionTooComplexError: tree deeper than max_depth
		UnknownOperatorError: operator tag not in the registry
		ArityError: logical node with the wrong number of children
		InvalidConditionError: leaf with a bad attribute path or no value
	"""
	if max_depth is None:
		max_depth = get_settings().max_condition_depth

	if max_depth:
		depth = condition_depth(condition)
		if depth > max_depth:
			raise ConditionTooComplexError(f"condition depth {depth} exceeds max {max_depth}")

	stack = [condition]
	while stack:
		node = stack.pop()
		_validate_node(node)
		stack.extend(reversed(node.conditions))


def is_valid_condition(condition: Condition, *, max_depth: int | None = None) -> tuple[bool, str | None]:
	"""
	Validate a condition without raising.

	Returns:
		Tuple of (is_valid, error_message)
	"""
	try:
		validate_condition(condition, max_depth=max_depth)
	except PolicyError as e:
		return False, e.message
	return True, None


def _validate_node(node: Condition) -> None:
	spec = get_operator_spec(node.operator)
	if spec is None:
		raise UnknownOperatorError(node.operator)

	op = str(node.operator)
	if spec.is_logical:
		count = len(node.conditions)
		if not spec.accepts(count):
			raise ArityError(
				f"{op} expects {spec.describe_arity()} conditions, got {count}",
				operator=op,
			)
		return

	if node.conditions:
		raise InvalidConditionError(f"{op} does not take child conditions", operator=op)
	if not isinstance(node.attribute, str) or not node.attribute:
		raise InvalidConditionError(f"{op} requires an attribute", operator=op)
	if any(not segment for segment in node.attribute.split(".")):
		raise InvalidConditionError(
			f"malformed attribute path: {node.attribute!r}",
			operator=op,
			attribute=node.attribute,
		)
	if node.value is None:
		raise InvalidConditionError(
			f"{op} requires a value",
			operator=op,
			attribute=node.attribute,
		)
