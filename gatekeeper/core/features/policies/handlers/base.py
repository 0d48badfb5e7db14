# (c) Copyright Datacraft, 2026
"""
Shared protocol for operator handlers.

A handler evaluates every operator of one OperatorKind. Handlers keep no
per-evaluation state, so one instance serves concurrent evaluations.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol

from ..errors import MissingAttributeError

if TYPE_CHECKING:
	from ..context import AttributeResolver
	from ..models import Condition

EvalFunc = Callable[["Condition", "AttributeResolver"], bool]


class OperatorHandler(Protocol):
	"""Evaluates conditions whose operator belongs to one kind."""

	def evaluate(self, condition: Condition, resolver: AttributeResolver) -> bool: ...


def resolve_required(condition: Condition, resolver: AttributeResolver) -> Any:
	"""Resolve the condition's attribute, raising if it is absent."""
	value, present = resolver.resolve(condition.attribute)
	if not present:
		raise MissingAttributeError(condition.attribute, operator=str(condition.operator))
	return value
