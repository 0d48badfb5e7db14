# (c) Copyright Datacraft, 2026
"""
Condition Evaluation Engine for ABAC.

Walks a condition tree against an attribute context and returns a boolean
verdict. The engine looks each operator up in the registry and hands the
node to the handler registered for the operator's kind; the logical
handler calls back into the engine for child conditions.

The engine does not validate on the fast path. Run validate_condition
before storing a condition if structural errors should be caught early.
"""
import logging
from collections.abc import Mapping
from typing import Any

from .context import AttributeResolver, as_resolver
from .errors import UnknownOperatorError, UnsupportedKindError
from .handlers import (
	ArithmeticHandler, ComparisonHandler, LogicalHandler, OperatorHandler,
	RangeHandler, SetHandler, StringHandler, TemporalHandler,
)
from .models import Condition
from .operators import OperatorKind, get_operator_spec

logger = logging.getLogger(__name__)


class ConditionEngine:
	"""
	Dispatches conditions to per-kind operator handlers.

	Handlers may be overridden at construction or with register_handler
	before the engine is shared. The engine holds no per-evaluation state.
	"""

	def __init__(self, handlers: Mapping[OperatorKind, OperatorHandler] | None = None):
		self._handlers: dict[OperatorKind, OperatorHandler] = {
			OperatorKind.COMPARISON: ComparisonHandler(),
			OperatorKind.RANGE: RangeHandler(),
			OperatorKind.SET: SetHandler(),
			OperatorKind.STRING: StringHandler(),
			OperatorKind.TEMPORAL: TemporalHandler(),
			OperatorKind.ARITHMETIC: ArithmeticHandler(),
			OperatorKind.LOGICAL: LogicalHandler(self._dispatch),
		}
		if handlers:
			self._handlers.update(handlers)

	def register_handler(self, kind: OperatorKind, handler: OperatorHandler | None) -> None:
		"""Replace the handler for a kind; None removes it."""
		if handler is None:
			self._handlers.pop(kind, None)
			return
		self._handlers[kind] = handler

	def handler_for(self, kind: OperatorKind) -> OperatorHandler | None:
		return self._handlers.get(kind)

	def evaluate(self, condition: Condition, context: Mapping[str, Any] | AttributeResolver) -> bool:
		"""
		Evaluate a condition tree.

		Args:
			condition: Root of the tree
			context: Attribute mapping or resolver

		Returns:
			The verdict

		Raises:
			UnknownOperatorError: operator tag not in the registry
			UnsupportedKindError: no handler registered for the operator kind
			PolicyError: any handler failure (missing attribute, type mismatch, ...)
		"""
		return self._dispatch(condition, as_resolver(context))

	def _dispatch(self, condition: Condition, resolver: AttributeResolver) -> bool:
		spec = get_operator_spec(condition.operator)
		if spec is None:
			raise UnknownOperatorError(condition.operator)

		handler = self._handlers.get(spec.kind)
		if handler is None:
			raise UnsupportedKindError(str(condition.operator), spec.kind)

		result = handler.evaluate(condition, resolver)
		logger.debug(f"{condition.operator!s} {condition.attribute or '-'} -> {result}")
		return result


_engine: ConditionEngine | None = None


def get_engine() -> ConditionEngine:
	global _engine
	if _engine is None:
		_engine = ConditionEngine()
	return _engine


def evaluate_condition(
	condition: Condition | Mapping[str, Any],
	context: Mapping[str, Any] | AttributeResolver,
) -> bool:
	"""Evaluate with the shared default engine; accepts a condition document."""
	if isinstance(condition, Mapping):
		condition = Condition.from_dict(condition)
	return get_engine().evaluate(condition, context)
