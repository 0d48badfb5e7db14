# (c) Copyright Datacraft, 2026
"""
Set operators: in, nin, subset, not_subset, intersects, disjoint.

Membership uses structural equality (see coerce.deep_equal). Hash-based
lookups are used where the elements allow it, with a linear scan for
unhashable elements.
"""
from collections.abc import Mapping
from typing import Any, Iterable

from ..coerce import deep_equal
from ..errors import PolicyError, TypeMismatchError
from ..operators import Operator

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class SetHandler:
	"""
	Evaluates the set operators.

	A missing attribute is not an error: ``in`` and the sequence operators
	return False, ``nin`` returns True.
	"""

	def evaluate(self, condition, resolver) -> bool:
		actual, present = resolver.resolve(condition.attribute)
		op = str(condition.operator)

		if not present:
			return condition.operator == Operator.NOT_IN

		match condition.operator:
			case Operator.IN:
				return contains(condition.value, actual)
			case Operator.NOT_IN:
				return not contains(condition.value, actual)
			case Operator.SUBSET:
				return is_subset(actual, condition.value, op)
			case Operator.NOT_SUBSET:
				return not is_subset(actual, condition.value, op)
			case Operator.INTERSECTS:
				return intersects(actual, condition.value, op)
			case Operator.DISJOINT:
				return not intersects(actual, condition.value, op)
			case _:
				raise PolicyError(f"unsupported set operator: {op}", operator=op)


def contains(collection: Any, item: Any) -> bool:
	"""
	Check whether item is an element of a sequence or a key of a mapping.

	Any other collection value (scalars, strings) contains nothing.
	"""
	if isinstance(collection, Mapping):
		return any(deep_equal(key, item) for key in collection)
	if isinstance(collection, _SEQUENCE_TYPES):
		return any(deep_equal(element, item) for element in collection)
	return False


def is_subset(subset: Any, superset: Any, operator: str | None = None) -> bool:
	_require_sequence(subset, "subset", operator)
	_require_sequence(superset, "superset", operator)
	members = _Membership(superset)
	return all(element in members for element in subset)


def intersects(left: Any, right: Any, operator: str | None = None) -> bool:
	_require_sequence(left, "first set", operator)
	_require_sequence(right, "second set", operator)
	smaller, larger = (left, right) if len(left) < len(right) else (right, left)
	members = _Membership(smaller)
	return any(element in members for element in larger)


def _require_sequence(value: Any, role: str, operator: str | None) -> None:
	if not isinstance(value, _SEQUENCE_TYPES):
		raise TypeMismatchError(
			f"{role} must be a list, tuple or set, got {type(value).__name__}",
			operator=operator,
		)


def _freeze(value: Any) -> Any:
	"""Hashable stand-in that keeps deep_equal's distinctions (bool vs int)."""
	if isinstance(value, bool):
		return (bool, value)
	if isinstance(value, Mapping):
		return (Mapping, frozenset((key, _freeze(item)) for key, item in value.items()))
	if isinstance(value, (list, tuple)):
		return (list, tuple(_freeze(item) for item in value))
	return value


class _Membership:
	"""Membership test over a collection, hashing what can be hashed."""

	def __init__(self, items: Iterable[Any]):
		self._hashed: set[Any] = set()
		self._unhashable: list[Any] = []
		for item in items:
			try:
				self._hashed.add(_freeze(item))
			except TypeError:
				self._unhashable.append(item)

	def __contains__(self, item: Any) -> bool:
		try:
			if _freeze(item) in self._hashed:
				return True
		except TypeError:
			pass
		return any(deep_equal(candidate, item) for candidate in self._unhashable)
