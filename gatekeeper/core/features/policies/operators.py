# (c) Copyright Datacraft, 2026
"""
Operator registry - single source of truth for operator semantics.

Used by:
- the validator (reject unknown operators, check logical arity)
- the engine (route a condition to the handler for its operator kind)

Adding an operator means adding it to Operator, registering its spec below
and teaching the handler for its kind how to evaluate it.
"""
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Any

UNBOUNDED = -1


class Operator(str, Enum):
	"""Operator tags accepted in condition documents."""
	# Comparison
	EQUAL = "eq"
	NOT_EQUAL = "neq"
	GREATER_THAN = "gt"
	GREATER_THAN_OR_EQUAL = "gte"
	LESS_THAN = "lt"
	LESS_THAN_OR_EQUAL = "lte"

	# Range
	BETWEEN = "between"

	# Set
	IN = "in"
	NOT_IN = "nin"
	SUBSET = "subset"
	NOT_SUBSET = "not_subset"
	INTERSECTS = "intersects"
	DISJOINT = "disjoint"

	# String
	CONTAINS = "contains"
	NOT_CONTAINS = "not_contains"
	STARTS_WITH = "starts_with"
	ENDS_WITH = "ends_with"
	MATCHES = "matches"  # Regex

	# Temporal
	BEFORE = "before"
	AFTER = "after"

	# Arithmetic
	MOD = "mod"

	# Logical
	AND = "and"
	OR = "or"
	NOT = "not"

	def __str__(self) -> str:
		return self.value


class OperatorKind(Enum):
	"""Groups operators that share a handler."""
	COMPARISON = auto()
	RANGE = auto()
	SET = auto()
	STRING = auto()
	TEMPORAL = auto()
	ARITHMETIC = auto()
	LOGICAL = auto()


@dataclass(frozen=True)
class OperatorSpec:
	"""
	Specification for a single operator.

	Attributes:
		kind: Handler group the operator belongs to
		min_args: Minimum child conditions (logical) or operands (leaves)
		max_args: Maximum, UNBOUNDED (-1) for no upper bound
	"""
	kind: OperatorKind
	min_args: int
	max_args: int

	@property
	def is_logical(self) -> bool:
		return self.kind is OperatorKind.LOGICAL

	def accepts(self, count: int) -> bool:
		"""Check an argument count against the arity bounds."""
		if count < self.min_args:
			return False
		return self.max_args == UNBOUNDED or count <= self.max_args

	def describe_arity(self) -> str:
		upper = "n" if self.max_args == UNBOUNDED else str(self.max_args)
		return f"{self.min_args}..{upper}"


def _binary(kind: OperatorKind) -> OperatorSpec:
	return OperatorSpec(kind=kind, min_args=2, max_args=2)


# =============================================================================
# OPERATOR REGISTRY
# =============================================================================

OPERATOR_REGISTRY: MappingProxyType = MappingProxyType({
	# Comparison
	Operator.EQUAL: _binary(OperatorKind.COMPARISON),
	Operator.NOT_EQUAL: _binary(OperatorKind.COMPARISON),
	Operator.GREATER_THAN: _binary(OperatorKind.COMPARISON),
	Operator.GREATER_THAN_OR_EQUAL: _binary(OperatorKind.COMPARISON),
	Operator.LESS_THAN: _binary(OperatorKind.COMPARISON),
	Operator.LESS_THAN_OR_EQUAL: _binary(OperatorKind.COMPARISON),

	# Range: value plus [min, max] or [min, max, inclusive]
	Operator.BETWEEN: OperatorSpec(kind=OperatorKind.RANGE, min_args=2, max_args=3),

	# Set
	Operator.IN: _binary(OperatorKind.SET),
	Operator.NOT_IN: _binary(OperatorKind.SET),
	Operator.SUBSET: _binary(OperatorKind.SET),
	Operator.NOT_SUBSET: _binary(OperatorKind.SET),
	Operator.INTERSECTS: _binary(OperatorKind.SET),
	Operator.DISJOINT: _binary(OperatorKind.SET),

	# String
	Operator.CONTAINS: _binary(OperatorKind.STRING),
	Operator.NOT_CONTAINS: _binary(OperatorKind.STRING),
	Operator.STARTS_WITH: _binary(OperatorKind.STRING),
	Operator.ENDS_WITH: _binary(OperatorKind.STRING),
	Operator.MATCHES: _binary(OperatorKind.STRING),

	# Temporal
	Operator.BEFORE: _binary(OperatorKind.TEMPORAL),
	Operator.AFTER: _binary(OperatorKind.TEMPORAL),

	# Arithmetic
	Operator.MOD: _binary(OperatorKind.ARITHMETIC),

	# Logical: arity counts child conditions
	Operator.AND: OperatorSpec(kind=OperatorKind.LOGICAL, min_args=2, max_args=UNBOUNDED),
	Operator.OR: OperatorSpec(kind=OperatorKind.LOGICAL, min_args=2, max_args=UNBOUNDED),
	Operator.NOT: OperatorSpec(kind=OperatorKind.LOGICAL, min_args=1, max_args=1),
})

ALL_OPERATORS: frozenset[str] = frozenset(op.value for op in OPERATOR_REGISTRY)


def as_operator(tag: Any) -> Operator | None:
	"""Map a raw tag to its Operator member, None if unknown."""
	if isinstance(tag, Operator):
		return tag
	try:
		return Operator(tag)
	except ValueError:
		return None


def get_operator_spec(tag: Any) -> OperatorSpec | None:
	"""
	Get operator specification from registry.

	Args:
		tag: Operator member or raw tag string (exact match)

	Returns:
		OperatorSpec if known, None if unknown
	"""
	operator = as_operator(tag)
	if operator is None:
		return None
	return OPERATOR_REGISTRY.get(operator)


def is_known_operator(tag: Any) -> bool:
	return get_operator_spec(tag) is not None


def operators_of_kind(kind: OperatorKind) -> frozenset[Operator]:
	return frozenset(op for op, spec in OPERATOR_REGISTRY.items() if spec.kind is kind)
