# (c) Copyright Datacraft, 2026
"""
Attribute-Based Access Control (ABAC) condition evaluation.

This module provides:
- A registry of condition operators grouped by kind
- A tree-walking engine that evaluates condition trees against attributes
- Structural validation of condition trees
- Policy models with validity periods
"""
from .context import AttributeResolver, MapAttributes, as_resolver, resolve_path
from .engine import ConditionEngine, evaluate_condition, get_engine
from .errors import (
	PolicyError, UnknownOperatorError, UnsupportedKindError, MissingAttributeError,
	ArityError, TypeMismatchError, CoercionError, InvalidRegexError,
	DivisionByZeroError, InvalidBetweenSpecError, InvalidConditionError,
	ConditionTooComplexError,
)
from .models import Condition, Policy, PolicyEffect
from .operators import (
	Operator, OperatorKind, OperatorSpec, OPERATOR_REGISTRY,
	get_operator_spec, is_known_operator,
)
from .timerange import (
	TimeRange, TimeRangeError, ZeroStartError, EndBeforeStartError, SplitOutsideError,
)
from .validator import condition_depth, is_valid_condition, validate_condition
from .views import ConditionSchema, PolicySchema, TimeRangeSchema, parse_condition

__all__ = [
	# Engine
	"ConditionEngine",
	"evaluate_condition",
	"get_engine",
	# Context
	"AttributeResolver",
	"MapAttributes",
	"as_resolver",
	"resolve_path",
	# Models
	"Condition",
	"Policy",
	"PolicyEffect",
	"TimeRange",
	# Operators
	"Operator",
	"OperatorKind",
	"OperatorSpec",
	"OPERATOR_REGISTRY",
	"get_operator_spec",
	"is_known_operator",
	# Validation
	"validate_condition",
	"is_valid_condition",
	"condition_depth",
	# Schemas
	"ConditionSchema",
	"PolicySchema",
	"TimeRangeSchema",
	"parse_condition",
	# Errors
	"PolicyError",
	"UnknownOperatorError",
	"UnsupportedKindError",
	"MissingAttributeError",
	"ArityError",
	"TypeMismatchError",
	"CoercionError",
	"InvalidRegexError",
	"DivisionByZeroError",
	"InvalidBetweenSpecError",
	"InvalidConditionError",
	"ConditionTooComplexError",
	"TimeRangeError",
	"ZeroStartError",
	"EndBeforeStartError",
	"SplitOutsideError",
]
