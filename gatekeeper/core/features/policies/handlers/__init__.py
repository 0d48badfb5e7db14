# (c) Copyright Datacraft, 2026
"""Operator handlers, one per operator kind."""
from .arithmetic import ArithmeticHandler
from .base import EvalFunc, OperatorHandler, resolve_required
from .comparison import ComparisonHandler, greater
from .logical import LogicalHandler
from .ranges import Bounds, RangeHandler, parse_bounds
from .sets import SetHandler, contains, intersects, is_subset
from .strings import StringHandler
from .temporal import TemporalHandler

__all__ = [
	# Protocol
	"EvalFunc",
	"OperatorHandler",
	"resolve_required",
	# Handlers
	"ArithmeticHandler",
	"ComparisonHandler",
	"LogicalHandler",
	"RangeHandler",
	"SetHandler",
	"StringHandler",
	"TemporalHandler",
	# Helpers
	"Bounds",
	"contains",
	"greater",
	"intersects",
	"is_subset",
	"parse_bounds",
]
