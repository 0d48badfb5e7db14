# (c) Copyright Datacraft, 2026
"""Tests for the condition engine."""
import logging
from datetime import datetime, timedelta, timezone

import pytest

from gatekeeper.core.features.policies.engine import (
	ConditionEngine,
	evaluate_condition,
	get_engine,
)
from gatekeeper.core.features.policies.errors import (
	DivisionByZeroError,
	MissingAttributeError,
	PolicyError,
	UnknownOperatorError,
	UnsupportedKindError,
)
from gatekeeper.core.features.policies.models import Condition
from gatekeeper.core.features.policies.operators import OperatorKind
from gatekeeper.core.features.policies.validator import is_valid_condition

UTC = timezone.utc


def eq(attribute, value):
	return Condition(attribute, "eq", value)


def all_of(*children):
	return Condition(operator="and", conditions=children)


def any_of(*children):
	return Condition(operator="or", conditions=children)


def negate(child):
	return Condition(operator="not", conditions=(child,))


class AlwaysTrue:
	def evaluate(self, condition, resolver):
		return True


class TestScenarios:
	"""End-to-end evaluation of condition documents."""

	def test_greater_than(self):
		"""Test count gt 5 with count 10."""
		doc = {"attribute": "count", "operator": "gt", "value": 5}
		assert evaluate_condition(doc, {"count": 10}) is True

	def test_and_of_equalities(self):
		"""Test and of two equalities that both hold."""
		doc = {
			"operator": "and",
			"conditions": [
				{"attribute": "a", "operator": "eq", "value": 1},
				{"attribute": "b", "operator": "eq", "value": 2},
			],
		}
		assert evaluate_condition(doc, {"a": 1, "b": 2}) is True

	def test_before_date_strings(self):
		"""Test before with date strings on both sides."""
		doc = {"attribute": "ts", "operator": "before", "value": "2021-01-01"}
		assert evaluate_condition(doc, {"ts": "2020-01-01"}) is True

	def test_mod(self):
		"""Test divisibility, non-divisibility and a zero divisor."""
		doc = {"attribute": "n", "operator": "mod", "value": 3}
		assert evaluate_condition(doc, {"n": 9}) is True
		assert evaluate_condition(doc, {"n": 10}) is False
		with pytest.raises(DivisionByZeroError):
			evaluate_condition({**doc, "value": 0}, {"n": 9})

	def test_in(self):
		"""Test membership in a list."""
		doc = {"attribute": "elem", "operator": "in", "value": [1, 2, 3]}
		assert evaluate_condition(doc, {"elem": 2}) is True
		assert evaluate_condition(doc, {"elem": 4}) is False

	def test_between_degenerate_range(self):
		"""Test a single-point range with and without its endpoints."""
		doc = {"attribute": "n", "operator": "between", "value": [5, 5, False]}
		assert evaluate_condition(doc, {"n": 5}) is False
		assert evaluate_condition({**doc, "value": [5, 5, True]}, {"n": 5}) is True

	def test_nested_request(self, request_attributes):
		"""Test a realistic policy over a nested context."""
		condition = all_of(
			Condition("subject.roles", "intersects", ["editor", "admin"]),
			Condition("subject.department.level", "gte", 2),
			any_of(
				Condition("resource.classification", "eq", "public"),
				Condition("resource.tags", "subset", ["invoice", "2024", "paid"]),
			),
			negate(Condition("environment.ip", "starts_with", "192.168.")),
			Condition("environment.time", "after", "2024-06-15T08:00:00Z"),
		)
		assert get_engine().evaluate(condition, request_attributes) is True


class TestDispatch:
	"""Tests for operator lookup and handler dispatch."""

	def test_unknown_operator(self, engine):
		"""Test unknown tags raise with the tag in the message."""
		with pytest.raises(UnknownOperatorError, match="unknown operator: like"):
			engine.evaluate(Condition("a", "like", "x"), {"a": "x"})

	def test_unknown_operator_in_child(self, engine):
		"""Test unknown tags are reported from nested nodes."""
		condition = all_of(eq("a", 1), Condition("a", "approx", 1))
		with pytest.raises(UnknownOperatorError):
			engine.evaluate(condition, {"a": 1})

	def test_missing_handler(self, engine):
		"""Test a kind without a handler raises UnsupportedKindError."""
		engine.register_handler(OperatorKind.ARITHMETIC, None)
		with pytest.raises(UnsupportedKindError) as exc_info:
			engine.evaluate(Condition("n", "mod", 3), {"n": 9})
		assert exc_info.value.kind is OperatorKind.ARITHMETIC

	def test_handler_override(self):
		"""Test handlers passed at construction replace the defaults."""
		engine = ConditionEngine(handlers={OperatorKind.STRING: AlwaysTrue()})
		assert engine.evaluate(Condition("s", "contains", "zzz"), {"s": "abc"}) is True
		assert isinstance(engine.handler_for(OperatorKind.STRING), AlwaysTrue)

	def test_register_handler(self, engine):
		"""Test register_handler replaces a handler."""
		engine.register_handler(OperatorKind.COMPARISON, AlwaysTrue())
		assert engine.evaluate(eq("a", 1), {"a": 2}) is True

	def test_logical_children_use_overrides(self, engine):
		"""Test children of logical nodes dispatch through the same engine."""
		engine.register_handler(OperatorKind.COMPARISON, AlwaysTrue())
		assert engine.evaluate(negate(eq("a", 1)), {"a": 2}) is False

	def test_resolver_context(self, engine, counting_resolver):
		"""Test a resolver can be passed instead of a mapping."""
		resolver = counting_resolver({"a": 1})
		assert engine.evaluate(eq("a", 1), resolver) is True
		assert resolver.lookups == ["a"]

	def test_invalid_context(self, engine):
		"""Test unsupported context types raise TypeError."""
		with pytest.raises(TypeError):
			engine.evaluate(eq("a", 1), [("a", 1)])

	def test_shared_engine(self):
		"""Test get_engine returns one shared instance."""
		assert get_engine() is get_engine()

	def test_debug_logging(self, engine, caplog):
		"""Test dispatch is logged at DEBUG."""
		caplog.set_level(logging.DEBUG, logger="gatekeeper.core.features.policies")
		engine.evaluate(eq("a", 1), {"a": 1})
		assert any("eq a -> True" in record.getMessage() for record in caplog.records)

	def test_or_logs_suppressed_error(self, engine, caplog):
		"""Test or logs child errors it suppresses."""
		caplog.set_level(logging.DEBUG, logger="gatekeeper.core.features.policies")
		assert engine.evaluate(any_of(Condition("gone", "gt", 1), eq("a", 1)), {"a": 1}) is True
		assert any("missing required attribute: gone" in record.getMessage() for record in caplog.records)


CONTEXT = {"a": 1, "b": 2, "s": "hello", "tags": ["x", "y"]}

LEAVES = [
	eq("a", 1),
	eq("a", 2),
	Condition("b", "gt", 1),
	Condition("s", "starts_with", "he"),
	Condition("tags", "subset", ["x"]),
	Condition("missing", "in", [1]),
	Condition("missing", "nin", [1]),
]


class TestProperties:
	"""Universal properties of evaluation."""

	@pytest.mark.parametrize("condition", LEAVES)
	def test_determinism(self, engine, condition):
		"""Test evaluation is a pure function of condition and context."""
		results = {engine.evaluate(condition, CONTEXT) for _ in range(5)}
		assert len(results) == 1

	@pytest.mark.parametrize("condition", LEAVES)
	def test_double_negation(self, engine, condition):
		"""Test not(not(c)) equals c."""
		assert engine.evaluate(negate(negate(condition)), CONTEXT) is engine.evaluate(condition, CONTEXT)

	def test_double_negation_error(self, engine):
		"""Test not(not(c)) raises what c raises."""
		condition = Condition("missing", "gt", 1)
		with pytest.raises(MissingAttributeError):
			engine.evaluate(condition, CONTEXT)
		with pytest.raises(MissingAttributeError):
			engine.evaluate(negate(negate(condition)), CONTEXT)

	@pytest.mark.parametrize("left", LEAVES)
	@pytest.mark.parametrize("right", LEAVES)
	def test_de_morgan(self, engine, left, right):
		"""Test not(a and b) equals (not a) or (not b)."""
		lhs = engine.evaluate(negate(all_of(left, right)), CONTEXT)
		rhs = engine.evaluate(any_of(negate(left), negate(right)), CONTEXT)
		assert lhs is rhs

	def test_and_short_circuit(self, engine, counting_resolver):
		"""Test and stops resolving after the first False."""
		resolver = counting_resolver(CONTEXT)
		condition = all_of(eq("a", 1), eq("b", 99), eq("s", "hello"))
		assert engine.evaluate(condition, resolver) is False
		assert resolver.lookups == ["a", "b"]

	def test_or_short_circuit(self, engine, counting_resolver):
		"""Test or stops resolving after the first True."""
		resolver = counting_resolver(CONTEXT)
		condition = any_of(eq("a", 5), eq("b", 2), eq("s", "hello"))
		assert engine.evaluate(condition, resolver) is True
		assert resolver.lookups == ["a", "b"]

	def test_and_stops_at_error(self, engine, counting_resolver):
		"""Test and does not evaluate children after an error."""
		resolver = counting_resolver(CONTEXT)
		condition = all_of(Condition("missing", "gt", 1), eq("a", 1))
		with pytest.raises(MissingAttributeError):
			engine.evaluate(condition, resolver)
		assert resolver.lookups == ["missing"]

	@pytest.mark.parametrize("value", [
		0, -3, 1.5, "x", "", True, False, None, [1, 2], {"k": [1, {"j": None}]},
		float("nan"), datetime(2024, 1, 1, tzinfo=UTC),
	])
	def test_reflexivity(self, engine, value):
		"""Test eq(x, v) holds against a context binding x to v."""
		assert engine.evaluate(eq("x", value), {"x": value}) is True

	@pytest.mark.parametrize("low,high", [(1.0, 10.0), ("2024-01-01", "2024-12-31"), ("apple", "pear"), (3, 7)])
	def test_range_endpoints(self, engine, low, high):
		"""Test endpoints are in an inclusive range and out of an exclusive one."""
		for endpoint in (low, high):
			ctx = {"n": endpoint}
			assert engine.evaluate(Condition("n", "between", [low, high, True]), ctx) is True
			assert engine.evaluate(Condition("n", "between", [low, high, False]), ctx) is False

	@pytest.mark.parametrize("text", [
		"2024-03-10T12:00:00Z",
		"2024-03-10T12:00:00.000000001Z",
		"2024-03-10T12:00:00",
		"2024-03-10 12:00:00",
		"03/10/2024 12:00:00",
	])
	def test_temporal_formats(self, engine, text):
		"""Test every time format compares like its instant on either side."""
		instant = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
		earlier = instant - timedelta(seconds=1)
		later = instant + timedelta(seconds=1)

		assert engine.evaluate(Condition("t", "before", later), {"t": text}) is True
		assert engine.evaluate(Condition("t", "after", earlier), {"t": text}) is True
		assert engine.evaluate(Condition("t", "before", text), {"t": earlier}) is True
		assert engine.evaluate(Condition("t", "after", text), {"t": later}) is True

	@pytest.mark.parametrize("text", ["2024-03-10", "03/10/2024"])
	def test_temporal_date_formats(self, engine, text):
		"""Test date-only formats compare as midnight UTC."""
		midnight = datetime(2024, 3, 10, tzinfo=UTC)
		assert engine.evaluate(Condition("t", "before", midnight + timedelta(seconds=1)), {"t": text}) is True
		assert engine.evaluate(Condition("t", "after", text), {"t": midnight + timedelta(seconds=1)}) is True

	@pytest.mark.parametrize("condition", [
		*LEAVES,
		Condition("a", "gt", "z"),
		Condition("s", "matches", "(unclosed"),
		Condition("a", "mod", 0),
		Condition("a", "between", [1, 2, 3]),
		Condition("s", "before", "2024-01-01"),
		Condition("tags", "intersects", "x"),
		any_of(Condition("gone", "lt", 1), Condition("a", "mod", 0)),
	])
	def test_validated_conditions_are_total(self, engine, condition):
		"""Test accepted conditions yield a bool or a PolicyError."""
		assert is_valid_condition(condition, max_depth=0) == (True, None)
		try:
			result = engine.evaluate(condition, CONTEXT)
		except PolicyError:
			return
		assert isinstance(result, bool)
