# (c) Copyright Datacraft, 2026
"""Pydantic schemas for condition and policy documents."""
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import Condition, Policy, PolicyEffect
from .timerange import TimeRange


class ConditionSchema(BaseModel):
	"""
	Schema for a condition document.

	Every field is optional and may be null; unknown fields are dropped.
	Operator tags are not checked here, see validate_condition.
	"""
	model_config = ConfigDict(extra="ignore")

	attribute: str | None = None
	operator: str | None = None
	value: Any = None
	conditions: list["ConditionSchema"] | None = None

	def to_condition(self) -> Condition:
		return Condition(
			attribute=self.attribute or "",
			operator=self.operator or "",
			value=self.value,
			conditions=tuple(c.to_condition() for c in self.conditions or ()),
		)

	@classmethod
	def from_condition(cls, condition: Condition) -> "ConditionSchema":
		return cls(
			attribute=condition.attribute or None,
			operator=str(condition.operator) or None,
			value=condition.value,
			conditions=[cls.from_condition(c) for c in condition.conditions] or None,
		)


def parse_condition(data: dict | str | bytes) -> Condition:
	"""
	Build a Condition from a mapping or JSON text.

	Raises:
		pydantic.ValidationError: malformed document
	"""
	if isinstance(data, (str, bytes, bytearray)):
		schema = ConditionSchema.model_validate_json(data)
	else:
		schema = ConditionSchema.model_validate(data)
	return schema.to_condition()


class TimeRangeSchema(BaseModel):
	"""Schema for a policy validity period."""
	model_config = ConfigDict(extra="forbid")

	start: datetime
	end: datetime | None = None

	@model_validator(mode="after")
	def check_order(self) -> "TimeRangeSchema":
		# TimeRange raises ValueError subclasses, which pydantic reports
		TimeRange(self.start, self.end)
		return self

	def to_time_range(self) -> TimeRange:
		return TimeRange(self.start, self.end)

	@classmethod
	def from_time_range(cls, period: TimeRange) -> "TimeRangeSchema":
		return cls(start=period.start, end=period.end)


class PolicySchema(BaseModel):
	"""Schema for a policy document."""
	model_config = ConfigDict(extra="forbid")

	id: str = ""
	resource: str = Field(..., min_length=1)
	resource_id: str = ""
	effect: PolicyEffect
	condition: ConditionSchema = Field(default_factory=ConditionSchema)
	version: str = ""
	dry_run: bool = False
	period: TimeRangeSchema | None = None

	def to_policy(self) -> Policy:
		return Policy(
			id=self.id,
			resource=self.resource,
			resource_id=self.resource_id,
			effect=self.effect,
			condition=self.condition.to_condition(),
			version=self.version,
			dry_run=self.dry_run,
			period=self.period.to_time_range() if self.period else None,
		)

	@classmethod
	def from_policy(cls, policy: Policy) -> "PolicySchema":
		return cls(
			id=policy.id,
			resource=policy.resource,
			resource_id=policy.resource_id,
			effect=policy.effect,
			condition=ConditionSchema.from_condition(policy.condition),
			version=policy.version,
			dry_run=policy.dry_run,
			period=TimeRangeSchema.from_time_range(policy.period) if policy.period else None,
		)
