# (c) Copyright Datacraft, 2026
"""Policy domain models: conditions, effects and policies."""
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from .timerange import TimeRange
from .validator import validate_condition


class PolicyEffect(str, Enum):
	"""Policy decision effect."""
	ALLOW = "allow"
	DENY = "deny"


@dataclass(frozen=True)
class Condition:
	"""
	Node of a condition tree.

	A leaf carries ``attribute``, ``operator`` and ``value``. A logical node
	carries ``operator`` ("and", "or", "not") and child ``conditions``; its
	attribute and value are unused. The operator is kept as the raw tag so
	unknown operators can be reported at evaluation time.
	"""
	attribute: str = ""
	operator: str = ""
	value: Any = None
	conditions: tuple["Condition", ...] = ()

	def __post_init__(self):
		if not isinstance(self.conditions, tuple):
			object.__setattr__(self, "conditions", tuple(self.conditions or ()))

	@property
	def is_leaf(self) -> bool:
		return not self.conditions

	def to_dict(self) -> dict:
		return {
			"attribute": self.attribute,
			"operator": str(self.operator),
			"value": self.value,
			"conditions": [c.to_dict() for c in self.conditions],
		}

	@classmethod
	def from_dict(cls, data: dict) -> "Condition":
		return cls(
			attribute=data.get("attribute") or "",
			operator=data.get("operator") or "",
			value=data.get("value"),
			conditions=tuple(cls.from_dict(c) for c in data.get("conditions") or ()),
		)


def _utc_now() -> datetime:
	return datetime.now(timezone.utc)


@dataclass
class Policy:
	"""
	Access policy for a resource, optionally narrowed to one resource id.

	The condition decides applicability; ``effect`` says what a match means
	and ``period`` bounds when the policy is in force.
	"""
	resource: str
	effect: PolicyEffect
	condition: Condition = field(default_factory=Condition)
	id: str = ""
	resource_id: str = ""
	version: str = ""
	dry_run: bool = False
	period: TimeRange | None = None

	def is_active_at(self, at: datetime) -> bool:
		if self.period is None:
			return True
		return self.period.contains(at)

	def is_active(self, now: datetime | None = None) -> bool:
		return self.is_active_at(now or _utc_now())

	def is_expired_at(self, at: datetime) -> bool:
		if self.period is None or self.period.end is None:
			return False
		return self.period.end < at

	def is_expired(self, now: datetime | None = None) -> bool:
		return self.is_expired_at(now or _utc_now())

	def will_expire_in(self, delta: timedelta, now: datetime | None = None) -> bool:
		if self.period is None or self.period.end is None:
			return False
		return self.period.end < (now or _utc_now()) + delta

	def is_scheduled(self, now: datetime | None = None) -> bool:
		"""Check if the policy starts in the future."""
		if self.period is None:
			return False
		return self.period.start > (now or _utc_now())

	def matches(self, resource: str, resource_id: str) -> bool:
		return self.resource == resource and self.resource_id == resource_id

	def matches_resource(self, resource: str) -> bool:
		return self.resource == resource

	def applies_to(self, resource: str, resource_id: str, now: datetime | None = None) -> bool:
		return self.is_active(now) and self.matches(resource, resource_id)

	def is_deny(self) -> bool:
		return self.effect == PolicyEffect.DENY

	def is_allow(self) -> bool:
		return self.effect == PolicyEffect.ALLOW

	def should_block(self, condition_matches: bool) -> bool:
		"""
		Translate a condition verdict into a block decision.

		A matching deny policy blocks; an allow policy blocks when it does
		not match.
		"""
		if self.is_deny():
			return condition_matches
		return not condition_matches

	def activate(self, now: datetime | None = None) -> None:
		"""Move a scheduled policy's start to now; no-op otherwise."""
		now = now or _utc_now()
		if not self.is_scheduled(now):
			return
		self.period = self.period.with_start(now)

	def deactivate(self, now: datetime | None = None) -> None:
		"""End the policy now unless it already ended."""
		now = now or _utc_now()
		if self.period is None:
			self.period = TimeRange(now, now)
			return
		if self.period.end is not None and self.period.end < now:
			return
		self.period = self.period.with_end(now)

	def extend_by(self, delta: timedelta, now: datetime | None = None) -> None:
		if self.period is None:
			raise ValueError("policy has no period")
		base = self.period.end if self.period.end is not None else (now or _utc_now())
		self.period = self.period.with_end(base + delta)

	def set_end_date(self, end: datetime) -> None:
		if self.period is None:
			raise ValueError("policy has no period")
		self.period = self.period.with_end(end)

	def remaining_duration(self, now: datetime | None = None) -> timedelta:
		"""Time left until expiry; zero when open-ended or already expired."""
		if self.period is None or self.period.end is None:
			return timedelta(0)
		remaining = self.period.end - (now or _utc_now())
		return max(remaining, timedelta(0))

	def clone(self) -> "Policy":
		return replace(self)

	def with_dry_run(self, dry_run: bool) -> "Policy":
		return replace(self, dry_run=dry_run)

	def is_same_resource(self, other: "Policy") -> bool:
		return self.resource == other.resource and self.resource_id == other.resource_id

	def has_conflict(self, other: "Policy") -> bool:
		return self.is_same_resource(other) and self.effect != other.effect

	def priority(self) -> int:
		"""
		Score for conflict resolution, higher wins.

		Deny beats allow, enforced beats dry-run, a specific resource id beats
		a resource-wide or wildcard policy.
		"""
		score = 0
		if self.is_deny():
			score += 100
		if not self.dry_run:
			score += 50
		if self.resource_id and self.resource_id != "*":
			score += 25
		return score

	def validate(self) -> None:
		"""
		Check the policy structure and its condition tree.

		Raises:
			ValueError: for a missing resource, unknown effect or missing period
			PolicyError: for an invalid condition
		"""
		if not self.resource:
			raise ValueError("policy resource is required")
		if self.effect not in (PolicyEffect.ALLOW, PolicyEffect.DENY):
			raise ValueError(f"invalid effect: {self.effect}")
		if self.period is None:
			raise ValueError("policy period is required")
		validate_condition(self.condition)

	def status(self, now: datetime | None = None) -> str:
		now = now or _utc_now()
		if self.is_expired(now):
			return "expired"
		if self.is_scheduled(now):
			return "scheduled"
		return "active"

	def __str__(self) -> str:
		dry_run = " [DRY-RUN]" if self.dry_run else ""
		effect = self.effect.value if isinstance(self.effect, PolicyEffect) else self.effect
		return f"Policy[{self.id}] {self.resource}/{self.resource_id}: {effect} ({self.status()}){dry_run}"

	def to_dict(self) -> dict:
		return {
			"id": self.id,
			"resource": self.resource,
			"resource_id": self.resource_id,
			"effect": self.effect.value,
			"condition": self.condition.to_dict(),
			"version": self.version,
			"dry_run": self.dry_run,
			"period": self.period.to_dict() if self.period else None,
		}

	@classmethod
	def from_dict(cls, data: dict) -> "Policy":
		return cls(
			id=data.get("id", ""),
			resource=data.get("resource", ""),
			resource_id=data.get("resource_id", ""),
			effect=PolicyEffect(data["effect"]),
			condition=Condition.from_dict(data.get("condition") or {}),
			version=data.get("version", ""),
			dry_run=data.get("dry_run", False),
			period=TimeRange.from_dict(data["period"]) if data.get("period") else None,
		)
