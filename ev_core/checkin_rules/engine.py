# ev_core/checkin_rules/engine.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from itertools import combinations
from typing import Iterable, Optional, Sequence, Union
from uuid import UUID

from ev_core.checkin_rules.models import RuleRequirement

DUPLICATE_NAMES_ERROR = "duplicate rule names"
NO_ACTIVE_RULE_ERROR = "at least one active rule required"


def normalize_rule_name(name: str) -> str:
    return (name or "").strip().lower()


@dataclass(frozen=True)
class CheckinRuleDraft:
    """
    A candidate rule as submitted for replacement (not yet persisted).
    Shape (ranges, name length, enum) is validated upstream by the API serializer.
    """
    name: str
    active: bool
    requirement: str
    release_minutes_before: int
    close_minutes_after: int
    id: Optional[UUID] = None

    @property
    def is_mandatory_active(self) -> bool:
        return self.active and self.requirement == RuleRequirement.MANDATORY


@dataclass(frozen=True)
class CheckinWindow:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class WindowConflict:
    rule_a: str
    rule_b: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"rule_a": self.rule_a, "rule_b": self.rule_b, "message": self.message}


@dataclass(frozen=True)
class Valid:
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Invalid:
    errors: tuple[str, ...]
    conflicts: tuple[WindowConflict, ...] = ()
    ok: bool = field(default=False, init=False)


ValidationResult = Union[Valid, Invalid]


def window_of(rule: CheckinRuleDraft, event_datetime: datetime) -> CheckinWindow:
    return CheckinWindow(
        start=event_datetime - timedelta(minutes=rule.release_minutes_before),
        end=event_datetime + timedelta(minutes=rule.close_minutes_after),
    )


def windows_overlap(a: CheckinWindow, b: CheckinWindow) -> bool:
    # closed intervals: touching endpoints share an instant
    return not (a.end < b.start or b.end < a.start)


def detect_window_conflicts(
    rules: Sequence[CheckinRuleDraft],
    event_datetime: datetime,
) -> list[WindowConflict]:
    """
    Pairwise check over mandatory active rules.

    Every window is measured from the same event instant with non-negative
    offsets, so with the current 0..1440 bounds two windows always share the
    event instant and no conflict can be produced. The comparison is kept
    general so wider bounds (negative offsets) are handled without changes.
    """
    conflicts: list[WindowConflict] = []
    for rule_a, rule_b in combinations(rules, 2):
        if windows_overlap(window_of(rule_a, event_datetime), window_of(rule_b, event_datetime)):
            continue
        conflicts.append(
            WindowConflict(
                rule_a=rule_a.name,
                rule_b=rule_b.name,
                message=(
                    f'Check-in windows of "{rule_a.name}" and "{rule_b.name}" do not intersect; '
                    "both mandatory rules cannot be satisfied"
                ),
            )
        )
    return conflicts


def validate(candidate_rules: Iterable[CheckinRuleDraft], event_datetime: datetime) -> ValidationResult:
    """
    Validate a full replacement rule set for an event starting at event_datetime.

    All checks always run; failures are accumulated in a fixed order
    (duplicate names, active rule presence, window conflicts).
    """
    rules = list(candidate_rules)
    errors: list[str] = []

    # 1) duplicate names (case/whitespace-insensitive)
    names = [normalize_rule_name(r.name) for r in rules]
    if len(set(names)) != len(names):
        errors.append(DUPLICATE_NAMES_ERROR)

    # 2) at least one active rule, only when the set is non-empty
    if rules and not any(r.active for r in rules):
        errors.append(NO_ACTIVE_RULE_ERROR)

    # 3) window conflicts among mandatory active rules
    conflicts: list[WindowConflict] = []
    mandatory_active = [r for r in rules if r.is_mandatory_active]
    if len(mandatory_active) >= 2:
        conflicts = detect_window_conflicts(mandatory_active, event_datetime)
        if conflicts:
            errors.append(f"window conflict between {len(conflicts)} pair(s) of mandatory rules")

    if errors:
        return Invalid(errors=tuple(errors), conflicts=tuple(conflicts))
    return Valid()
