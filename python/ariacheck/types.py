from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


IMPACTS = ("critical", "serious", "moderate", "minor")
IMPACT_RANK = {name: rank for rank, name in enumerate(reversed(IMPACTS), start=1)}


def impact_at_least(impact: str, threshold: str) -> bool:
    """True when ``impact`` is as severe as ``threshold`` or more."""
    if threshold not in IMPACT_RANK:
        raise ValueError(f"Unknown impact level {threshold!r}")
    return IMPACT_RANK.get(impact, 0) >= IMPACT_RANK[threshold]


class InvalidTreeError(ValueError):
    pass


class ConfigError(ValueError):
    pass


class A11yWarning(UserWarning):
    pass


@dataclass(frozen=True)
class Violation:
    id: str
    description: str
    impact: str
    element: Any = field(default=None, repr=False)
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "impact": self.impact,
            "description": self.description,
            "path": self.path,
        }
        if self.data:
            out["data"] = dict(self.data)
        return out


@dataclass(frozen=True)
class CheckResult:
    violations: tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.violations

    def impact_counts(self) -> dict[str, int]:
        counts = {name: 0 for name in IMPACTS}
        for violation in self.violations:
            counts[violation.impact] = counts.get(violation.impact, 0) + 1
        return counts

    def by_id(self, violation_id: str) -> list[Violation]:
        return [v for v in self.violations if v.id == violation_id]

    def ids(self) -> list[str]:
        return [v.id for v in self.violations]

    def at_least(self, threshold: str) -> list[Violation]:
        return [v for v in self.violations if impact_at_least(v.impact, threshold)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "violation_count": len(self.violations),
            "impact_counts": self.impact_counts(),
            "violations": [v.to_dict() for v in self.violations],
        }


class A11yValidationError(ValueError):
    def __init__(self, message: str, result: CheckResult) -> None:
        super().__init__(message)
        self.result = result
