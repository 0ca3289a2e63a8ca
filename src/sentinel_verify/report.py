"""
Verification report.

Accumulates one outcome per individual check (not per anchor) and derives
the final verdict: a log is valid iff no check failed. Acknowledged
outcomes (disclosed cadence violations) count as passed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ErrorCode, VerificationError


class Section(str, Enum):
    """Report sections, in presentation order."""
    SEQUENCE = "sequence"
    SIGNATURE = "signature"
    KEY_LIFECYCLE = "key_lifecycle"
    DETERMINISM = "determinism"
    CADENCE = "cadence"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single labelled check."""
    section: Section
    label: str
    passed: bool
    code: ErrorCode | None = None
    acknowledged: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, section: Section, label: str, **details: Any) -> "CheckResult":
        return cls(section=section, label=label, passed=True, details=details)

    @classmethod
    def fail(cls, section: Section, label: str, code: ErrorCode, **details: Any) -> "CheckResult":
        return cls(section=section, label=label, passed=False, code=code, details=details)

    @classmethod
    def acknowledge(cls, section: Section, label: str, **details: Any) -> "CheckResult":
        return cls(section=section, label=label, passed=True, acknowledged=True, details=details)

    def to_dict(self) -> dict[str, Any]:
        return {
            "section": self.section.value,
            "label": self.label,
            "passed": self.passed,
            "acknowledged": self.acknowledged,
            "code": self.code.value if self.code else None,
            "details": self.details,
        }


class VerificationReport:
    """Running tally of check outcomes for one verification run."""

    def __init__(
        self,
        anchor_count: int = 0,
        keys_by_status: dict[str, int] | None = None,
        keys: list[dict[str, Any]] | None = None,
    ):
        self.anchor_count = anchor_count
        self.keys_by_status = dict(keys_by_status or {})
        self.keys = list(keys or [])
        self._checks: list[CheckResult] = []

    def record(self, result: CheckResult) -> CheckResult:
        self._checks.append(result)
        return result

    def extend(self, results: list[CheckResult]) -> None:
        for result in results:
            self.record(result)

    @property
    def checks(self) -> tuple[CheckResult, ...]:
        return tuple(self._checks)

    def section(self, section: Section) -> list[CheckResult]:
        return [c for c in self._checks if c.section is section]

    @property
    def passed(self) -> int:
        return sum(1 for c in self._checks if c.passed)

    @property
    def failed(self) -> int:
        return sum(1 for c in self._checks if not c.passed)

    @property
    def cadence_violations(self) -> int:
        return sum(1 for c in self._checks if c.acknowledged)

    @property
    def valid(self) -> bool:
        return self.failed == 0

    @property
    def errors(self) -> list[VerificationError]:
        return [
            VerificationError(code=c.code, message=c.label, details=c.details)
            for c in self._checks
            if not c.passed and c.code is not None
        ]

    def summary(self) -> dict[str, Any]:
        return {
            "anchors": self.anchor_count,
            "keys": sum(self.keys_by_status.values()),
            "keys_by_status": dict(self.keys_by_status),
            "cadence_violations": self.cadence_violations,
            "passed": self.passed,
            "failed": self.failed,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "summary": self.summary(),
            "keys": list(self.keys),
            "checks": [c.to_dict() for c in self._checks],
            "errors": [e.to_dict() for e in self.errors],
        }
