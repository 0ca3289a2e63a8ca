"""
Error codes and types for sentinel-verify.

Two families live here:

- ``ErrorCode`` / ``VerificationError``: findings. A finding is an expected
  outcome of verifying a log (bad signature, sequence gap, ...). Findings are
  collected in the report, they are never raised.
- ``SentinelVerifyError`` and subclasses: fatal conditions that stop a run
  before any verdict can be produced (no anchors, malformed records, bad
  configuration).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Verification finding codes.
    Stable strings: they appear in JSON reports consumed by CI tooling.
    """
    DUPLICATE_SEQUENCE = "DUPLICATE_SEQUENCE"
    SEQUENCE_GAP = "SEQUENCE_GAP"
    SEQUENCE_START = "SEQUENCE_START"
    KEY_NOT_FOUND = "KEY_NOT_FOUND"
    SIGNATURE_INVALID = "SIGNATURE_INVALID"
    REVOKED_KEY = "REVOKED_KEY"
    CANONICAL_NONDETERMINISTIC = "CANONICAL_NONDETERMINISTIC"
    CADENCE_GAP_UNDISCLOSED = "CADENCE_GAP_UNDISCLOSED"


@dataclass
class VerificationError:
    """
    A single failed check with typed code and audit details.
    """
    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class SentinelVerifyError(Exception):
    """Base exception for fatal sentinel-verify errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class AnchorSourceMissingError(SentinelVerifyError):
    """Raised when there is no anchor directory or it holds no anchor records."""


class MalformedRecordError(SentinelVerifyError):
    """Raised when an anchor or key record cannot be parsed into its expected shape."""


class ConfigurationError(SentinelVerifyError):
    """Raised when a configuration value is invalid."""
