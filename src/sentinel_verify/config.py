"""
Configuration for sentinel-verify.

Defaults come from environment variables; the CLI overrides them per run.
"""

import os
from dataclasses import dataclass, replace
from collections.abc import Mapping
from typing import Any

from .cadence import DEFAULT_MAX_GAP_DAYS
from .errors import ConfigurationError

# Layout of a published transparency log checkout
DEFAULT_ANCHORS_DIR = "anchors"
DEFAULT_KEYS_FILE = os.path.join("KEYS", "org-public-keys.json")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean", {"value": value})


def _parse_gap(name: str, value: Any) -> float:
    try:
        days = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number of days", {"value": value}) from exc
    if days <= 0:
        raise ConfigurationError(f"{name} must be positive", {"value": value})
    return days


def _parse_level(name: str, value: str) -> str:
    level = value.strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(
            f"{name} must be one of {', '.join(sorted(_LOG_LEVELS))}",
            {"value": value},
        )
    return level


@dataclass(frozen=True)
class VerifierConfig:
    """Settings for one verification run."""
    max_gap_days: float = DEFAULT_MAX_GAP_DAYS
    sort_by_sequence: bool = False
    anchors_dir: str = DEFAULT_ANCHORS_DIR
    keys_file: str = DEFAULT_KEYS_FILE
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "VerifierConfig":
        """Build a config from the SENTINEL_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            max_gap_days=_parse_gap(
                "SENTINEL_MAX_GAP_DAYS", env.get("SENTINEL_MAX_GAP_DAYS", DEFAULT_MAX_GAP_DAYS)
            ),
            sort_by_sequence=_parse_bool(
                "SENTINEL_SORT_BY_SEQUENCE", env.get("SENTINEL_SORT_BY_SEQUENCE", "false")
            ),
            anchors_dir=env.get("SENTINEL_ANCHORS_DIR", DEFAULT_ANCHORS_DIR),
            keys_file=env.get("SENTINEL_KEYS_FILE", DEFAULT_KEYS_FILE),
            log_level=_parse_level("SENTINEL_LOG_LEVEL", env.get("SENTINEL_LOG_LEVEL", "WARNING")),
        )

    def override(self, **changes: Any) -> "VerifierConfig":
        """Return a copy with non-None values replaced and validated."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if "max_gap_days" in changes:
            changes["max_gap_days"] = _parse_gap("max_gap_days", changes["max_gap_days"])
        if "log_level" in changes:
            changes["log_level"] = _parse_level("log_level", changes["log_level"])
        return replace(self, **changes)
