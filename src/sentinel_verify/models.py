"""
Anchor and key records.

Both are immutable once loaded. ``from_dict`` is the only way records enter
the engine from storage, and it raises ``MalformedRecordError`` for anything
that does not match the expected shape.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .errors import MalformedRecordError


class KeyStatus(str, Enum):
    """Lifecycle state of a signing key."""
    ACTIVE = "ACTIVE"
    RETIRED = "RETIRED"
    REVOKED = "REVOKED"

    @property
    def accepts_signatures(self) -> bool:
        """RETIRED keys keep historical validity; REVOKED keys lose all of it."""
        return self is not KeyStatus.REVOKED


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 instant into an aware datetime.

    A trailing "Z" is accepted; naive values are taken as UTC.

    Raises:
        ValueError: If the value is not ISO-8601
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _require(record: dict[str, Any], name: str, kind: type, source: str) -> Any:
    if name not in record or record[name] is None:
        raise MalformedRecordError(
            f"Missing required field: {name}",
            {"source": source, "field": name},
        )
    value = record[name]
    # bool is a subclass of int
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise MalformedRecordError(
            f"Field {name} must be {kind.__name__}, got {type(value).__name__}",
            {"source": source, "field": name},
        )
    return value


@dataclass(frozen=True)
class Anchor:
    """A signed record asserting a governance state existed at a point in time."""
    schema_version: int
    anchor_sequence: int
    timestamp: str
    org_anchor_hash: str
    signature: str
    key_id: str
    source_count: int | None = None
    cadence_violation: bool = False

    @property
    def published_at(self) -> datetime:
        return parse_timestamp(self.timestamp)

    @classmethod
    def from_dict(cls, record: Any, source: str = "<anchor>") -> "Anchor":
        if not isinstance(record, dict):
            raise MalformedRecordError(
                "Anchor record must be a JSON object",
                {"source": source, "received": type(record).__name__},
            )

        timestamp = _require(record, "timestamp", str, source)
        try:
            parse_timestamp(timestamp)
        except ValueError as exc:
            raise MalformedRecordError(
                f"Invalid ISO-8601 timestamp: {timestamp}",
                {"source": source, "field": "timestamp"},
            ) from exc

        source_count = record.get("source_count")
        if source_count is not None and (
            not isinstance(source_count, int) or isinstance(source_count, bool)
        ):
            raise MalformedRecordError(
                "Field source_count must be int",
                {"source": source, "field": "source_count"},
            )

        cadence_violation = record.get("cadence_violation", False)
        if cadence_violation is None:
            cadence_violation = False
        if not isinstance(cadence_violation, bool):
            raise MalformedRecordError(
                "Field cadence_violation must be bool",
                {"source": source, "field": "cadence_violation"},
            )

        return cls(
            schema_version=_require(record, "schema_version", int, source),
            anchor_sequence=_require(record, "anchor_sequence", int, source),
            timestamp=timestamp,
            org_anchor_hash=_require(record, "org_anchor_hash", str, source),
            signature=_require(record, "signature", str, source),
            key_id=_require(record, "key_id", str, source),
            source_count=source_count,
            cadence_violation=cadence_violation,
        )


@dataclass(frozen=True)
class Key:
    """A registry entry for one Ed25519 signing key."""
    key_id: str
    public_key: str
    status: KeyStatus
    retired_at: str | None = None
    revoked_at: str | None = None

    @property
    def short_id(self) -> str:
        return self.key_id[:8]

    @classmethod
    def from_dict(cls, record: Any, source: str = "<registry>") -> "Key":
        if not isinstance(record, dict):
            raise MalformedRecordError(
                "Key record must be a JSON object",
                {"source": source, "received": type(record).__name__},
            )

        key_id = _require(record, "key_id", str, source)
        raw_status = _require(record, "status", str, source)
        try:
            status = KeyStatus(raw_status)
        except ValueError as exc:
            raise MalformedRecordError(
                f"Unknown key status: {raw_status}",
                {"source": source, "key_id": key_id},
            ) from exc

        return cls(
            key_id=key_id,
            public_key=_require(record, "public_key", str, source),
            status=status,
            retired_at=record.get("retired_at"),
            revoked_at=record.get("revoked_at"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key_id": self.key_id,
            "status": self.status.value,
            "retired_at": self.retired_at,
            "revoked_at": self.revoked_at,
        }
