"""
Canonical signing string for transparency-log anchors.

CRITICAL: The output MUST stay byte-identical to what the anchor producer
signed. Any change here invalidates every historical signature.

Rules:
- Four signed fields, fixed order:
  schema_version, anchor_sequence, timestamp, org_anchor_hash
- Each rendered as ``field=value``, joined with a literal ``|``
- No whitespace, no escaping
- Integers in decimal, timestamp exactly as stored
"""

import hashlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Anchor


SIGNED_FIELDS = ("schema_version", "anchor_sequence", "timestamp", "org_anchor_hash")


def canonical_string(
    schema_version: int,
    anchor_sequence: int,
    timestamp: str,
    org_anchor_hash: str,
) -> str:
    """
    Build the canonical signing string for an anchor's signed fields.

    Args:
        schema_version: Protocol version of the encoding
        anchor_sequence: Anchor ordinal
        timestamp: ISO-8601 publication time, as stored
        org_anchor_hash: Hex commitment to governance state

    Returns:
        e.g. "schema_version=1|anchor_sequence=3|timestamp=...|org_anchor_hash=ab12..."
    """
    values = (schema_version, anchor_sequence, timestamp, org_anchor_hash)
    return "|".join(f"{name}={value}" for name, value in zip(SIGNED_FIELDS, values))


def anchor_canonical_string(anchor: "Anchor") -> str:
    """Canonical signing string of a loaded anchor."""
    return canonical_string(
        anchor.schema_version,
        anchor.anchor_sequence,
        anchor.timestamp,
        anchor.org_anchor_hash,
    )


def content_hash(canonical: str) -> str:
    """
    Lowercase hex SHA-256 of the UTF-8 canonical string.

    No "sha256:" prefix: the bare hex text is what gets signed.
    """
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
