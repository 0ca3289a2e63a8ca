"""
Ed25519 signature verification for anchors.

The producer signs the UTF-8 bytes of the *hex text* of the content hash,
not the raw 32-byte digest. Every historical anchor depends on this; do not
change it to sign raw digest bytes.
"""

import base64
import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519

from .canonical import anchor_canonical_string, content_hash
from .models import Anchor
from .registry import KeyRegistry
from .errors import ErrorCode
from .report import CheckResult, Section

logger = logging.getLogger(__name__)


# SubjectPublicKeyInfo prefix for a raw Ed25519 key (OID 1.3.101.112)
ED25519_SPKI_PREFIX = bytes.fromhex("302a300506032b6570032100")


def spki_der(raw_public_key: bytes) -> bytes:
    """Wrap a raw 32-byte Ed25519 public key in its DER SubjectPublicKeyInfo envelope."""
    if len(raw_public_key) != 32:
        raise ValueError(f"Ed25519 public key must be 32 bytes, got {len(raw_public_key)}")
    return ED25519_SPKI_PREFIX + raw_public_key


def verify_ed25519(content_hash_hex: str, signature_b64: str, public_key_b64: str) -> bool:
    """
    Verify an Ed25519 signature over the hex text of a content hash.

    Never raises: malformed keys or signatures are a finding, not a crash.

    Args:
        content_hash_hex: Lowercase hex SHA-256 of the canonical string
        signature_b64: Base64 signature from the anchor
        public_key_b64: Base64 raw 32-byte public key from the registry

    Returns:
        True if the signature verifies, False otherwise
    """
    try:
        message = content_hash_hex.encode("utf-8")
        signature = base64.b64decode(signature_b64, validate=True)
        public_key = ed25519.Ed25519PublicKey.from_public_bytes(
            base64.b64decode(public_key_b64, validate=True)
        )
        public_key.verify(signature, message)
    except InvalidSignature:
        return False
    except (ValueError, TypeError) as exc:
        # binascii.Error is a ValueError
        logger.debug("Signature material rejected: %s", exc)
        return False
    return True


def verify_anchor_signature(anchor: Anchor, registry: KeyRegistry) -> CheckResult:
    """
    Produce exactly one signature check for an anchor.

    A missing key is reported as its own failure; the lifecycle status of a
    found key is checked separately by ``check_key_lifecycle``.
    """
    seq = anchor.anchor_sequence
    key = registry.lookup(anchor.key_id)
    if key is None:
        logger.warning("Anchor #%s: key %s not found", seq, anchor.key_id)
        return CheckResult.fail(
            Section.SIGNATURE,
            f"Anchor #{seq}: key {anchor.key_id} not found",
            ErrorCode.KEY_NOT_FOUND,
            anchor_sequence=seq,
            key_id=anchor.key_id,
        )

    digest = content_hash(anchor_canonical_string(anchor))
    label = f"Anchor #{seq}: signature valid (key={key.short_id}…)"
    if verify_ed25519(digest, anchor.signature, key.public_key):
        logger.debug("Anchor #%s: signature verified with %s", seq, key.key_id)
        return CheckResult.ok(Section.SIGNATURE, label, anchor_sequence=seq, key_id=key.key_id)

    logger.warning("Anchor #%s: signature verification failed", seq)
    return CheckResult.fail(
        Section.SIGNATURE,
        label,
        ErrorCode.SIGNATURE_INVALID,
        anchor_sequence=seq,
        key_id=key.key_id,
        content_hash=digest,
    )


def check_key_lifecycle(anchors: list[Anchor], registry: KeyRegistry) -> list[CheckResult]:
    """
    Fail every anchor signed by a REVOKED key, regardless of when it was signed.

    Anchors whose key is missing are left to the signature check.
    """
    results: list[CheckResult] = []
    for anchor in anchors:
        key = registry.lookup(anchor.key_id)
        if key is None or key.status.accepts_signatures:
            continue
        logger.warning("Anchor #%s signed by REVOKED key %s", anchor.anchor_sequence, key.key_id)
        results.append(CheckResult.fail(
            Section.KEY_LIFECYCLE,
            f"Anchor #{anchor.anchor_sequence}: signed by REVOKED key {key.key_id}",
            ErrorCode.REVOKED_KEY,
            anchor_sequence=anchor.anchor_sequence,
            key_id=key.key_id,
            revoked_at=key.revoked_at,
        ))

    if not results:
        results.append(CheckResult.ok(Section.KEY_LIFECYCLE, "No anchors signed by revoked keys"))
    return results
