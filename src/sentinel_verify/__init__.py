"""
sentinel-verify: Independent verification of the Sentinel transparency log.

Re-derives each anchor's canonical signing string, verifies its Ed25519
signature against the public-key registry, enforces key lifecycle rules,
and checks sequence continuity and publication cadence. Byte-for-byte
compatible with the anchors the producer has already published.
"""

from .canonical import anchor_canonical_string, canonical_string, content_hash
from .config import VerifierConfig
from .models import Anchor, Key, KeyStatus
from .registry import KeyRegistry
from .signature import check_key_lifecycle, spki_der, verify_anchor_signature, verify_ed25519
from .sequence import check_sequence
from .cadence import check_cadence
from .report import CheckResult, Section, VerificationReport
from .loader import load_anchors, load_log, load_registry
from .verify import verify_determinism, verify_log, verify_path, verify_signatures
from .errors import (
    AnchorSourceMissingError,
    ConfigurationError,
    ErrorCode,
    MalformedRecordError,
    SentinelVerifyError,
    VerificationError,
)

__version__ = "0.1.0"
__all__ = [
    # Canonical encoding
    "canonical_string",
    "anchor_canonical_string",
    "content_hash",
    # Records
    "Anchor",
    "Key",
    "KeyStatus",
    "KeyRegistry",
    # Checks
    "verify_ed25519",
    "verify_anchor_signature",
    "check_key_lifecycle",
    "spki_der",
    "check_sequence",
    "check_cadence",
    "verify_signatures",
    "verify_determinism",
    # Verification
    "verify_log",
    "verify_path",
    "CheckResult",
    "Section",
    "VerificationReport",
    # Loading
    "VerifierConfig",
    "load_anchors",
    "load_registry",
    "load_log",
    # Errors
    "ErrorCode",
    "VerificationError",
    "SentinelVerifyError",
    "AnchorSourceMissingError",
    "MalformedRecordError",
    "ConfigurationError",
]
