"""
Offline transparency-log verification for sentinel-verify.

Runs every check over an already-loaded anchor set and key registry and
collects the outcomes in a ``VerificationReport``. Findings never stop the
run: one pass reports every problem in the log.
"""

import logging
from pathlib import Path

from .cadence import DEFAULT_MAX_GAP_DAYS, check_cadence
from .canonical import anchor_canonical_string, content_hash
from .config import VerifierConfig
from .errors import AnchorSourceMissingError, ErrorCode
from .loader import load_log
from .models import Anchor
from .registry import KeyRegistry
from .report import CheckResult, Section, VerificationReport
from .sequence import check_sequence
from .signature import check_key_lifecycle, verify_anchor_signature

logger = logging.getLogger(__name__)


def verify_signatures(anchors: list[Anchor], registry: KeyRegistry) -> list[CheckResult]:
    """One signature check per anchor, in load order."""
    return [verify_anchor_signature(anchor, registry) for anchor in anchors]


def verify_determinism(anchors: list[Anchor]) -> list[CheckResult]:
    """
    Re-derive each anchor's canonical string and hash twice and compare.
    """
    results: list[CheckResult] = []
    for anchor in anchors:
        first = content_hash(anchor_canonical_string(anchor))
        second = content_hash(anchor_canonical_string(anchor))
        label = f"Anchor #{anchor.anchor_sequence}: canonical hash deterministic"
        if first == second:
            results.append(CheckResult.ok(
                Section.DETERMINISM, label,
                anchor_sequence=anchor.anchor_sequence, content_hash=first,
            ))
        else:
            results.append(CheckResult.fail(
                Section.DETERMINISM, label, ErrorCode.CANONICAL_NONDETERMINISTIC,
                anchor_sequence=anchor.anchor_sequence, first=first, second=second,
            ))
    return results


def verify_log(
    anchors: list[Anchor],
    registry: KeyRegistry,
    max_gap_days: float = DEFAULT_MAX_GAP_DAYS,
) -> VerificationReport:
    """
    Full log verification: sequence, signatures, key lifecycle, determinism, cadence.

    Args:
        anchors: Anchors in intended publication order
        registry: Public-key registry
        max_gap_days: Cadence window before an undisclosed gap fails

    Returns:
        VerificationReport; ``report.valid`` is the verdict

    Raises:
        AnchorSourceMissingError: If there are no anchors to verify
    """
    if not anchors:
        raise AnchorSourceMissingError("No anchors to verify")

    report = VerificationReport(
        anchor_count=len(anchors),
        keys_by_status=registry.count_by_status(),
        keys=[key.to_dict() for key in registry.values()],
    )
    logger.info("Verifying %d anchors against %d keys", len(anchors), len(registry))

    report.extend(check_sequence(anchors))
    report.extend(verify_signatures(anchors, registry))
    report.extend(check_key_lifecycle(anchors, registry))
    report.extend(verify_determinism(anchors))
    report.extend(check_cadence(anchors, max_gap_days=max_gap_days))

    logger.info(
        "Verification finished: %d passed, %d failed, %s",
        report.passed, report.failed, "VALID" if report.valid else "INVALID",
    )
    return report


def verify_path(root: str | Path, config: VerifierConfig | None = None) -> VerificationReport:
    """Load a transparency log checkout from disk and verify it."""
    config = config or VerifierConfig()
    anchors, registry = load_log(root, config)
    return verify_log(anchors, registry, max_gap_days=config.max_gap_days)
