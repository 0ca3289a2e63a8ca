"""
Publication cadence checks.

A producer that misses its publication window is expected to say so by
setting ``cadence_violation`` on the next anchor. Disclosed violations are
acknowledged and count as passed; an undisclosed gap is a failure.
"""

import logging

from .errors import ErrorCode
from .models import Anchor
from .report import CheckResult, Section

logger = logging.getLogger(__name__)

DEFAULT_MAX_GAP_DAYS = 7.0
SECONDS_PER_DAY = 86400.0


def gap_days(earlier: Anchor, later: Anchor) -> float:
    """Elapsed days between two anchors' timestamps (negative if out of order)."""
    delta = later.published_at - earlier.published_at
    return delta.total_seconds() / SECONDS_PER_DAY


def check_cadence(
    anchors: list[Anchor],
    max_gap_days: float = DEFAULT_MAX_GAP_DAYS,
) -> list[CheckResult]:
    """
    Acknowledge disclosed cadence violations and fail undisclosed gaps.

    Args:
        anchors: Anchors in load order
        max_gap_days: Largest gap between consecutive anchors that needs no disclosure

    Returns:
        Acknowledged checks for flagged anchors (or a single "No cadence
        violations" pass), followed by one failure per undisclosed gap
    """
    results: list[CheckResult] = []

    for anchor in anchors:
        if anchor.cadence_violation:
            logger.info(
                "Anchor #%s: cadence violation disclosed (%s)",
                anchor.anchor_sequence, anchor.timestamp,
            )
            results.append(CheckResult.acknowledge(
                Section.CADENCE,
                f"Anchor #{anchor.anchor_sequence}: cadence violation flagged ({anchor.timestamp})",
                anchor_sequence=anchor.anchor_sequence,
                timestamp=anchor.timestamp,
            ))

    if not results:
        results.append(CheckResult.ok(Section.CADENCE, "No cadence violations"))

    for prev, curr in zip(anchors, anchors[1:]):
        days = gap_days(prev, curr)
        if days > max_gap_days and not curr.cadence_violation:
            logger.warning(
                "Anchor #%s: %.2f day gap without cadence_violation flag",
                curr.anchor_sequence, days,
            )
            results.append(CheckResult.fail(
                Section.CADENCE,
                f"Anchor #{curr.anchor_sequence}: >{max_gap_days:g} days gap but no cadence_violation flag",
                ErrorCode.CADENCE_GAP_UNDISCLOSED,
                anchor_sequence=curr.anchor_sequence,
                previous_sequence=prev.anchor_sequence,
                gap_days=round(days, 3),
            ))
    return results
