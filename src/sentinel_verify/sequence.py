"""
Sequence continuity checks.

Anchors are taken in load order, which is file-name order unless the loader
was asked to sort by anchor_sequence. No re-sorting happens here: a log whose
files are out of order reports gaps.
"""

import logging

from .errors import ErrorCode
from .models import Anchor
from .report import CheckResult, Section

logger = logging.getLogger(__name__)


def check_sequence(anchors: list[Anchor]) -> list[CheckResult]:
    """
    Run the three independent sequence checks.

    Returns:
        [no duplicates, no gaps, starts at 1], in that order
    """
    seen: set[int] = set()
    duplicates: list[int] = []
    gaps: list[dict[str, int]] = []

    for i, anchor in enumerate(anchors):
        seq = anchor.anchor_sequence
        if seq in seen:
            duplicates.append(seq)
        seen.add(seq)

        if i > 0:
            expected = anchors[i - 1].anchor_sequence + 1
            if seq != expected:
                gaps.append({"expected": expected, "actual": seq})

    if duplicates:
        logger.warning("Duplicate anchor sequences: %s", duplicates)
    if gaps:
        logger.warning("Sequence discontinuities: %s", gaps)

    results = [
        CheckResult.ok(Section.SEQUENCE, "No duplicate sequences") if not duplicates
        else CheckResult.fail(
            Section.SEQUENCE, "No duplicate sequences", ErrorCode.DUPLICATE_SEQUENCE,
            duplicates=duplicates,
        ),
        CheckResult.ok(Section.SEQUENCE, "No gaps in sequence") if not gaps
        else CheckResult.fail(
            Section.SEQUENCE, "No gaps in sequence", ErrorCode.SEQUENCE_GAP,
            gaps=gaps,
        ),
    ]

    first = anchors[0].anchor_sequence if anchors else None
    if first == 1:
        results.append(CheckResult.ok(Section.SEQUENCE, "Starts at sequence 1"))
    else:
        results.append(CheckResult.fail(
            Section.SEQUENCE, "Starts at sequence 1", ErrorCode.SEQUENCE_START,
            first=first,
        ))
    return results
