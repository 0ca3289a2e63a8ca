"""
Report summary utilities for human-readable inspection.

Extracts key figures from a finished report without modifying it.
"""

from typing import Any

from .report import VerificationReport


def report_summary(report: VerificationReport) -> dict[str, Any]:
    """
    Extract a flat summary from a verification report.

    Args:
        report: A finished VerificationReport

    Returns:
        Dict with verdict, anchor and key totals, cadence violations,
        and passed/failed check counts
    """
    s = report.summary()
    by_status = s["keys_by_status"]
    return {
        "verdict": "VALID" if report.valid else "INVALID",
        "anchors": s["anchors"],
        "keys": s["keys"],
        "active_keys": by_status.get("ACTIVE", 0),
        "retired_keys": by_status.get("RETIRED", 0),
        "revoked_keys": by_status.get("REVOKED", 0),
        "cadence_violations": s["cadence_violations"],
        "passed": s["passed"],
        "failed": s["failed"],
    }


def format_keys_line(report: VerificationReport) -> str:
    """e.g. "3 (2 active, 1 retired, 0 revoked)"."""
    s = report_summary(report)
    return (
        f"{s['keys']} ({s['active_keys']} active, "
        f"{s['retired_keys']} retired, {s['revoked_keys']} revoked)"
    )


def format_report_summary(report: VerificationReport) -> str:
    """
    Format a report as a single-line human-readable string.

    Returns:
        String like "VALID | 12 anchors | keys 3 (2 active, ...) | 0 cadence | 40 passed, 0 failed"
    """
    s = report_summary(report)
    return (
        f"{s['verdict']} | {s['anchors']} anchors | keys {format_keys_line(report)} | "
        f"{s['cadence_violations']} cadence | {s['passed']} passed, {s['failed']} failed"
    )
