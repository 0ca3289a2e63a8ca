"""
sentinel-verify: transparency log verification CLI
===================================================

Usage:
    sentinel-verify [ROOT]                          Human output (default)
    sentinel-verify [ROOT] --format json            Machine-readable JSON
    sentinel-verify [ROOT] --format compact         One-line pipeline output
    sentinel-verify [ROOT] --quiet                  Exit code only

ROOT is a checkout of the transparency log holding ``anchors/`` and
``KEYS/org-public-keys.json`` (default: current directory).

Exit codes:
    0  Log valid
    1  Log invalid (at least one failed check)
    2  Error (no anchors, malformed record, bad configuration)
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import VerifierConfig
from .errors import SentinelVerifyError
from .loader import load_log
from .report import Section, VerificationReport
from .summary import format_keys_line, format_report_summary
from .verify import verify_log

logger = logging.getLogger(__name__)


SECTION_TITLES = {
    Section.SEQUENCE: "[1] Sequential Numbering",
    Section.SIGNATURE: "[2] Signature Verification",
    Section.KEY_LIFECYCLE: "[3] Key Lifecycle",
    Section.DETERMINISM: "[4] Canonical Determinism",
    Section.CADENCE: "[5] Cadence",
}


# ── ANSI color ────────────────────────────────────────────────────────────────

class _Color:
    """Auto-disables when not a TTY or --no-color is passed."""
    _on: bool = True

    @classmethod
    def configure(cls, enabled: bool) -> None:
        cls._on = enabled and sys.stdout.isatty()

    @classmethod
    def green(cls, s: str) -> str:
        return click.style(s, fg="green") if cls._on else s

    @classmethod
    def red(cls, s: str) -> str:
        return click.style(s, fg="red") if cls._on else s

    @classmethod
    def yellow(cls, s: str) -> str:
        return click.style(s, fg="yellow") if cls._on else s

    @classmethod
    def bold(cls, s: str) -> str:
        return click.style(s, bold=True) if cls._on else s

    @classmethod
    def dim(cls, s: str) -> str:
        return click.style(s, dim=True) if cls._on else s


# ── Output ────────────────────────────────────────────────────────────────────

def _emit_error(message: str, fmt: str, quiet: bool) -> None:
    if quiet:
        return
    if fmt == "json":
        click.echo(json.dumps({"valid": None, "error": message}, indent=2))
    else:
        click.echo(_Color.red(f"  ❌ {message}"), err=True)


def _output_human(report: VerificationReport) -> None:
    click.echo("\n  🔍 Sentinel Transparency Log Verifier")
    click.echo("  ──────────────────────────────────\n")
    click.echo(f"  📋 Anchors: {report.anchor_count}")
    click.echo(f"  📋 Keys: {len(report.keys)}")

    for section, title in SECTION_TITLES.items():
        click.echo(f"\n  {_Color.bold(title)}")
        for check in report.section(section):
            if check.acknowledged:
                click.echo(f"    {_Color.yellow('⚠️')}  {check.label}")
            elif check.passed:
                click.echo(f"  {_Color.green('✅')} {check.label}")
            else:
                click.echo(f"  {_Color.red('❌')} {check.label}")

        if section is Section.KEY_LIFECYCLE:
            for key in report.keys:
                label = f"{key['key_id'][:8]}… {key['status']}"
                if key["status"] == "REVOKED":
                    click.echo(f"    ⚠️  {label} (revoked: {key['revoked_at']})")
                elif key["status"] == "RETIRED":
                    click.echo(f"    ℹ️  {label} (retired: {key['retired_at']})")
                else:
                    click.echo(f"    🔑 {label}")

        if section is Section.CADENCE and report.cadence_violations:
            click.echo(_Color.dim(
                f"    {report.cadence_violations} cadence violation(s), acknowledged transparently"
            ))

    click.echo("\n  ──────────────────────────────────")
    click.echo(f"  Anchors: {report.anchor_count}")
    click.echo(f"  Keys: {format_keys_line(report)}")
    click.echo(f"  Cadence violations: {report.cadence_violations}")
    click.echo(f"  Results: {report.passed} passed, {report.failed} failed")
    if report.valid:
        click.echo(f"  {_Color.green('✅ TRANSPARENCY LOG: VALID')}\n")
    else:
        click.echo(f"  {_Color.red('❌ TRANSPARENCY LOG: INVALID')}\n")


# ── CLI command ───────────────────────────────────────────────────────────────

@click.command(name="sentinel-verify")
@click.argument("root", type=click.Path(file_okay=False, path_type=Path), default=".")
@click.option(
    "--anchors-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Anchor directory, relative to ROOT (default: anchors).",
)
@click.option(
    "--keys-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Key registry file, relative to ROOT (default: KEYS/org-public-keys.json).",
)
@click.option(
    "--format", "fmt",
    type=click.Choice(["human", "json", "compact"], case_sensitive=False),
    default="human",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--max-gap-days",
    type=float,
    default=None,
    help="Longest gap between anchors that needs no cadence_violation flag (default: 7).",
)
@click.option(
    "--sort-by-sequence",
    is_flag=True,
    default=False,
    help="Order anchors by anchor_sequence instead of file name.",
)
@click.option("--quiet", is_flag=True, default=False, help="Suppress output. Exit code only.")
@click.option("--no-color", is_flag=True, default=False, help="Disable ANSI color output.")
@click.option(
    "--log-level",
    type=click.Choice(["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"], case_sensitive=False),
    default=None,
    help="Logging level for diagnostics on stderr (default: SENTINEL_LOG_LEVEL or WARNING).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Shortcut for --log-level DEBUG.")
@click.version_option(__version__, prog_name="sentinel-verify")
def main(
    root:             Path,
    anchors_dir:      Optional[str],
    keys_file:        Optional[str],
    fmt:              str,
    max_gap_days:     Optional[float],
    sort_by_sequence: bool,
    quiet:            bool,
    no_color:         bool,
    log_level:        Optional[str],
    verbose:          bool,
) -> None:
    """
    Verify a Sentinel transparency log: sequence, signatures, key lifecycle, cadence.

    \b
    Examples:
      sentinel-verify
      sentinel-verify ./sentinel-transparency-log --format json
      sentinel-verify . --quiet && echo "clean"
    """
    _Color.configure(not no_color)
    fmt = fmt.lower()

    try:
        config = VerifierConfig.from_env().override(
            anchors_dir=anchors_dir,
            keys_file=keys_file,
            max_gap_days=max_gap_days,
            sort_by_sequence=True if sort_by_sequence else None,
            log_level="DEBUG" if verbose else log_level,
        )
    except SentinelVerifyError as e:
        _emit_error(str(e), fmt, quiet)
        sys.exit(2)

    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # ── Load ──────────────────────────────────────────────────
    try:
        anchors, registry = load_log(root, config)
        report = verify_log(anchors, registry, max_gap_days=config.max_gap_days)
    except SentinelVerifyError as e:
        logger.error("Verification aborted: %s", e)
        _emit_error(str(e), fmt, quiet)
        sys.exit(2)
    except OSError as e:
        _emit_error(f"Cannot read transparency log: {e}", fmt, quiet)
        sys.exit(2)

    exit_code = 0 if report.valid else 1

    # ── Output ────────────────────────────────────────────────
    if quiet:
        sys.exit(exit_code)

    if fmt == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    elif fmt == "compact":
        click.echo(format_report_summary(report))
    else:
        _output_human(report)

    sys.exit(exit_code)
