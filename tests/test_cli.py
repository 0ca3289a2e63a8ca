"""CLI exit codes and output formats."""

import importlib
import json
import sys

import pytest
from click.testing import CliRunner

from helpers.anchor_factory import write_log

from sentinel_verify.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def valid_log(tmp_path, signer):
    return write_log(tmp_path, [signer.record(s) for s in (1, 2, 3)], [signer.key_record()])


def test_importing_main_module_does_not_run(capsys):
    sys.modules.pop("sentinel_verify.__main__", None)
    module = importlib.import_module("sentinel_verify.__main__")

    assert module.main is main
    assert capsys.readouterr().out == ""


def test_valid_log_exits_zero(runner, valid_log):
    result = runner.invoke(main, [str(valid_log), "--no-color"])

    assert result.exit_code == 0, result.output
    assert "TRANSPARENCY LOG: VALID" in result.output
    assert "[1] Sequential Numbering" in result.output
    assert "Keys: 1 (1 active, 0 retired, 0 revoked)" in result.output


def test_invalid_log_exits_one(runner, tmp_path, signer):
    write_log(tmp_path, [signer.record(s) for s in (1, 3)], [signer.key_record()])
    result = runner.invoke(main, [str(tmp_path), "--no-color"])

    assert result.exit_code == 1
    assert "❌ No gaps in sequence" in result.output
    assert "TRANSPARENCY LOG: INVALID" in result.output


def test_revoked_key_listed_in_lifecycle(runner, tmp_path, signer):
    write_log(
        tmp_path,
        [signer.record(1)],
        [signer.key_record("REVOKED", revoked_at="2026-02-01T00:00:00Z")],
    )
    result = runner.invoke(main, [str(tmp_path), "--no-color"])

    assert result.exit_code == 1
    assert "a1b2c3d4… REVOKED (revoked: 2026-02-01T00:00:00Z)" in result.output


def test_json_format(runner, valid_log):
    result = runner.invoke(main, [str(valid_log), "--format", "json"])
    data = json.loads(result.output)

    assert result.exit_code == 0
    assert data["valid"] is True
    assert data["summary"]["anchors"] == 3
    assert data["errors"] == []


def test_compact_format(runner, valid_log):
    result = runner.invoke(main, [str(valid_log), "--format", "compact"])

    assert result.exit_code == 0
    assert result.output.startswith("VALID | 3 anchors")


def test_quiet_prints_nothing(runner, valid_log):
    result = runner.invoke(main, [str(valid_log), "--quiet"])

    assert result.exit_code == 0
    assert result.output == ""


def test_missing_anchors_exits_two(runner, tmp_path):
    result = runner.invoke(main, [str(tmp_path), "--format", "json"])

    assert result.exit_code == 2
    assert "No anchors directory found" in result.output


def test_malformed_anchor_exits_two(runner, tmp_path, signer):
    write_log(tmp_path, [signer.record(1)], [signer.key_record()])
    (tmp_path / "anchors" / "anchor-000002.json").write_text("[]")
    result = runner.invoke(main, [str(tmp_path), "--no-color"])

    assert result.exit_code == 2


def test_bad_config_exits_two(runner, valid_log):
    result = runner.invoke(main, [str(valid_log), "--max-gap-days", "-1"])
    assert result.exit_code == 2


def test_sort_by_sequence_flag(runner, tmp_path, signer):
    write_log(tmp_path, [signer.record(s) for s in (2, 1, 3)], [signer.key_record()])

    assert runner.invoke(main, [str(tmp_path), "--quiet"]).exit_code == 1
    assert runner.invoke(main, [str(tmp_path), "--quiet", "--sort-by-sequence"]).exit_code == 0


def test_max_gap_days_from_env(runner, tmp_path, signer):
    write_log(
        tmp_path,
        [
            signer.record(1, timestamp="2026-01-01T00:00:00.000Z"),
            signer.record(2, timestamp="2026-01-11T00:00:00.000Z"),
        ],
        [signer.key_record()],
    )
    assert runner.invoke(main, [str(tmp_path), "--quiet"]).exit_code == 1
    result = runner.invoke(main, [str(tmp_path), "--quiet"], env={"SENTINEL_MAX_GAP_DAYS": "14"})
    assert result.exit_code == 0


def test_disclosed_cadence_violation_shown(runner, tmp_path, signer):
    write_log(
        tmp_path,
        [
            signer.record(1, timestamp="2026-01-01T00:00:00.000Z"),
            signer.record(2, timestamp="2026-01-11T00:00:00.000Z", cadence_violation=True),
        ],
        [signer.key_record()],
    )
    result = runner.invoke(main, [str(tmp_path), "--no-color"])

    assert result.exit_code == 0
    assert "cadence violation flagged" in result.output
    assert "Cadence violations: 1" in result.output
