"""Sequence continuity tests."""

import pytest

from sentinel_verify import ErrorCode, check_sequence


def _outcomes(results):
    return {r.label: r.passed for r in results}


class TestCheckSequence:

    def test_contiguous_run_passes_all_three(self, signer):
        results = check_sequence(signer.chain([1, 2, 3, 4]))

        assert _outcomes(results) == {
            "No duplicate sequences": True,
            "No gaps in sequence": True,
            "Starts at sequence 1": True,
        }

    def test_gap_fails_gap_check_only(self, signer):
        results = check_sequence(signer.chain([1, 2, 4]))

        assert _outcomes(results) == {
            "No duplicate sequences": True,
            "No gaps in sequence": False,
            "Starts at sequence 1": True,
        }
        gap = next(r for r in results if not r.passed)
        assert gap.code is ErrorCode.SEQUENCE_GAP
        assert gap.details["gaps"] == [{"expected": 3, "actual": 4}]

    def test_duplicate_fails_duplicate_check(self, signer):
        results = check_sequence(signer.chain([1, 2, 2, 3]))
        outcomes = _outcomes(results)

        assert outcomes["No duplicate sequences"] is False
        assert outcomes["Starts at sequence 1"] is True
        dup = results[0]
        assert dup.code is ErrorCode.DUPLICATE_SEQUENCE
        assert dup.details["duplicates"] == [2]

    def test_not_starting_at_one_fails_start_check(self, signer):
        results = check_sequence(signer.chain([2, 3, 4]))

        assert _outcomes(results) == {
            "No duplicate sequences": True,
            "No gaps in sequence": True,
            "Starts at sequence 1": False,
        }
        assert results[2].code is ErrorCode.SEQUENCE_START
        assert results[2].details["first"] == 2

    def test_always_three_independent_checks(self, signer):
        results = check_sequence(signer.chain([3, 3, 7]))

        assert len(results) == 3
        assert [r.passed for r in results] == [False, False, False]

    def test_load_order_is_not_resorted(self, signer):
        """Out-of-order input is reported, not silently fixed."""
        results = check_sequence(signer.chain([1, 3, 2]))
        assert _outcomes(results)["No gaps in sequence"] is False

    def test_single_anchor(self, signer):
        assert all(r.passed for r in check_sequence(signer.chain([1])))

    def test_empty_fails_start_check(self):
        results = check_sequence([])
        assert [r.passed for r in results] == [True, True, False]

    @pytest.mark.parametrize("sequences", [[0, 1, 2], [-1, 0, 1]])
    def test_non_positive_start_fails(self, signer, sequences):
        results = check_sequence(signer.chain(sequences))
        assert _outcomes(results)["Starts at sequence 1"] is False
