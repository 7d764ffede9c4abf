from itertools import product

import numpy as np
import pytest

from nonoline.cells import Cell, blank_line, parse_line
from nonoline.errors import MalformedConstraintError, OverConstrainedError, PlacementLimitError
from nonoline.placements import (
    enumerate_placements,
    enumerate_placements_brute,
    min_span,
    placement_pattern,
    validate_constraint,
)


class TestMinSpan:
    def test_empty(self):
        assert min_span([]) == 0

    def test_single(self):
        assert min_span([3]) == 3

    def test_multiple(self):
        assert min_span([2, 1, 3]) == 8


class TestValidateConstraint:
    def test_returns_tuple(self):
        assert validate_constraint([2, 2], 5) == (2, 2)

    def test_numpy_integers(self):
        assert validate_constraint(np.array([1, 2]), 4) == (1, 2)

    @pytest.mark.parametrize("constraint", [[0], [2, 0], [-1], [1, -3]])
    def test_non_positive(self, constraint):
        with pytest.raises(MalformedConstraintError):
            validate_constraint(constraint, 10)

    @pytest.mark.parametrize("constraint", [[1.5], ["2"], [True]])
    def test_non_integer(self, constraint):
        with pytest.raises(MalformedConstraintError):
            validate_constraint(constraint, 10)

    def test_over_constrained(self):
        with pytest.raises(OverConstrainedError) as excinfo:
            validate_constraint([2, 2], 4)
        assert excinfo.value.span == 5
        assert excinfo.value.length == 4

    def test_name_in_message(self):
        with pytest.raises(OverConstrainedError, match="row 3"):
            validate_constraint([5], 4, name="row 3")


class TestEnumeratePlacements:
    @pytest.mark.parametrize(
        "constraint, cells, expected",
        [
            ([2], "???", {(0,), (1,)}),
            ([1, 1], "???", {(0, 2)}),
            ([1, 2], "????", {(0, 2)}),
            ([2, 2], "?????", {(0, 3)}),
            ([3], "?????", {(0,), (1,), (2,)}),
            ([2, 3], "???????", {(0, 3), (0, 4), (1, 4)}),
            ([2, 3], "???x???", {(0, 4), (1, 4)}),
            (
                [3, 4],
                "?????_?????",
                {(0, 4), (0, 5), (0, 6), (1, 5), (1, 6), (2, 6)},
            ),
            (
                [2, 2],
                "?????O????",
                {(0, 4), (0, 5), (1, 4), (1, 5), (2, 5), (4, 7), (4, 8), (5, 8)},
            ),
            (
                [3, 3],
                "?????_x????",
                {(0, 6), (0, 7), (1, 6), (1, 7), (2, 6), (2, 7)},
            ),
        ],
    )
    def test_scenarios(self, constraint, cells, expected):
        assert enumerate_placements(constraint, parse_line(cells)) == expected

    def test_empty_constraint_on_blank_line(self):
        assert enumerate_placements([], blank_line(4)) == {()}

    def test_empty_constraint_with_painted_cell(self):
        assert enumerate_placements([], parse_line("?O??")) == set()

    def test_empty_line_empty_constraint(self):
        assert enumerate_placements([], ()) == {()}

    def test_zero_slack_has_one_placement(self):
        assert enumerate_placements([3, 1, 2], blank_line(8)) == {(0, 4, 6)}

    def test_stray_painted_cell_outside_runs(self):
        # 一段长 2 的黑块盖不住相隔的几个 O
        assert enumerate_placements([2], parse_line("OO??O")) == set()

    def test_crossed_cells_block_runs(self):
        assert enumerate_placements([2], parse_line("?X?X?")) == set()

    def test_painted_neighbour_blocks_start(self):
        assert enumerate_placements([1], parse_line("O?")) == {(0,)}

    def test_line_is_not_modified(self):
        line = [Cell.UNDETERMINED] * 5
        enumerate_placements([2], line)
        assert line == [Cell.UNDETERMINED] * 5

    def test_malformed_constraint(self):
        with pytest.raises(MalformedConstraintError):
            enumerate_placements([0], blank_line(5))

    def test_over_constrained(self):
        with pytest.raises(OverConstrainedError):
            enumerate_placements([3, 3], blank_line(6))

    def test_placement_limit(self):
        with pytest.raises(PlacementLimitError) as excinfo:
            enumerate_placements([1, 1, 1], blank_line(20), max_placements=10)
        assert excinfo.value.limit == 10

    def test_no_limit(self):
        # 20 格中放 3 个 1：slack 为 15，共 C(18, 3) 种
        assert len(enumerate_placements([1, 1, 1], blank_line(20), max_placements=None)) == 816

    def test_logger_receives_messages(self):
        messages = []
        enumerate_placements([2], blank_line(3), logger=messages.append)
        assert messages[0] == "enumerate [2] on 3 cells"
        assert messages[-1] == "found 2 placements"


class TestBruteForce:
    def test_scenario(self):
        assert enumerate_placements_brute([2, 3], parse_line("???x???")) == {(0, 4), (1, 4)}

    def test_empty_constraint(self):
        assert enumerate_placements_brute([], blank_line(3)) == {()}

    def test_matches_backtracking_on_all_small_lines(self, constraints_for):
        symbols = (Cell.PAINTED, Cell.CROSSED, Cell.UNDETERMINED)
        for length in range(0, 7):
            for line in product(symbols, repeat=length):
                for constraint in constraints_for(length):
                    assert enumerate_placements(constraint, line) == enumerate_placements_brute(
                        constraint, line
                    ), (constraint, line)

    def test_matches_backtracking_on_longer_blank_lines(self, constraints_for):
        for constraint in constraints_for(10):
            line = blank_line(10)
            assert enumerate_placements(constraint, line) == enumerate_placements_brute(constraint, line)

    def test_zero_slack_boundary(self, constraints_for):
        for length in range(1, 9):
            for constraint in constraints_for(length):
                if constraint and min_span(constraint) == length:
                    assert len(enumerate_placements(constraint, blank_line(length))) == 1


class TestPlacementPattern:
    def test_pattern(self):
        assert placement_pattern([2, 1], (1, 4), 6) == parse_line("XOOXOX")

    def test_empty(self):
        assert placement_pattern([], (), 3) == parse_line("XXX")

    def test_arity_mismatch(self):
        with pytest.raises(ValueError):
            placement_pattern([2, 1], (1,), 6)

    def test_out_of_line(self):
        with pytest.raises(ValueError):
            placement_pattern([2], (5,), 6)
