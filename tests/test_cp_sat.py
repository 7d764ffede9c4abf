from itertools import product

import pytest

from nonoline.cells import Cell, blank_line, parse_line
from nonoline.cp_sat import build_line_cp_model, enumerate_placements_cp
from nonoline.errors import MalformedConstraintError
from nonoline.placements import enumerate_placements


class TestBuildModel:
    def test_one_start_variable_per_candidate(self):
        _, starts = build_line_cp_model((2, 1), blank_line(5))
        assert [sorted(choices) for choices in starts] == [[0, 1, 2, 3], [0, 1, 2, 3, 4]]


class TestEnumeratePlacementsCp:
    @pytest.mark.parametrize(
        "constraint, cells, expected",
        [
            ([2], "???", {(0,), (1,)}),
            ([1, 1], "???", {(0, 2)}),
            ([2, 3], "???x???", {(0, 4), (1, 4)}),
            (
                [2, 2],
                "?????O????",
                {(0, 4), (0, 5), (1, 4), (1, 5), (2, 5), (4, 7), (4, 8), (5, 8)},
            ),
        ],
    )
    def test_scenarios(self, constraint, cells, expected):
        assert enumerate_placements_cp(constraint, parse_line(cells)) == expected

    def test_empty_constraint(self):
        assert enumerate_placements_cp([], blank_line(3)) == {()}

    def test_infeasible_line(self):
        assert enumerate_placements_cp([2], parse_line("O?O")) == set()

    def test_malformed_constraint(self):
        with pytest.raises(MalformedConstraintError):
            enumerate_placements_cp([0], blank_line(3))

    def test_max_solutions_stops_search(self):
        messages = []
        placements = enumerate_placements_cp(
            [1], blank_line(10), max_solutions=3, logger=messages.append
        )
        assert len(placements) == 3
        assert messages == ["CP-SAT stopped after 3 placements"]

    @pytest.mark.parametrize("constraint", [[1], [2], [1, 1], [1, 2]])
    def test_matches_backtracking(self, constraint):
        symbols = (Cell.PAINTED, Cell.CROSSED, Cell.UNDETERMINED)
        for line in product(symbols, repeat=4):
            assert enumerate_placements_cp(constraint, line) == enumerate_placements(
                constraint, line
            ), line
