from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

from .cells import Cell, Line
from .config import DEFAULT_PUZZLE_SIZE, QUIT_WORDS
from .errors import InputAborted, InputError, ParseError
from .placements import validate_constraint

Clue = List[int]


def parse_clue(text: str) -> Clue:
    """
    把 "3 1 2" 这样的输入解析成 [3, 1, 2]。
    单独的 0（或全部是 0）表示这一行没有黑块。
    """
    values = []
    for token in text.split():
        try:
            value = int(token)
        except ValueError:
            raise ParseError(f"not a run length: {token!r}") from None
        if value < 0:
            raise ParseError(f"run length must not be negative: {value}")
        values.append(value)
    if values and all(v == 0 for v in values):
        return []
    if 0 in values:
        raise ParseError("0 is only allowed alone, to mark an empty line")
    return values


def read_clue(
    i: int,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> Clue:
    """反复提示 "No. i: " 直到读到合法的一行提示数字。"""
    while True:
        try:
            text = input_fn(f"No. {i}: ")
        except EOFError:
            raise InputError(f"input ended while reading clue No. {i}") from None
        text = text.strip()
        if not text:
            continue
        if text.lower() in QUIT_WORDS:
            raise InputAborted(f"aborted at clue No. {i}")
        try:
            return parse_clue(text)
        except ParseError as e:
            output_fn(f"Invalid clue: {e}")


@dataclass
class Puzzle:
    rows: List[Clue] = field(default_factory=list)
    cols: List[Clue] = field(default_factory=list)
    size: int = DEFAULT_PUZZLE_SIZE

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.cols)

    def make_table(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        """交互式读入 size 行提示和 size 列提示。"""
        output_fn("Please input rows")
        for i in range(1, self.size + 1):
            self.rows.append(read_clue(i, input_fn, output_fn))
        output_fn("Please input columns")
        for i in range(1, self.size + 1):
            self.cols.append(read_clue(i, input_fn, output_fn))

    def validate(self) -> None:
        """每行提示必须放得进宽度，每列提示必须放得进高度。"""
        for i, clue in enumerate(self.rows):
            validate_constraint(clue, self.width, name=f"row {i}")
        for j, clue in enumerate(self.cols):
            validate_constraint(clue, self.height, name=f"column {j}")

    def row_line(self, i: int, grid: Sequence[Line]) -> tuple:
        return tuple(grid[i])

    def col_line(self, j: int, grid: Sequence[Line]) -> tuple:
        return tuple(row[j] for row in grid)

    def blank_grid(self) -> List[List[Cell]]:
        return [[Cell.UNDETERMINED] * self.width for _ in range(self.height)]

    def to_dict(self) -> Dict[str, list]:
        return {
            "row_constraints": [list(c) for c in self.rows],
            "col_constraints": [list(c) for c in self.cols],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, list]) -> "Puzzle":
        rows = data.get("row_hints", data.get("row_constraints"))
        cols = data.get("col_hints", data.get("col_constraints"))
        if rows is None or cols is None:
            raise ParseError("puzzle needs row_constraints and col_constraints")
        rows = [list(r) for r in rows]
        cols = [list(c) for c in cols]
        return cls(rows=rows, cols=cols, size=max(len(rows), len(cols)))


def read_puzzle(
    size: int = DEFAULT_PUZZLE_SIZE,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> Puzzle:
    puzzle = Puzzle(size=size)
    puzzle.make_table(input_fn, output_fn)
    return puzzle


def load_puzzle(path: str) -> Puzzle:
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except OSError as e:
        raise ParseError(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"{path} is not valid JSON: {e}") from e
    return Puzzle.from_dict(data)


def save_puzzle(puzzle: Puzzle, path: str) -> None:
    with open(path, 'w') as f:
        json.dump(puzzle.to_dict(), f)
