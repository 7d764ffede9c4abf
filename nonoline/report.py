from __future__ import annotations

import time
from typing import Dict, List, Optional, Sequence

import pandas as pd

from .cells import Cell, Line
from .config import SOLVER_CONFIG
from .cp_sat import enumerate_placements_cp
from .errors import ParseError
from .placements import enumerate_placements, enumerate_placements_brute
from .puzzle import Puzzle
from .reducer import solve_line


def line_report(
    puzzle: Puzzle,
    grid: Optional[Sequence[Line]] = None,
    max_placements: Optional[int] = SOLVER_CONFIG['max_placements'],
) -> pd.DataFrame:
    """
    对谜题的每一行、每一列单独做一次单行推导，统计摆放数和可确定的格子数。
    grid 为当前盘面（默认全部未确定），本函数不会修改它。
    """
    puzzle.validate()
    if grid is None:
        grid = puzzle.blank_grid()
    if len(grid) != puzzle.height:
        raise ParseError(f"grid has {len(grid)} rows, puzzle has {puzzle.height}")
    for i, row in enumerate(grid):
        if len(row) != puzzle.width:
            raise ParseError(f"grid row {i} has {len(row)} cells, puzzle width is {puzzle.width}")

    lines = [("row", i, clue, puzzle.row_line(i, grid)) for i, clue in enumerate(puzzle.rows)]
    lines += [("col", j, clue, puzzle.col_line(j, grid)) for j, clue in enumerate(puzzle.cols)]

    records = []
    for kind, index, clue, line in lines:
        start_time = time.time()
        result = solve_line(clue, line, max_placements)
        solving_time = time.time() - start_time
        painted = sum(1 for _, v in result.forced if v == Cell.PAINTED)
        records.append({
            "kind": kind,
            "index": index,
            "constraint": list(clue),
            "num_placements": len(result.placements),
            "num_forced": len(result.forced),
            "num_painted": painted,
            "num_crossed": len(result.forced) - painted,
            "contradictory": result.is_contradictory,
            "solving_time_sec": solving_time,
        })
    return pd.DataFrame(records)


def summarize_report(df: pd.DataFrame) -> Dict[str, float]:
    if df.empty:
        return {
            "lines": 0,
            "contradictory_lines": 0,
            "lines_with_deductions": 0,
            "forced_cells": 0,
            "mean_solving_time_sec": 0.0,
        }
    return {
        "lines": int(len(df)),
        "contradictory_lines": int(df["contradictory"].sum()),
        "lines_with_deductions": int((df["num_forced"] > 0).sum()),
        "forced_cells": int(df["num_forced"].sum()),
        "mean_solving_time_sec": float(df["solving_time_sec"].mean()),
    }


# 统一接口：每个枚举器都接受 (constraint, line) 并返回摆放集合
ENUMERATORS: List[tuple] = [
    ("Backtracking", enumerate_placements),
    ("Brute Force", enumerate_placements_brute),
    ("CP-SAT", enumerate_placements_cp),
]


def compare_enumerators(
    constraint: Sequence[int],
    line: Line,
    enumerators: Optional[List[tuple]] = None,
) -> pd.DataFrame:
    """比较几种枚举器的耗时，并检查它们的结果是否与回溯法一致。"""
    enumerators = enumerators or ENUMERATORS
    reference = enumerate_placements(constraint, line)
    results = []
    for name, enumerate_fn in enumerators:
        start_time = time.time()
        placements = enumerate_fn(constraint, line)
        solving_time = time.time() - start_time
        results.append({
            "Enumerator": name,
            "Solving Time (s)": solving_time,
            "Number of Placements": len(placements),
            "Agrees": placements == reference,
        })
    return pd.DataFrame(results)
