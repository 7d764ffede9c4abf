from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Set, Tuple

import numpy as np

from .cells import Cell, Line
from .config import SOLVER_CONFIG
from .errors import LineConflictError
from .placements import Logger, Placement, enumerate_placements

Update = Tuple[int, Cell]


def pattern_matrix(
    constraint: Sequence[int], placements: Iterable[Placement], length: int
) -> np.ndarray:
    """
    每种摆放展开成一行 0/1，堆成矩阵：
      matrix[p, i] == True 表示第 p 种摆放（排序后）把格子 i 涂黑。
    """
    ordered = sorted(placements)
    matrix = np.zeros((len(ordered), length), dtype=bool)
    for p, placement in enumerate(ordered):
        for run, start in zip(constraint, placement):
            matrix[p, start:start + run] = True
    return matrix


def _intersect(
    constraint: Sequence[int], placements: Set[Placement], line: Line
) -> Set[Update]:
    if not placements:
        return set()
    painted = pattern_matrix(constraint, placements, len(line))
    # 任意一种摆放涂黑了该格 => 不可能确定为 Crossed，反之亦然
    forced_painted = painted.all(axis=0)
    forced_crossed = ~painted.any(axis=0)

    updates: Set[Update] = set()
    for i, current in enumerate(line):
        # 已经确定的格子不再报告
        if current != Cell.UNDETERMINED:
            continue
        if forced_painted[i]:
            updates.add((i, Cell.PAINTED))
        elif forced_crossed[i]:
            updates.add((i, Cell.CROSSED))
    return updates


def resolve_forced_cells(
    constraint: Sequence[int],
    line: Line,
    max_placements: Optional[int] = SOLVER_CONFIG['max_placements'],
    logger: Logger = None,
) -> Set[Update]:
    """
    返回所有可以确定的格子 (下标, 值)。

    某格在所有摆放中都被涂黑 => 确定为 Painted；
    在所有摆放中都没被涂黑 => 确定为 Crossed。
    只报告当前仍为 Undetermined 的格子；没有任何摆放时（盘面矛盾）返回空集合。
    """
    placements = enumerate_placements(constraint, line, max_placements, logger)
    if not placements and logger:
        logger("no placement fits, nothing can be deduced")
    return _intersect(constraint, placements, line)


def apply_updates(line: Line, updates: Iterable[Update]) -> Tuple[Cell, ...]:
    """把推导结果写入一份新的行，原来的 line 不变。"""
    cells = list(line)
    for index, value in updates:
        if not 0 <= index < len(cells):
            raise IndexError(f"update index {index} outside a line of {len(cells)}")
        current = cells[index]
        if current != Cell.UNDETERMINED and current != value:
            raise LineConflictError(index, current, value)
        cells[index] = value
    return tuple(cells)


@dataclass
class LineResolution:
    constraint: Tuple[int, ...]
    line: Tuple[Cell, ...]
    placements: Set[Placement]
    forced: Set[Update]
    updated: Tuple[Cell, ...]

    @property
    def is_contradictory(self) -> bool:
        return not self.placements

    @property
    def is_complete(self) -> bool:
        return Cell.UNDETERMINED not in self.updated


def solve_line(
    constraint: Sequence[int],
    line: Line,
    max_placements: Optional[int] = SOLVER_CONFIG['max_placements'],
    logger: Logger = None,
) -> LineResolution:
    """一次性给出摆放集合、可确定的格子以及更新后的行。"""
    cells = tuple(line)
    placements = enumerate_placements(constraint, cells, max_placements, logger)
    if not placements and logger:
        logger("no placement fits, nothing can be deduced")
    forced = _intersect(constraint, placements, cells)
    return LineResolution(
        constraint=tuple(constraint),
        line=cells,
        placements=placements,
        forced=forced,
        updated=apply_updates(cells, forced),
    )
