from __future__ import annotations

from typing import Dict, List, Sequence, Set, Tuple

from ortools.sat.python import cp_model

from .cells import Cell, Line
from .config import SOLVER_CONFIG
from .placements import Logger, Placement, validate_constraint


class LinePlacementCollector(cp_model.CpSolverSolutionCallback):
    """
    遍历 CP-SAT 的所有解，把每个解中各段的起点记录下来。
    解数达到 max_solutions 时调用 stop_search() 停止枚举。
    """
    def __init__(self, starts, max_solutions):
        cp_model.CpSolverSolutionCallback.__init__(self)
        self._starts = starts
        self._max_solutions = max_solutions
        self._placements: List[Placement] = []

    def on_solution_callback(self):
        if self.limit_reached:
            return
        placement = []
        for choices in self._starts:
            for start, var in choices.items():
                if self.value(var):
                    placement.append(start)
                    break
        self._placements.append(tuple(placement))
        if len(self._placements) >= self._max_solutions:
            self.stop_search()

    def placements(self) -> List[Placement]:
        return self._placements

    @property
    def limit_reached(self) -> bool:
        return len(self._placements) >= self._max_solutions


def build_line_cp_model(
    runs: Sequence[int], line: Line
) -> Tuple[cp_model.CpModel, List[Dict[int, cp_model.IntVar]]]:
    """
    用 CP-SAT 为单行建模。
    starts[b][s] 为布尔变量，表示第 b 段黑块是否从下标 s 开始。
    """
    n = len(line)
    model = cp_model.CpModel()

    # 每个格子是否涂黑
    x = [model.new_bool_var(f"x_{j}") for j in range(n)]

    starts: List[Dict[int, cp_model.IntVar]] = []
    for b, length_b in enumerate(runs):
        choices = {s: model.new_bool_var(f"B_{b}_{s}") for s in range(n - length_b + 1)}
        # 每段恰好选一个起点
        model.add(sum(choices.values()) == 1)
        starts.append(choices)

    # 相邻段之间至少隔 1 格：若 t < s + length_b + 1，则二者不能同时为真
    for b in range(len(runs) - 1):
        length_b = runs[b]
        for s, var_s in starts[b].items():
            for t, var_t in starts[b + 1].items():
                if t < s + length_b + 1:
                    model.add(var_s + var_t <= 1)

    # 格子涂黑当且仅当被某段覆盖
    for j in range(n):
        cover = [
            var
            for length_b, choices in zip(runs, starts)
            for s, var in choices.items()
            if s <= j < s + length_b
        ]
        if cover:
            model.add(x[j] == sum(cover))
        else:
            model.add(x[j] == 0)

    # 既有盘面
    for j, cell in enumerate(line):
        if cell == Cell.PAINTED:
            model.add(x[j] == 1)
        elif cell == Cell.CROSSED:
            model.add(x[j] == 0)

    return model, starts


def enumerate_placements_cp(
    constraint: Sequence[int],
    line: Line,
    max_solutions: int = SOLVER_CONFIG['cp_max_solutions'],
    time_limit: float = SOLVER_CONFIG['cp_time_limit'],
    logger: Logger = None,
) -> Set[Placement]:
    """用 CP-SAT 枚举单行的全部摆放，结果形式与 enumerate_placements 相同。"""
    runs = validate_constraint(constraint, len(line))
    model, starts = build_line_cp_model(runs, line)

    solver = cp_model.CpSolver()
    solver.parameters.enumerate_all_solutions = True
    solver.parameters.max_time_in_seconds = time_limit
    collector = LinePlacementCollector(starts, max_solutions)
    status = solver.solve(model, collector)

    if status not in (cp_model.FEASIBLE, cp_model.OPTIMAL):
        if logger:
            logger(f"CP-SAT found no placement ({solver.status_name(status)})")
        return set()
    if logger:
        if collector.limit_reached:
            logger(f"CP-SAT stopped after {max_solutions} placements")
        elif status == cp_model.FEASIBLE:
            logger("CP-SAT hit the time limit, placement set may be incomplete")
    return set(collector.placements())
