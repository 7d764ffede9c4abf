from __future__ import annotations

import numbers
from itertools import accumulate, combinations
from typing import Callable, List, Optional, Sequence, Set, Tuple

from .cells import Cell, Line
from .config import SOLVER_CONFIG
from .errors import MalformedConstraintError, OverConstrainedError, PlacementLimitError

Placement = Tuple[int, ...]
Logger = Optional[Callable[[str], None]]


def min_span(constraint: Sequence[int]) -> int:
    """所有黑块按最紧凑方式排列（相邻段只隔 1 格）时占用的格数。"""
    if not constraint:
        return 0
    return sum(constraint) + len(constraint) - 1


def validate_constraint(
    constraint: Sequence[int], length: int, name: Optional[str] = None
) -> Tuple[int, ...]:
    prefix = f"{name}: " if name else ""
    runs = []
    for i, run in enumerate(constraint):
        if isinstance(run, bool) or not isinstance(run, numbers.Integral):
            raise MalformedConstraintError(
                f"{prefix}run #{i} must be an integer, got {run!r}"
            )
        if run <= 0:
            raise MalformedConstraintError(
                f"{prefix}run #{i} must be positive, got {run}"
            )
        runs.append(int(run))
    span = min_span(runs)
    if span > length:
        raise OverConstrainedError(span, length, name)
    return tuple(runs)


def _prefix_counts(cells: Sequence[Cell], target: Cell) -> List[int]:
    # counts[i] = cells[:i] 中 target 的个数
    return [0] + list(accumulate(1 if c == target else 0 for c in cells))


def enumerate_placements(
    constraint: Sequence[int],
    line: Line,
    max_placements: Optional[int] = SOLVER_CONFIG['max_placements'],
    logger: Logger = None,
) -> Set[Placement]:
    """
    找出所有与既有盘面相容的黑块摆放方式。

    返回值中每个元素是各段黑块起始下标组成的 tuple（按约束从左到右的顺序）。
    找不到任何摆放时返回空集合，这不是错误：说明当前盘面与约束矛盾。

    从最后一段开始向左逐段摆放。待摆放的范围（窗口）始终是整行的一个前缀，
    所以窗口内的相对下标就是整行的绝对下标。对长度为 L 的段尝试每个起点
    begin，以下情况跳过：
      - 段超出窗口
      - 段右侧（到窗口末尾为止）已有 Painted，它将不属于任何段
      - 段覆盖的格子中有 Crossed
      - 段左邻格已是 Painted（左邻格必须留白）
    摆放成功后，对 [0, begin-1) 递归摆放剩下的段（begin == 0 时窗口为空），
    begin-1 这一格作为分隔格保留。所有段摆完后，剩余窗口内不能再有 Painted。
    """
    runs = validate_constraint(constraint, len(line))
    cells = tuple(line)
    painted = _prefix_counts(cells, Cell.PAINTED)
    crossed = _prefix_counts(cells, Cell.CROSSED)
    # spans[k] = 前 k 段的最小跨度，用来跳过左侧放不下的起点
    spans = [min_span(runs[:k]) for k in range(len(runs) + 1)]

    if logger:
        logger(f"enumerate {list(runs)} on {len(cells)} cells")

    results: Set[Placement] = set()
    # 显式栈：(窗口末尾, 剩余段数, 已摆放起点（从右到左）)
    stack: List[Tuple[int, int, Placement]] = [(len(cells), len(runs), ())]
    while stack:
        window_end, remaining, positions = stack.pop()

        if remaining == 0:
            if painted[window_end] > 0:
                continue
            results.add(positions[::-1])
            if max_placements is not None and len(results) > max_placements:
                raise PlacementLimitError(max_placements)
            continue

        run = runs[remaining - 1]
        lowest = spans[remaining - 1] + 1 if remaining > 1 else 0
        for begin in range(lowest, window_end - run + 1):
            end = begin + run
            if painted[window_end] - painted[end] > 0:
                continue
            if crossed[end] - crossed[begin] > 0:
                continue
            if begin > 0 and cells[begin - 1] == Cell.PAINTED:
                continue
            stack.append((max(begin - 1, 0), remaining - 1, positions + (begin,)))

    if logger:
        logger(f"found {len(results)} placements")
    return results


def placement_pattern(
    constraint: Sequence[int], placement: Sequence[int], length: int
) -> Tuple[Cell, ...]:
    """把一种摆放展开成整行：段内为 Painted，其余为 Crossed。"""
    if len(placement) != len(constraint):
        raise ValueError(
            f"placement has {len(placement)} starts for {len(constraint)} runs"
        )
    pattern = [Cell.CROSSED] * length
    for run, start in zip(constraint, placement):
        if start < 0 or start + run > length:
            raise ValueError(f"run of {run} at {start} leaves a line of {length}")
        for j in range(start, start + run):
            pattern[j] = Cell.PAINTED
    return tuple(pattern)


def _compatible(pattern: Sequence[Cell], line: Line) -> bool:
    for want, have in zip(pattern, line):
        if have == Cell.UNDETERMINED:
            continue
        if want != have:
            return False
    return True


def enumerate_placements_brute(constraint: Sequence[int], line: Line) -> Set[Placement]:
    """
    不剪枝的穷举版本，用来核对 enumerate_placements。

    k 段黑块把整行分成 k+1 个空隙，内部空隙各先占 1 格，剩下的 slack 格
    用“隔板法”分配：从 slack+k 个位置中选 k 个作为各段的位置 c[i]，
    第 i 段的起点就是 c[i] + sum(runs[:i])。
    """
    runs = validate_constraint(constraint, len(line))
    slack = len(line) - min_span(runs)
    offsets = [0] + list(accumulate(runs))
    results: Set[Placement] = set()
    for bars in combinations(range(slack + len(runs)), len(runs)):
        placement = tuple(b + offsets[i] for i, b in enumerate(bars))
        if _compatible(placement_pattern(runs, placement, len(line)), line):
            results.add(placement)
    return results
