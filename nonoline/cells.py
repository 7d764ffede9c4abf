from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

from .config import SYMBOLS
from .errors import ParseError


class Cell(Enum):
    """
    一格的三种状态：
      PAINTED      必须涂黑，显示为 O
      CROSSED      必须留白，显示为 X
      UNDETERMINED 尚未确定，显示为 ?
    """
    PAINTED = SYMBOLS['painted']
    CROSSED = SYMBOLS['crossed']
    UNDETERMINED = SYMBOLS['undetermined']

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_char(cls, ch: str) -> Optional["Cell"]:
        """识别单个字符（大小写不敏感），无法识别时返回 None。"""
        if ch in ('C', 'x', 'X'):
            return cls.CROSSED
        if ch in ('P', 'o', 'O', '0'):
            return cls.PAINTED
        if ch == '?':
            return cls.UNDETERMINED
        return None


# 一行（或一列）的当前状态，内部统一使用 tuple，核心代码从不修改它
Line = Sequence[Cell]


def parse_line(text: str) -> Tuple[Cell, ...]:
    """宽松解析：无法识别的字符（例如作分隔用的 '_' 和空格）直接跳过。"""
    cells = (Cell.from_char(ch) for ch in text)
    return tuple(c for c in cells if c is not None)


def parse_line_strict(text: str) -> Tuple[Cell, ...]:
    cells = []
    for pos, ch in enumerate(text):
        cell = Cell.from_char(ch)
        if cell is None:
            raise ParseError(f"unknown cell symbol {ch!r} at position {pos}")
        cells.append(cell)
    return tuple(cells)


def format_line(cells: Iterable[Cell]) -> str:
    return "".join(str(c) for c in cells)


def blank_line(length: int) -> Tuple[Cell, ...]:
    if length < 0:
        raise ValueError(f"line length must be non-negative, got {length}")
    return (Cell.UNDETERMINED,) * length
