from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .cells import Cell, Line, format_line
from .reducer import pattern_matrix, solve_line


def plot_line_placements(constraint: Sequence[int], line: Line, ax=None, title: Optional[str] = None):
    """
    用 matplotlib 画出单行的全部摆放：
      每种摆放占一行，黑 = 涂黑，白 = 留白（'binary' colormap）；
      最底下一行是推导结果：黑 = 确定涂黑，白 = 确定留白，灰 = 仍未确定。
    返回所用的 Axes。
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(max(4, len(line) * 0.4), 4))

    result = solve_line(constraint, line)
    if title is None:
        title = f"{list(constraint)}  {format_line(line)}"

    if result.is_contradictory:
        ax.set_title(f"{title}\nno placement", fontsize=10)
        ax.axis('off')
        return ax

    patterns = pattern_matrix(constraint, result.placements, len(line)).astype(float)
    summary = np.array([
        1.0 if c == Cell.PAINTED else 0.0 if c == Cell.CROSSED else 0.5
        for c in result.updated
    ])
    image = np.vstack([patterns, summary[np.newaxis, :]])

    ax.imshow(image, cmap='binary', interpolation='nearest', vmin=0.0, vmax=1.0, aspect='auto')
    # 分隔摆放和推导结果
    ax.axhline(len(patterns) - 0.5, color='red', linewidth=2)
    ax.set_title(f"{title}\n{len(patterns)} placements, {len(result.forced)} forced", fontsize=10)
    ax.set_xticks(range(len(line)))
    ax.set_yticks([])
    return ax


def save_line_placements(constraint: Sequence[int], line: Line, out_path: str) -> None:
    fig, ax = plt.subplots(figsize=(max(4, len(line) * 0.4), 4))
    plot_line_placements(constraint, line, ax=ax)
    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
