"""Nonogram line solver: placement enumeration and forced-cell deduction."""

from .cells import Cell, blank_line, format_line, parse_line, parse_line_strict
from .errors import (
    ConstraintError,
    InputAborted,
    InputError,
    LineConflictError,
    MalformedConstraintError,
    NonoError,
    OverConstrainedError,
    ParseError,
    PlacementLimitError,
)
from .placements import (
    enumerate_placements,
    enumerate_placements_brute,
    min_span,
    placement_pattern,
    validate_constraint,
)
from .reducer import (
    LineResolution,
    apply_updates,
    pattern_matrix,
    resolve_forced_cells,
    solve_line,
)

__version__ = "0.1.0"
