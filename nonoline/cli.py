from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .cells import format_line, parse_line
from .config import DEFAULT_PUZZLE_SIZE, SOLVER_CONFIG
from .errors import (
    ConstraintError,
    InputAborted,
    InputError,
    NonoError,
    ParseError,
)
from .puzzle import load_puzzle, parse_clue, read_puzzle, save_puzzle


def _logger(args):
    if not args.verbose:
        return None
    return lambda message: print(f"[nonoline] {message}")


def cmd_line(args) -> int:
    from .reducer import solve_line

    runs = parse_clue(args.runs)
    line = parse_line(args.cells)
    result = solve_line(runs, line, args.max_placements, _logger(args))

    print(f"placements: {len(result.placements)}")
    if args.show_placements:
        for placement in sorted(result.placements):
            print(f"  {list(placement)}")
    if result.is_contradictory:
        print("no placement fits: the line contradicts its constraint")
        return 0
    forced = " ".join(f"{i}={v}" for i, v in sorted(result.forced))
    print(f"forced: {forced or '-'}")
    print(f"line:    {format_line(result.line)}")
    print(f"updated: {format_line(result.updated)}")
    return 0


def cmd_puzzle(args) -> int:
    puzzle = read_puzzle(args.size)
    puzzle.validate()
    if args.out:
        save_puzzle(puzzle, args.out)
        print(f"saved to {args.out}")
    else:
        print(f"rows: {puzzle.rows}")
        print(f"cols: {puzzle.cols}")
    return 0


def cmd_report(args) -> int:
    from .report import line_report, summarize_report

    puzzle = load_puzzle(args.puzzle)
    df = line_report(puzzle, max_placements=args.max_placements)
    print(df.to_string(index=False))
    summary = summarize_report(df)
    print(
        f"\n{summary['lines']} lines, {summary['lines_with_deductions']} with deductions, "
        f"{summary['forced_cells']} forced cells, {summary['contradictory_lines']} contradictory"
    )
    if args.csv:
        df.to_csv(args.csv, index=False)
        print(f"saved to {args.csv}")
    return 0


def cmd_compare(args) -> int:
    from .report import compare_enumerators

    df = compare_enumerators(parse_clue(args.runs), parse_line(args.cells))
    print(df.to_string(index=False))
    return 0 if df["Agrees"].all() else 1


def cmd_plot(args) -> int:
    from .visualize import save_line_placements

    save_line_placements(parse_clue(args.runs), parse_line(args.cells), args.out)
    print(f"saved to {args.out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nonoline",
        description="Line solver for nonogram puzzles.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="print progress messages")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("line", help="deduce the forced cells of one line")
    p.add_argument("runs", help='run lengths, e.g. "2 1 3" ("0" for an empty line)')
    p.add_argument("cells", help="current cells: O painted, X crossed, ? undetermined")
    p.add_argument("--max-placements", type=int, default=SOLVER_CONFIG['max_placements'])
    p.add_argument("--show-placements", action="store_true")
    p.set_defaults(func=cmd_line)

    p = sub.add_parser("puzzle", help="enter row and column clues interactively")
    p.add_argument("--size", type=int, default=DEFAULT_PUZZLE_SIZE)
    p.add_argument("--out", help="save the puzzle as JSON")
    p.set_defaults(func=cmd_puzzle)

    p = sub.add_parser("report", help="single-line deductions for every line of a puzzle")
    p.add_argument("puzzle", help="puzzle JSON file")
    p.add_argument("--csv", help="save the report as CSV")
    p.add_argument("--max-placements", type=int, default=SOLVER_CONFIG['max_placements'])
    p.set_defaults(func=cmd_report)

    p = sub.add_parser("compare", help="compare the placement enumerators")
    p.add_argument("runs")
    p.add_argument("cells")
    p.set_defaults(func=cmd_compare)

    p = sub.add_parser("plot", help="draw the placements of one line")
    p.add_argument("runs")
    p.add_argument("cells")
    p.add_argument("--out", required=True)
    p.set_defaults(func=cmd_plot)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (ConstraintError, ParseError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except (InputAborted, InputError) as e:
        print(f"stopped: {e}", file=sys.stderr)
        return 1
    except NonoError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
