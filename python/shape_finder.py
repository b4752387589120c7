#!/usr/bin/env python3
"""
Find the distinct shapes in a toroidal binary grid.

Usage:
    python shape_finder.py GRID_FILE [options]

Examples:
    python shape_finder.py grid.txt
    python shape_finder.py - < grid.txt
    python shape_finder.py --interactive
    python shape_finder.py grid.txt --color --margin 2 --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from ascii_render import RenderStyle
from grid_parser import parse_grid
from grid_prompt import GridPrompter, UserTerminated
from shapes import find_shapes

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="torus-shapes",
        description="Print one exemplar of every distinct shape in a wrapping 0/1 grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Grid files hold one row per line, as "0 1 1" or "011"; rows may also be
separated by |. Blank lines and lines starting with # are ignored.
        """,
    )
    parser.add_argument("grid_file", nargs="?", default=None,
                        help="Grid file to read ('-' for stdin)")
    parser.add_argument("--interactive", "-i", action="store_true", default=False,
                        help="Enter the grid through a console dialogue")
    parser.add_argument("--color", action="store_true", default=False,
                        help="Color each shape block")
    parser.add_argument("--margin", type=int, default=4,
                        help="Left margin width in spaces (default: 4)")
    parser.add_argument("--verbose", "-v", action="store_true", default=False,
                        help="Log every discovered component")

    args = parser.parse_args(argv)
    if args.grid_file is None and not args.interactive:
        parser.error("a grid file is required unless --interactive is given")
    if args.margin < 0:
        parser.error("--margin must not be negative")
    return args


def read_cells(args: argparse.Namespace, prompter: GridPrompter | None = None) -> list[list[int]]:
    if args.interactive:
        if prompter is None:
            prompter = GridPrompter()
        return prompter.read_grid()
    if args.grid_file == "-":
        return parse_grid(sys.stdin.read())
    return parse_grid(Path(args.grid_file).read_text(encoding="utf-8"))


def main(argv: list[str] | None = None, prompter: GridPrompter | None = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command line arguments (default sys.argv[1:])
        prompter: Dialogue used by --interactive (default reads the terminal)
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    errors = Console(stderr=True, highlight=False)

    try:
        cells = read_cells(args, prompter)
    except (UserTerminated, EOFError) as err:
        errors.print(f"Program exited {str(err) or 'user terminated'!r}", markup=False)
        return 1
    except FileNotFoundError:
        errors.print(f"Error: grid file not found: {args.grid_file}", markup=False)
        return 1
    except OSError as err:
        errors.print(
            f"Error: cannot read grid file {args.grid_file}: {err.strerror}", markup=False
        )
        return 1
    except ValueError as err:
        errors.print(f"Program exited {err}", markup=False)
        return 1

    try:
        search = find_shapes(cells)
    except ValueError as err:
        # InvalidDimensions included
        errors.print(f"search returned error {str(err)!r}", markup=False)
        return 1

    style = RenderStyle(margin=" " * args.margin)
    sys.stdout.write(search.render(style, colorize=args.color))
    logger.info("printed %d shapes", len(search.shapes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
