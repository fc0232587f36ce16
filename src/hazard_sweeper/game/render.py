"""
Text rendering of boards.

Both renderers take rows of one-character symbols and never mutate anything.
"""
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .cell import UNKNOWN_SYMBOL


EXPOSED_SYMBOL = "t"


def format_board(rows: Sequence[Sequence[str]]) -> str:
    """
    Format a board the way the game prints it: column indexes, a separator
    line, then each row shifted right by its distance from the bottom.

    Args:
        rows: Symbol rows, top row first.

    Returns:
        Multi-line string, with a blank line before and after.
    """
    size = len(rows)
    width = len(rows[0]) if rows else 0
    lines = [""]

    header = " " * (size + 5)
    for column in range(width):
        header += str(column)
        if column < 10:
            header += " "
    lines.append(header)
    lines.append(" " * (size + 3) + " -" * width)

    for row_index, row in enumerate(rows):
        line = " " * (size - 1 - row_index)
        if row_index < 10:
            line += " "
        line += f"{row_index}/ "
        line += "".join(f"{symbol} " for symbol in row)
        lines.append(line)

    lines.append("")
    return "\n".join(lines)


def render_ansi(rows: Iterable[Sequence[str]]) -> str:
    """Render symbol rows as a compact grid ('.' for unknown cells)."""
    lines = []
    for row in rows:
        row_str = ""
        for symbol in row:
            row_str += "." if symbol == UNKNOWN_SYMBOL else symbol
            row_str += " "
        lines.append(row_str.rstrip())
    return "\n".join(lines)


def mark_exposed(
    rows: Sequence[Sequence[str]],
    exposed: Optional[Set[Tuple[int, int]]] = None,
) -> List[List[str]]:
    """Copy symbol rows, replacing hazards the agent walked into with 't'."""
    marked = [list(row) for row in rows]
    for x, y in exposed or ():
        marked[y][x] = EXPOSED_SYMBOL
    return marked
