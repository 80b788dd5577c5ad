"""
Plain-text rendering of shapes and boards.

Both renderers return strings; cli/display.py wraps them in Rich panels and
tests compare them directly.
"""

from __future__ import annotations

from typing import Iterable, Literal

from chessplayground.board import Board
from chessplayground.position import Position

HighlightMarker = Literal["M", "A"]


def _label(n: int) -> str:
    return f"{n:>2}"


def render_offsets(offsets: Iterable[Position], extent: int = 7) -> str:
    """
    Draw offsets on a fixed grid from -extent to +extent on both axes.

    The origin is "X", members are "■", everything else ".". North is up.
    """
    members = {Position(*o) for o in offsets}
    lines = ["   " + " ".join(_label(x) for x in range(-extent, extent + 1))]
    for y in range(extent, -extent - 1, -1):
        cells = []
        for x in range(-extent, extent + 1):
            if x == 0 and y == 0:
                cells.append(" X")
            elif (x, y) in members:
                cells.append(" ■")
            else:
                cells.append(" .")
        lines.append(f"{_label(y)} " + " ".join(cells))
    return "\n".join(lines)


def render_board(
    board: Board,
    highlights: Iterable[Position] = (),
    marker: HighlightMarker = "M",
    selected: Position | None = None,
) -> str:
    """
    Draw the board with y descending. The selected square shows "X",
    highlighted squares show marker, other squares their piece's emoji.
    """
    marked = {Position(*p) for p in highlights}
    header = "   " + "".join(f" {x:>2} " for x in range(board.width))
    lines = [header]
    for y in range(board.height - 1, -1, -1):
        row = []
        for x in range(board.width):
            pos = Position(x, y)
            piece = board.get_piece_at(pos)
            if selected is not None and pos == selected:
                content = "X"
            elif pos in marked:
                content = marker
            elif piece is not None:
                content = piece.emoji
            else:
                content = " "
            row.append(f"[{content}]")
        lines.append(f"{_label(y)} " + " ".join(row) + f" {y}")
    lines.append(header)
    return "\n".join(lines)
