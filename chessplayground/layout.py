"""Starting layouts: (blueprint name, team, square) triples for GameEngine.setup()."""

from __future__ import annotations

from chessplayground.pieces import Team
from chessplayground.position import Position

LayoutEntry = tuple[str, Team, Position]

_BACK_RANK = ("rook", "knight", "bishop", "queen", "king", "bishop", "knight", "rook")


def standard_layout(width: int = 8, height: int = 8) -> list[LayoutEntry]:
    """Classic chess setup: white on ranks 0-1, black on the top two ranks."""
    if width < len(_BACK_RANK) or height < 4:
        raise ValueError(f"The standard layout needs at least an 8x4 board, got {width}x{height}")
    top = height - 1
    layout: list[LayoutEntry] = []
    for x, name in enumerate(_BACK_RANK):
        layout.append((name, "white", Position(x, 0)))
        layout.append((name, "black", Position(x, top)))
    for x in range(len(_BACK_RANK)):
        layout.append(("pawn", "white", Position(x, 1)))
        layout.append(("pawn", "black", Position(x, top - 1)))
    return layout


LAYOUTS = {
    "standard": standard_layout,
    "empty": lambda width=8, height=8: [],
}
