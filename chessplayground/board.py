"""
Rectangular grid board.

Squares run from (0, 0) to (width - 1, height - 1). The board only stores
which piece stands where; legality lives in validation.py and turn order in
engine.py.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from chessplayground.position import Position

if TYPE_CHECKING:
    from chessplayground.pieces import Piece

logger = logging.getLogger(__name__)


class Board:
    def __init__(self, width: int = 8, height: int = 8) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._cells: dict[Position, Piece] = {}

    # ------------------------------------------------------------------ #
    # State queries                                                        #
    # ------------------------------------------------------------------ #

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def is_valid_position(self, pos: Position) -> bool:
        return 0 <= pos.x < self._width and 0 <= pos.y < self._height

    def is_occupied(self, pos: Position) -> bool:
        return pos in self._cells

    def get_piece_at(self, pos: Position) -> Piece | None:
        return self._cells.get(pos)

    def pieces(self) -> Iterator[Piece]:
        return iter(list(self._cells.values()))

    # ------------------------------------------------------------------ #
    # Mutation                                                             #
    # ------------------------------------------------------------------ #

    def place_piece(self, piece: Piece, pos: Position) -> None:
        """Put piece on pos and update its position. Overwrites an occupant."""
        self._require_on_board(pos, "place piece")
        occupant = self._cells.get(pos)
        if occupant is not None and occupant is not piece:
            logger.warning("Placing %s on %s overwrites %s", piece.id, pos, occupant.id)
        self._cells[pos] = piece
        piece.position = pos

    def remove_piece(self, pos: Position) -> Piece | None:
        self._require_on_board(pos, "remove piece")
        piece = self._cells.pop(pos, None)
        if piece is None:
            logger.warning("Removing piece from empty square %s", pos)
        return piece

    def move_piece(self, from_pos: Position, to_pos: Position) -> None:
        piece = self._cells.get(from_pos)
        if piece is None:
            raise ValueError(f"No piece on {from_pos} to move")
        self._require_on_board(to_pos, "move piece")
        del self._cells[from_pos]
        self.place_piece(piece, to_pos)

    def _require_on_board(self, pos: Position, what: str) -> None:
        if not self.is_valid_position(pos):
            raise ValueError(
                f"Cannot {what}: {pos} is outside the board "
                f"(0-{self._width - 1}, 0-{self._height - 1})"
            )
