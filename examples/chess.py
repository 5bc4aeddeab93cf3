"""
Example: Fingerprinting a Chess Board

A board owns its cells and keeps a Zobrist fingerprint in sync by
removing the old (row, col, piece) element and adding the new one on
every change. Restoring a position restores its fingerprint exactly.

Run with ZOBRIST_CHECK_SET_BEHAVIOR=1 to validate every update.
"""

from enum import Enum
from typing import List, Optional, Tuple

from zobrist import ZobristHashSet, ZobristSet


class Piece(Enum):
    WHITE_PAWN = 0
    WHITE_KNIGHT = 1
    WHITE_BISHOP = 2
    WHITE_ROOK = 3
    WHITE_QUEEN = 4
    WHITE_KING = 5
    BLACK_PAWN = 6
    BLACK_KNIGHT = 7
    BLACK_BISHOP = 8
    BLACK_ROOK = 9
    BLACK_QUEEN = 10
    BLACK_KING = 11


BOARD_SIZE = 8

Cell = Tuple[int, int, Piece]

WHITE_BACK_RANK = [
    Piece.WHITE_ROOK, Piece.WHITE_KNIGHT, Piece.WHITE_BISHOP, Piece.WHITE_QUEEN,
    Piece.WHITE_KING, Piece.WHITE_BISHOP, Piece.WHITE_KNIGHT, Piece.WHITE_ROOK,
]
BLACK_BACK_RANK = [
    Piece.BLACK_ROOK, Piece.BLACK_KNIGHT, Piece.BLACK_BISHOP, Piece.BLACK_QUEEN,
    Piece.BLACK_KING, Piece.BLACK_BISHOP, Piece.BLACK_KNIGHT, Piece.BLACK_ROOK,
]


class ChessBoard:
    def __init__(self):
        self.board: List[List[Optional[Piece]]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self.zobrist: ZobristHashSet[Cell] = ZobristSet.empty()

    def set_piece(self, x: int, y: int, piece: Optional[Piece]):
        old_piece = self.board[x][y]
        if old_piece is not None:
            self.zobrist.remove((x, y, old_piece))
        if piece is not None:
            self.zobrist.add((x, y, piece))
        self.board[x][y] = piece

    def initialize(self):
        for col, piece in enumerate(WHITE_BACK_RANK):
            self.set_piece(0, col, piece)
        for col in range(BOARD_SIZE):
            self.set_piece(1, col, Piece.WHITE_PAWN)

        for col, piece in enumerate(BLACK_BACK_RANK):
            self.set_piece(7, col, piece)
        for col in range(BOARD_SIZE):
            self.set_piece(6, col, Piece.BLACK_PAWN)

    def hash(self) -> int:
        return int(self.zobrist)


def main():
    board = ChessBoard()
    board.initialize()

    initial_hash = board.hash()
    print(f"Initial position:   0x{initial_hash:016x}")
    assert initial_hash != 0

    board.set_piece(1, 0, None)
    hash_after_move = board.hash()
    print(f"Pawn a2 removed:    0x{hash_after_move:016x}")
    assert initial_hash != hash_after_move

    # Restore the white pawn
    board.set_piece(1, 0, Piece.WHITE_PAWN)
    hash_after_reset = board.hash()
    print(f"Pawn a2 restored:   0x{hash_after_reset:016x}")
    assert initial_hash == hash_after_reset


if __name__ == "__main__":
    main()
