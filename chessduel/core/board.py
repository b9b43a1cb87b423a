"""Board wrapper over python-chess providing SAN move history and game status."""

from dataclasses import dataclass
from typing import List, Optional

import chess


@dataclass(frozen=True)
class GameStatus:
    over: bool
    reason: Optional[str] = None   # "checkmate", "stalemate", "insufficient_material", "draw"
    winner: Optional[str] = None   # "white" / "black" on checkmate


def color_name(color: chess.Color) -> str:
    return "white" if color == chess.WHITE else "black"


class ChessBoard:
    def __init__(self, fen: str = None):
        """Initialize from FEN or the standard starting position."""
        self.board = chess.Board(fen) if fen else chess.Board()
        self.move_history: List[str] = []

    def reset(self):
        """Reset to the initial position."""
        self.board.reset()
        self.move_history.clear()

    def set_fen(self, fen: str):
        """Set board state from a FEN string. Raises ValueError on bad FEN."""
        self.board.set_fen(fen)
        self.move_history.clear()

    def get_fen(self) -> str:
        """Return the current FEN."""
        return self.board.fen()

    @property
    def turn(self) -> str:
        return color_name(self.board.turn)

    def parse_move(self, text: str) -> Optional[chess.Move]:
        """Resolve a SAN ('Nf3') or UCI ('g1f3') string to a legal move, else None."""
        text = (text or "").strip()
        if not text:
            return None
        try:
            move = self.board.parse_san(text)
        except ValueError:
            move = None
        if move:
            return move
        try:
            move = chess.Move.from_uci(text)
        except ValueError:
            return None
        return move if move in self.board.legal_moves else None

    def push(self, move: chess.Move) -> str:
        """Play a legal move and return its SAN."""
        san = self.board.san(move)
        self.board.push(move)
        self.move_history.append(san)
        return san

    def make_move(self, move_str: str) -> bool:
        """Push a SAN or UCI move. Returns True if legal."""
        move = self.parse_move(move_str)
        if move is None:
            return False
        self.push(move)
        return True

    def undo_move(self):
        """Pop the last move."""
        if self.move_history:
            self.board.pop()
            self.move_history.pop()

    def get_legal_moves(self, square: Optional[chess.Square] = None) -> List[str]:
        """Return legal moves as SAN strings, optionally only those from `square`."""
        from_mask = chess.BB_ALL if square is None else chess.BB_SQUARES[square]
        return [self.board.san(m) for m in self.board.generate_legal_moves(from_mask)]

    def squares(self):
        """8x8 grid, rank 8 first, of (color, piece letter) tuples or None."""
        grid = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                piece = self.board.piece_at(chess.square(file, rank))
                row.append((color_name(piece.color), piece.symbol().lower()) if piece else None)
            grid.append(row)
        return grid

    def is_game_over(self) -> bool:
        """Check if the game has ended (claimable draws count as ended)."""
        return self.board.is_game_over(claim_draw=True)

    def status(self) -> GameStatus:
        b = self.board
        if b.is_checkmate():
            return GameStatus(True, "checkmate", color_name(not b.turn))
        if b.is_stalemate():
            return GameStatus(True, "stalemate")
        if b.is_insufficient_material():
            return GameStatus(True, "insufficient_material")
        if b.is_game_over(claim_draw=True):
            return GameStatus(True, "draw")
        return GameStatus(False)

    def print_board(self):
        """Print ASCII representation."""
        print(self.board)
