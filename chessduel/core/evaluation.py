"""Positional heuristics shared by the engines.

Every function here reads the board it is given and never mutates it. When a
heuristic needs the other side's point of view it works on a copy.
"""

import chess

from chessduel.config import PIECE_VALUES, CENTER_SQUARES


def flipped_turn(board: chess.Board) -> chess.Board:
    """Copy of `board` with the other side to move."""
    view = board.copy(stack=False)
    view.turn = not view.turn
    view.ep_square = None
    return view


def captured_piece_type(board: chess.Board, move: chess.Move):
    """Piece type taken by `move`, or None for a non-capture."""
    if board.is_en_passant(move):
        return chess.PAWN
    victim = board.piece_at(move.to_square)
    if victim is None or victim.color == board.turn:
        return None
    return victim.piece_type


def count_moves_from(board: chess.Board, square: chess.Square) -> int:
    """Number of legal moves for the piece on `square` (0 if it is not the mover's)."""
    return sum(1 for _ in board.generate_legal_moves(chess.BB_SQUARES[square]))


def assess_center_control(board: chess.Board) -> float:
    """Center control for the side to move, in [0, 1]."""
    turn = board.turn
    targets = {m.to_square for m in board.legal_moves}
    control = 0.0
    for sq in CENTER_SQUARES:
        piece = board.piece_at(sq)
        if piece and piece.color == turn:
            control += 0.25
        elif sq in targets:
            control += 0.15
    return min(1.0, control)


def assess_piece_development(board: chess.Board) -> float:
    """Share of the mover's pieces that have left their home rank, in [0, 1]."""
    turn = board.turn
    home_rank = 0 if turn == chess.WHITE else 7
    developed = 0
    total = 0
    for sq, piece in board.piece_map().items():
        if piece.color != turn:
            continue
        total += 1
        if piece.piece_type == chess.PAWN:
            continue
        if chess.square_rank(sq) != home_rank:
            developed += 1
    return min(1.0, developed / max(1, total - 8))


def calculate_undefended_penalty(board: chess.Board) -> float:
    """Penalty for the mover's pieces the opponent can capture, in [0, 0.3]."""
    opponent = flipped_turn(board)
    threatened = {m.to_square for m in opponent.generate_legal_captures()}
    penalty = 0.0
    for sq in threatened:
        piece = board.piece_at(sq)
        if piece and piece.color == board.turn:
            penalty += 0.05 * PIECE_VALUES[piece.piece_type]
    return min(0.3, penalty)


def move_heuristic(board: chess.Board, move: chess.Move) -> float:
    """Ordering score: captures 10+victim, promotions 15, checks 5, quiet 0."""
    victim = captured_piece_type(board, move)
    if victim is not None:
        return 10 + PIECE_VALUES[victim]
    if move.promotion:
        return 15
    if board.gives_check(move):
        return 5
    return 0


def order_moves(board: chess.Board, moves):
    """Sort moves by descending heuristic; equal scores keep their input order."""
    return sorted(moves, key=lambda m: move_heuristic(board, m), reverse=True)


def calculate_position_complexity(board: chess.Board) -> float:
    """Piece count plus 0.2 per legal move of the side to move."""
    return len(board.piece_map()) + 0.2 * board.legal_moves.count()
