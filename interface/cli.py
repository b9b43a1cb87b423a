"""Terminal front-end: play the adaptive engine, or watch it face the hyperbolic one."""

import argparse
import logging
import sys

from chessduel.analyzer import summarize
from chessduel.config import CONFIG
from chessduel.session import GameError, GameSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chessduel", description=__doc__)
    parser.add_argument("--mode", choices=["human", "aivai"], default=CONFIG.session.mode)
    parser.add_argument("--color", choices=["white", "black"], default=CONFIG.session.human_color,
                        help="side the human plays in human mode")
    parser.add_argument("--seed", type=int, default=CONFIG.session.seed)
    parser.add_argument("--max-moves", type=int, default=None,
                        help="stop after this many half-moves")
    parser.add_argument("--log-level", default=CONFIG.log_level)
    return parser


def print_record(record, out=None):
    out = out or sys.stdout
    extra = ""
    if record.skill_level is not None:
        extra = f" | skill {record.skill_level:.1f}"
    elif record.adaptive_skill is not None:
        extra = f" | adaptive skill {record.adaptive_skill:.1f}"
    print(f"{record.player:>5}: {record.san:<8} eval {record.eval_score:+.2f} "
          f"time {record.time_taken or 0:.2f}s{extra}", file=out)


def run(session: GameSession, max_moves=None, read_move=input, out=None) -> int:
    """Drive one game; returns the number of half-moves played."""
    out = out or sys.stdout
    played = 0
    while not session.is_over():
        if max_moves is not None and played >= max_moves:
            break
        if session.is_human_turn():
            print(session.board.board, file=out)
            print("----------------------------", file=out)
            try:
                text = read_move("Your move (SAN or UCI, 'quit' to stop): ")
            except EOFError:
                break
            if text.strip().lower() in ("quit", "exit"):
                break
            try:
                record = session.play_human_move(text)
            except GameError as e:
                print(e, file=out)
                continue
        else:
            record = session.play_engine_move()
            if record is None:
                break
        print_record(record, out=out)
        played += 1

    print(session.board.board, file=out)
    if session.is_over():
        print(f"Game Over: {session.result_text()}", file=out)

    summary = summarize(session.records)
    print(f"Moves: {summary.total_moves} | avg white time {summary.avg_white_time:.2f}s | "
          f"avg black time {summary.avg_black_time:.2f}s | max swing {summary.max_swing:.2f}", file=out)
    return played


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())
    session = GameSession(mode=args.mode, human_color=args.color, seed=args.seed)
    run(session, max_moves=args.max_moves)
    return 0


if __name__ == "__main__":
    sys.exit(main())
