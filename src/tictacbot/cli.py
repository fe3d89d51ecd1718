from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from . import config
from .board import EMPTY, O, SYMBOLS, X, evaluate, is_valid_state, parse_board, serialize_board, side_to_move
from .session import GameSession, GameState, IllegalMoveError
from .solver import InvalidStateError, best_move, move_scores
from .symmetry import cell_class, orbit_size
from .table import ExportArgs, run_export
from .tactics import blocking_moves, fork_moves, gives_opponent_immediate_win, immediate_winning_moves


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tictacbot", description="Tic-tac-toe against an unbeatable computer")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )

    p_play = sub.add_parser("play", help="Play a game in the terminal")
    p_play.add_argument("--name", default=None, help="Your display name (default: $TICTACBOT_PLAYER_NAME or 'Player 1')")
    p_play.add_argument("--bot-name", default=None, help="Computer display name (default: $TICTACBOT_BOT_NAME or 'Bot')")
    p_play.add_argument(
        "--symbol",
        choices=list(SYMBOLS),
        type=str.upper,
        default=None,
        help="Symbol you play; X moves first (default: $TICTACBOT_SYMBOL or ask)",
    )

    board_help = "Board string of 9 cells, e.g. XX..OO... ('.', '-', '_' or space for empty)"

    p_eval = sub.add_parser("evaluate", help="Report the outcome of a board")
    p_eval.add_argument("--board", help=board_help + " (omit with --stdin)")
    p_eval.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_best = sub.add_parser("best-move", help="Compute the computer's move for a board")
    p_best.add_argument("--board", help=board_help + " (omit with --stdin)")
    p_best.add_argument(
        "--symbol", type=str.upper, default=None,
        help="Maximizing symbol (default: side to move, X first)",
    )
    p_best.add_argument(
        "--opponent", type=str.upper, default=None,
        help="Minimizing symbol (default: the other of X/O)",
    )
    p_best.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    p_an = sub.add_parser("analyze", help="List immediate wins, blocks, forks and losing replies for side-to-move")
    p_an.add_argument("--board", required=True, help=board_help)

    p_tab = sub.add_parser("table", help="Move-table utilities")
    g = p_tab.add_subparsers(dest="subcmd")
    p_export = g.add_parser(
        "export",
        help="Export the computer's move for every reachable position (CSV by default; parquet requires pandas+pyarrow)",
    )
    p_export.add_argument(
        "--out", type=Path, default=None,
        help="Output directory (default: $TICTACBOT_DATA_DIR or ./data_raw)",
    )
    p_export.add_argument(
        "--canonical-only", action="store_true", help="Only export one board per symmetry class"
    )
    p_export.add_argument(
        "--format",
        choices=["csv", "parquet", "both"],
        default="csv",
        help="Export format: csv (default), parquet, both",
    )

    return p


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "pandas", "pyarrow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _read_board(raw: str) -> Optional[tuple]:
    if len(raw) != 9:
        return None
    board = parse_board(raw.upper())
    if any(cell not in (EMPTY,) + SYMBOLS for cell in board):
        return None
    return board


def _stdin_board(line: str) -> Optional[tuple]:
    # spaces are empty cells, so only line endings and padding past cell 9 go
    raw = line.rstrip("\r\n")
    if len(raw) > 9 and not raw[9:].strip():
        raw = raw[:9]
    if not raw.strip():
        return None
    return _read_board(raw)


def _other(symbol: str) -> str:
    return O if symbol == X else X


def render_board(board: Sequence[str]) -> str:
    cells = [c if c else str(i + 1) for i, c in enumerate(board)]
    rows = [" | ".join(cells[i:i + 3]) for i in range(0, 9, 3)]
    return "\n" + "\n---------\n".join(rows) + "\n"


def play_interactive(session: GameSession, symbol: Optional[str] = None,
                     read: Callable[[str], str] = input) -> int:
    """Drive one session from the terminal until the game is over."""
    while symbol is None:
        answer = read("Choose your symbol [X/O]: ").strip().upper()
        if answer in SYMBOLS:
            symbol = answer
        else:
            print("Please type X or O.")
    session.choose_symbol(symbol)
    session.start()
    print(f"{session.player_name} plays {session.human_symbol}, {session.bot_name} plays {session.bot_symbol}.")

    while session.state != GameState.FINISHED:
        print(render_board(session.board))
        print(session.status_text())
        if session.state == GameState.COMPUTER_TURN:
            idx = session.computer_move()
            print(f"{session.bot_name} plays at {idx + 1}")
            continue
        raw = read(f"Play {session.human_symbol} at [1-9]: ").strip()
        try:
            index = int(raw) - 1
        except ValueError:
            print("Please type a number 1..9.")
            continue
        try:
            session.play(index)
        except IllegalMoveError as e:
            print(f"Illegal move: {e}. Try again.")

    print(render_board(session.board))
    print(session.status_text())
    return 0


def _best_move_for(board: tuple, symbol: Optional[str], opponent: Optional[str]):
    maximizer = symbol or side_to_move(board, X, O)
    minimizer = opponent or _other(maximizer)
    return maximizer, best_move(board, maximizer, minimizer, True), move_scores(board, maximizer, minimizer, True)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tictacbot"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    if ns.cmd == "play":
        session = GameSession(player_name=ns.name, bot_name=ns.bot_name)
        try:
            return play_interactive(session, symbol=ns.symbol or config.default_symbol())
        except (EOFError, KeyboardInterrupt):
            print()
            logging.info("Game abandoned")
            return 1

    if ns.cmd == "evaluate":
        if ns.stdin:
            import csv as _csv
            w = _csv.writer(sys.stdout)
            w.writerow(["board", "outcome"])
            for line in sys.stdin:
                b = _stdin_board(line)
                if b is None:
                    continue
                w.writerow([serialize_board(b), evaluate(b) or "None"])
            return 0
        b = _read_board(ns.board or "")
        if b is None:
            logging.error("Invalid board string. Must be 9 cells of X, O or '.'.")
            return 2
        logging.info("outcome=%s", evaluate(b) or "None")
        return 0

    if ns.cmd == "best-move":
        if ns.stdin:
            import csv as _csv
            w = _csv.writer(sys.stdout)
            w.writerow(["board", "symbol", "index", "score"])
            for line in sys.stdin:
                b = _stdin_board(line)
                if b is None or not is_valid_state(b):
                    continue
                try:
                    maximizer, res, _ = _best_move_for(b, ns.symbol, ns.opponent)
                except InvalidStateError:
                    continue
                w.writerow([serialize_board(b), maximizer, "" if res.index is None else res.index, res.score])
            return 0
        b = _read_board(ns.board or "")
        if b is None:
            logging.error("Invalid board string. Must be 9 cells of X, O or '.'.")
            return 2
        if not is_valid_state(b):
            logging.error("Board is not a valid reachable state.")
            return 2
        try:
            maximizer, res, scores = _best_move_for(b, ns.symbol, ns.opponent)
        except InvalidStateError as e:
            logging.error("Cannot search this board: %s", e)
            return 2
        logging.info(
            "symbol=%s index=%s score=%s class=%s scores=%s",
            maximizer,
            res.index,
            res.score,
            cell_class(res.index) if res.index is not None else None,
            scores,
        )
        return 0

    if ns.cmd == "analyze":
        b = _read_board(ns.board)
        if b is None:
            logging.error("Invalid board string. Must be 9 cells of X, O or '.'.")
            return 2
        if not is_valid_state(b):
            logging.error("Board is not a valid reachable state.")
            return 2
        if evaluate(b) is not None:
            logging.error("Board is already decided: %s", evaluate(b))
            return 2
        p = side_to_move(b, X, O)
        wins = immediate_winning_moves(b, p)
        # a winning move ends the game, so it never hands the opponent anything
        risky = [i for i in range(9) if i not in wins and gives_opponent_immediate_win(b, p, _other(p), i)]
        logging.info(
            "to_move=%s wins=%s blocks=%s forks=%s risky=%s orbit=%d",
            p,
            wins,
            blocking_moves(b, _other(p)),
            fork_moves(b, p),
            risky,
            orbit_size(b),
        )
        return 0

    if ns.cmd == "table" and ns.subcmd == "export":
        out = run_export(ExportArgs(
            out=ns.out or config.data_dir(),
            canonical_only=ns.canonical_only,
            format=ns.format,
            verbose=ns.verbose,
            cli_argv=list(argv) if argv is not None else None,
        ))
        logging.info("Exported move table to: %s", out)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
