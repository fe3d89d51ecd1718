"""Environment-first defaults for the game and the move-table export.

Each setting reads its TICTACBOT_* variable and falls back to a fixed
default, so the CLI behaves the same from any working directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .board import SYMBOLS

DEFAULT_PLAYER_NAME = "Player 1"
DEFAULT_BOT_NAME = "Bot"


def _env_text(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def player_name() -> str:
    return _env_text("TICTACBOT_PLAYER_NAME") or DEFAULT_PLAYER_NAME


def bot_name() -> str:
    return _env_text("TICTACBOT_BOT_NAME") or DEFAULT_BOT_NAME


def default_symbol() -> str | None:
    """Symbol the human plays when none is given on the command line.

    None means the player is asked. Values outside X/O are ignored.
    """
    value = _env_text("TICTACBOT_SYMBOL")
    if value is None:
        return None
    value = value.upper()
    if value not in SYMBOLS:
        logging.warning("Ignoring TICTACBOT_SYMBOL=%r (expected one of %s)", value, "/".join(SYMBOLS))
        return None
    return value


def data_dir() -> Path:
    p = _env_text("TICTACBOT_DATA_DIR")
    return Path(p) if p else Path.cwd() / "data_raw"
