"""Last-command lookup from the shell history file."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

# History entries containing these are our own invocations or editor sessions
IGNORED_WORDS = ("shit", "nano")


def history_file(environ: Mapping[str, str]) -> tuple[Path, bool] | None:
    """Locate the history file for the user's shell.

    Returns:
        ``(path, is_zsh)``, or None when ``$HOME`` is unset
    """
    home = environ.get("HOME")
    if not home:
        return None
    is_zsh = "zsh" in environ.get("SHELL", "")
    name = ".zsh_history" if is_zsh else ".bash_history"
    return Path(home) / name, is_zsh


def parse_history_line(line: str, is_zsh: bool) -> str:
    """Extract the command from a history line.

    zsh extended history lines look like ``: 1700000000:0;command``.
    """
    if is_zsh:
        _, sep, tail = line.rpartition(";")
        if sep:
            line = tail
    return line.strip(" \t\n\r")


def get_last_command(environ: Mapping[str, str] | None = None) -> str:
    """Return the most recent usable command, or an empty string."""
    env = os.environ if environ is None else environ
    located = history_file(env)
    if located is None:
        return ""
    path, is_zsh = located

    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
    except OSError as e:
        logger.debug(f"Cannot read history file {path}: {e}")
        return ""

    last = ""
    for line in lines:
        cmd = parse_history_line(line, is_zsh)
        if not cmd:
            continue
        if any(word in cmd for word in IGNORED_WORDS):
            continue
        last = cmd

    return last
