"""Discovery and caching of executables on the search path."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def scan_executables(search_path: str) -> list[str]:
    """List executable names found on a search path.

    Args:
        search_path: ``os.pathsep``-separated directories, like ``$PATH``

    Returns:
        Executable names in discovery order, first occurrence wins
    """
    commands: list[str] = []
    seen: set[str] = set()

    for directory in search_path.split(os.pathsep):
        if not directory or not os.path.isdir(directory):
            continue

        try:
            entries = list(os.scandir(directory))
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            continue

        for entry in entries:
            name = entry.name
            if name.startswith("."):
                continue
            if name in seen:
                continue
            if not _is_executable_file(entry):
                continue
            commands.append(name)
            seen.add(name)

    return commands


def _is_executable_file(entry: os.DirEntry) -> bool:
    """Check for a regular file or symlink with the user-execute bit."""
    try:
        if not (entry.is_symlink() or entry.is_file(follow_symlinks=False)):
            return False
        st = os.stat(entry.path)
    except OSError:
        return False
    return bool(st.st_mode & stat.S_IXUSR)


class ExecutableCache:
    """Executable names on the search path, scanned at most once."""

    def __init__(
        self,
        search_path: str | None = None,
        commands: Iterable[str] | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            search_path: Directories to scan, ``$PATH`` by default
            commands: Preloaded names; skips scanning entirely
        """
        self.search_path = search_path if search_path is not None else os.environ.get("PATH", "")
        self._commands: list[str] | None = list(commands) if commands is not None else None

    @property
    def loaded(self) -> bool:
        """Whether the search path has been scanned (or names preloaded)."""
        return self._commands is not None

    def get_commands(self) -> list[str]:
        """Return cached executable names, scanning on first use."""
        if self._commands is None:
            self._commands = scan_executables(self.search_path)
            logger.debug(f"Loaded {len(self._commands)} system commands")
        return self._commands
