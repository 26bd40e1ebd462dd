"""Fuzzy suggestions for mistyped executable names."""

from __future__ import annotations

from theshit.command import Command
from theshit.settings import Settings

from .cache import ExecutableCache, scan_executables
from .distance import CommandMatch, find_similar_commands, levenshtein_distance


class FuzzySuggester:
    """Suggests executables close to an unresolved command name."""

    def __init__(
        self,
        cache: ExecutableCache,
        match_distance: int = 2,
        suggest_distance: int = 3,
        limit: int = 3,
    ) -> None:
        """Initialize the suggester.

        Args:
            cache: Executable names to rank against
            match_distance: Bound used to decide whether there is any match
            suggest_distance: Wider bound used when producing suggestions
            limit: Maximum number of suggestions
        """
        self.cache = cache
        self.match_distance = match_distance
        self.suggest_distance = suggest_distance
        self.limit = limit

    @classmethod
    def from_settings(cls, settings: Settings, cache: ExecutableCache | None = None) -> FuzzySuggester:
        return cls(
            cache=cache or ExecutableCache(),
            match_distance=settings.match_distance,
            suggest_distance=settings.suggest_distance,
            limit=settings.num_close_matches,
        )

    def find(self, token: str, max_distance: int) -> list[CommandMatch]:
        return find_similar_commands(token, self.cache.get_commands(), max_distance)

    def has_match(self, token: str) -> bool:
        """Check for any executable within the match distance."""
        return bool(self.find(token, self.match_distance))

    def suggest(self, command: Command) -> list[str]:
        """Build replacement scripts for the command's first token."""
        if not command.tokens:
            return []

        matches = self.find(command.tokens[0], self.suggest_distance)
        rest = list(command.tokens[1:])
        return [" ".join([match.command, *rest]) for match in matches[: self.limit]]


__all__ = [
    "CommandMatch",
    "ExecutableCache",
    "FuzzySuggester",
    "find_similar_commands",
    "levenshtein_distance",
    "scan_executables",
]
