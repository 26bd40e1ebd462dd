"""Edit distance and candidate ranking."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class CommandMatch:
    """An executable name and its distance from the typed token."""

    command: str
    distance: int


def levenshtein_distance(s1: str, s2: str) -> int:
    """Compute the Levenshtein distance between two strings.

    Insertions, deletions and substitutions all cost one.
    """
    len1, len2 = len(s1), len(s2)
    dp = [[0] * (len2 + 1) for _ in range(len1 + 1)]

    for i in range(len1 + 1):
        dp[i][0] = i
    for j in range(len2 + 1):
        dp[0][j] = j

    for i in range(1, len1 + 1):
        for j in range(1, len2 + 1):
            if s1[i - 1] == s2[j - 1]:
                dp[i][j] = dp[i - 1][j - 1]
            else:
                dp[i][j] = 1 + min(dp[i - 1][j], dp[i][j - 1], dp[i - 1][j - 1])

    return dp[len1][len2]


def find_similar_commands(
    token: str,
    commands: Iterable[str],
    max_distance: int,
) -> list[CommandMatch]:
    """Rank known commands by distance from ``token``.

    Args:
        token: The unresolved command name
        commands: Candidate names, in discovery order
        max_distance: Largest distance to keep (inclusive)

    Returns:
        Matches sorted by ascending distance; ties keep discovery order
    """
    matches = []
    for name in commands:
        dist = levenshtein_distance(token, name)
        if dist <= max_distance:
            matches.append(CommandMatch(command=name, distance=dist))

    return sorted(matches, key=lambda m: m.distance)
