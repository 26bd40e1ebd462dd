"""Rule type and helpers shared by rule implementations."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from theshit.command import Command

DEFAULT_PRIORITY = 1000


@dataclass(frozen=True)
class Rule:
    """A single correction rule.

    A rule pairs a predicate over a failed command with a function producing
    replacement scripts, best first.
    """

    name: str
    match: Callable[[Command], bool]
    get_new_command: Callable[[Command], Sequence[str]]
    priority: int = DEFAULT_PRIORITY  # Lower runs earlier

    def matches(self, command: Command) -> bool:
        """Check if this rule applies to the command."""
        return bool(self.match(command))

    def fix(self, command: Command) -> list[str]:
        """Produce replacement scripts for a matched command.

        Falls back to the unmodified script when the rule has nothing better,
        so a matched rule always yields at least one candidate.
        """
        candidates = list(self.get_new_command(command))
        return candidates or [command.script]


def join_tokens(tokens: Sequence[str]) -> str:
    """Reassemble tokens with a single space between each."""
    return " ".join(tokens)


def replace_token(command: Command, index: int, typos: Mapping[str, str]) -> list[str]:
    """Correct the token at ``index`` using a typo table.

    Returns the script unchanged when the index is out of range or the token
    is not a known typo.
    """
    tokens = list(command.tokens)
    if index >= len(tokens) or tokens[index] not in typos:
        return [command.script]
    tokens[index] = typos[tokens[index]]
    return [join_tokens(tokens)]


def strip_prefix(script: str, prefix: str) -> str:
    """Return ``script`` without ``prefix``, or unchanged if absent."""
    return script[len(prefix):] if script.startswith(prefix) else script
