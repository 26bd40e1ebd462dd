"""The failed command as seen by the rules."""

from __future__ import annotations

from dataclasses import dataclass, field


def split_script(script: str) -> tuple[str, ...]:
    """Split a script on single spaces, dropping empty fragments.

    This is deliberately not shell tokenization: quotes are not honoured and
    tabs are not separators.
    """
    return tuple(part for part in script.split(" ") if part)


def to_lower(text: str) -> str:
    """Case-fold helper used by rules that match output case-insensitively."""
    return text.lower()


@dataclass(frozen=True)
class Command:
    """A failed script, its captured output and its tokens."""

    script: str
    output: str
    tokens: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", split_script(self.script))

    @classmethod
    def from_raw(cls, script: str, output: str | None) -> Command:
        """Build a command from collaborator output, tolerating ``None``."""
        return cls(script=script, output=output or "")
