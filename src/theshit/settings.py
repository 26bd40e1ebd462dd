"""Process-wide settings read from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ENV_PREFIX = "THESHIT_"

DEFAULT_ATTEMPTS = 1
DEFAULT_RECURSIVE_ATTEMPTS = 10


@dataclass(frozen=True)
class Settings:
    """Configuration for a single run."""

    # Interaction
    require_confirmation: bool = True
    no_colors: bool = False
    debug: bool = False

    # Correction loop
    max_attempts: int | None = None  # None: 1, or 10 in recursive mode

    # Fuzzy matching
    match_distance: int = 2
    suggest_distance: int = 3
    num_close_matches: int = 3

    # Rules
    exclude_rules: tuple[str, ...] = ()
    rules_dirs: tuple[str, ...] = ()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Load settings from environment variables.

        Args:
            environ: Environment mapping, ``os.environ`` by default

        Returns:
            Settings with defaults for anything unset or invalid
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        return cls(
            require_confirmation=_get_bool(env, "REQUIRE_CONFIRMATION", defaults.require_confirmation),
            no_colors=_get_bool(env, "NO_COLORS", defaults.no_colors),
            debug=_get_bool(env, "DEBUG", defaults.debug),
            max_attempts=_get_int(env, "MAX_ATTEMPTS", defaults.max_attempts, minimum=1),
            match_distance=_get_int(env, "MATCH_DISTANCE", defaults.match_distance),
            suggest_distance=_get_int(env, "SUGGEST_DISTANCE", defaults.suggest_distance),
            num_close_matches=_get_int(env, "NUM_CLOSE_MATCHES", defaults.num_close_matches, minimum=1),
            exclude_rules=_get_list(env, "EXCLUDE_RULES", ","),
            rules_dirs=_get_list(env, "RULES_DIR", os.pathsep),
        )

    def max_attempts_for(self, recursive: bool) -> int:
        """Attempt bound for the correction loop."""
        if self.max_attempts is not None:
            return self.max_attempts
        return DEFAULT_RECURSIVE_ATTEMPTS if recursive else DEFAULT_ATTEMPTS


def _get_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(ENV_PREFIX + name)
    if value is None:
        return default
    return value == "true"


def _get_int(
    env: Mapping[str, str],
    name: str,
    default: int | None,
    minimum: int = 0,
) -> int | None:
    value = env.get(ENV_PREFIX + name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        logger.warning(f"Ignoring {ENV_PREFIX}{name}={value!r}: not an integer")
        return default
    if parsed < minimum:
        logger.warning(f"Ignoring {ENV_PREFIX}{name}={value!r}: must be at least {minimum}")
        return default
    return parsed


def _get_list(env: Mapping[str, str], name: str, sep: str) -> tuple[str, ...]:
    value = env.get(ENV_PREFIX + name, "")
    return tuple(item.strip() for item in value.split(sep) if item.strip())
