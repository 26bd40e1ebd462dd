"""Rule registry - picks the correction for a failed command."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from theshit.command import Command

from .base import Rule

if TYPE_CHECKING:
    from theshit.fuzzy import FuzzySuggester
    from theshit.settings import Settings

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Ordered set of rules evaluated first-match-wins."""

    def __init__(self, rules: Iterable[Rule], exclude: Iterable[str] = ()) -> None:
        """Initialize the registry.

        Args:
            rules: Rules in registration order
            exclude: Names of rules to leave out
        """
        excluded = set(exclude)
        self._rules: list[Rule] = [r for r in rules if r.name not in excluded]
        self._sort()

    @classmethod
    def from_settings(cls, settings: Settings, suggester: FuzzySuggester) -> RuleRegistry:
        """Build the registry from built-in rules plus third-party rules."""
        from .builtin import build_builtin_rules
        from .loader import RuleLoader

        rules = build_builtin_rules(suggester)
        rules.extend(RuleLoader(settings.rules_dirs).load_all())
        return cls(rules, exclude=settings.exclude_rules)

    def _sort(self) -> None:
        # Stable: equal priorities keep registration order
        self._rules.sort(key=lambda r: r.priority)

    def match(self, command: Command) -> Rule | None:
        """Return the first rule whose predicate holds, if any."""
        for rule in self._rules:
            if rule.matches(command):
                logger.debug(f"Matched rule: {rule.name}")
                return rule
        return None

    def get_corrected_commands(self, command: Command) -> list[str]:
        """Corrections from the first matching rule, in that rule's order.

        Returns:
            Candidate scripts, or an empty list when nothing applies
        """
        rule = self.match(command)
        if rule is None:
            logger.debug(f"No rule matched: {command.script!r}")
            return []
        return rule.fix(command)

    def matching_rules(self, command: Command) -> list[Rule]:
        """All rules whose predicate holds, in evaluation order."""
        return [r for r in self._rules if r.matches(command)]

    def add_rule(self, rule: Rule) -> None:
        """Add a rule; it is placed after existing rules of equal priority."""
        self._rules.append(rule)
        self._sort()

    def remove_rule(self, name: str) -> bool:
        """Remove a rule by name."""
        for i, rule in enumerate(self._rules):
            if rule.name == name:
                self._rules.pop(i)
                return True
        return False

    def list_rules(self) -> list[Rule]:
        """List rules in evaluation order."""
        return self._rules.copy()
