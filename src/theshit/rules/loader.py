"""Discovery of third-party rules."""

from __future__ import annotations

import importlib.metadata as metadata
import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Any

from .base import Rule

logger = logging.getLogger(__name__)


class RuleLoader:
    """Loads rules from entry points and rule directories."""

    ENTRY_POINT_GROUP = "theshit.rules"

    def __init__(self, rules_dirs: list[str | Path] | tuple[str, ...] | None = None) -> None:
        """Initialize the loader.

        Args:
            rules_dirs: Directories containing ``*.py`` rule modules
        """
        self.rules_dirs = [Path(d) for d in (rules_dirs or [])]

    def load_all(self) -> list[Rule]:
        """Load rules from every entry point, then every rule directory.

        Sources that fail to load are logged and skipped.
        """
        rules: list[Rule] = []

        for ep in self._entry_points():
            try:
                loaded = _collect(ep.load())
            except Exception as e:
                logger.warning(f"Failed to load rules from entry point {ep.name}: {e}")
                continue
            logger.debug(f"Loaded {len(loaded)} rule(s) from entry point {ep.name}")
            rules.extend(loaded)

        for rules_dir in self.rules_dirs:
            if not rules_dir.is_dir():
                logger.debug(f"Rules directory {rules_dir} does not exist")
                continue
            for rule_file in sorted(rules_dir.glob("*.py")):
                if rule_file.name == "__init__.py":
                    continue
                rules.extend(self._load_from_file(rule_file))

        return rules

    def _entry_points(self) -> list[metadata.EntryPoint]:
        try:
            return list(metadata.entry_points(group=self.ENTRY_POINT_GROUP))
        except Exception as e:
            logger.warning(f"Failed to discover entry points: {e}")
            return []

    def _load_from_file(self, rule_file: Path) -> list[Rule]:
        """Load rules defined in a single module file."""
        module_name = f"theshit_user_rules.{rule_file.stem}"
        try:
            spec = importlib.util.spec_from_file_location(module_name, rule_file)
            if spec is None or spec.loader is None:
                logger.warning(f"Cannot import rule file {rule_file}")
                return []
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        except Exception as e:
            logger.warning(f"Failed to load rule file {rule_file}: {e}")
            return []

        loaded = _collect_module(module)
        logger.debug(f"Loaded {len(loaded)} rule(s) from {rule_file}")
        return loaded


def _collect(obj: Any) -> list[Rule]:
    """Normalise an entry point target into a list of rules."""
    if isinstance(obj, Rule):
        return [obj]
    if isinstance(obj, (list, tuple)):
        return [item for item in obj if isinstance(item, Rule)]
    if isinstance(obj, ModuleType):
        return _collect_module(obj)
    if callable(obj):
        return _collect(obj())
    return []


def _collect_module(module: ModuleType) -> list[Rule]:
    """Use the module's ``rules`` list, or else its top-level Rule instances."""
    declared = getattr(module, "rules", None)
    if isinstance(declared, (list, tuple)):
        return [item for item in declared if isinstance(item, Rule)]
    return [value for value in vars(module).values() if isinstance(value, Rule)]
