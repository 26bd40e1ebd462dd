"""Correction rules and the registry that dispatches them."""

from .base import DEFAULT_PRIORITY, Rule
from .registry import RuleRegistry

__all__ = ["DEFAULT_PRIORITY", "Rule", "RuleRegistry"]
