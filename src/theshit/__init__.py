"""The Shit - corrects the previous console command."""

__version__ = "1.0.0"

# Core components - lazy imports to avoid circular dependencies
def __getattr__(name: str):
    """Lazy import to avoid circular dependencies."""
    if name == "Command":
        from theshit.command import Command
        return Command
    elif name == "Settings":
        from theshit.settings import Settings
        return Settings
    elif name == "Rule":
        from theshit.rules.base import Rule
        return Rule
    elif name == "RuleRegistry":
        from theshit.rules.registry import RuleRegistry
        return RuleRegistry
    elif name == "CorrectionLoop":
        from theshit.core import CorrectionLoop
        return CorrectionLoop
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "Command",
    "Settings",
    "Rule",
    "RuleRegistry",
    "CorrectionLoop",
]
