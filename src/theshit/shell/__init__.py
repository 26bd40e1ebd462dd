"""Shell collaborators: history lookup and script execution."""

from .executor import ExecutionResult, ShellExecutor
from .history import get_last_command

__all__ = ["ExecutionResult", "ShellExecutor", "get_last_command"]
