"""Correction loop: propose, confirm, execute, retry."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

import click
from rich.console import Console
from rich.markup import escape

from theshit.command import Command
from theshit.rules.registry import RuleRegistry
from theshit.settings import Settings
from theshit.shell.executor import ExecutionResult

logger = logging.getLogger(__name__)

NOTHING_TO_FIX = "No shit to fix!"
CONFIRM_HINT = " [enter/↑/↓/ctrl+c]"


class Executor(Protocol):
    def run(self, script: str) -> ExecutionResult: ...

    def capture(
        self,
        script: str,
        echo: Callable[[str], None] | None = None,
    ) -> ExecutionResult: ...


class LoopState(Enum):
    """States of the correction loop."""

    IDLE = "idle"
    PROPOSING = "proposing"
    CONFIRMING = "confirming"
    EXECUTING = "executing"
    RETRYING = "retrying"
    DONE = "done"


@dataclass
class LoopResult:
    """Outcome of a correction run."""

    attempts: int = 0
    executed: list[ExecutionResult] = field(default_factory=list)
    states: list[LoopState] = field(default_factory=list)
    nothing_to_fix: bool = False

    @property
    def last(self) -> ExecutionResult | None:
        return self.executed[-1] if self.executed else None


def wait_for_key() -> None:
    """Block until a single keystroke; any key accepts."""
    click.getchar()


class CorrectionLoop:
    """Drives corrections for a failed command."""

    def __init__(
        self,
        registry: RuleRegistry,
        settings: Settings,
        executor: Executor,
        console: Console | None = None,
        confirm: Callable[[], None] = wait_for_key,
    ) -> None:
        self.registry = registry
        self.settings = settings
        self.executor = executor
        self.console = console or Console(no_color=settings.no_colors, highlight=False, emoji=False)
        self.confirm = confirm

    def run(self, command: Command, yes: bool = False, recursive: bool = False) -> LoopResult:
        """Correct ``command``, re-correcting failures in recursive mode.

        Args:
            command: The failed command and its output
            yes: Skip confirmation
            recursive: Keep correcting while corrections fail

        Returns:
            LoopResult describing what was executed
        """
        result = LoopResult(states=[LoopState.IDLE])
        max_attempts = self.settings.max_attempts_for(recursive)
        ask = not yes and self.settings.require_confirmation

        while result.attempts < max_attempts:
            result.states.append(LoopState.PROPOSING)
            corrections = self.registry.get_corrected_commands(command)

            if not corrections:
                if result.attempts == 0:
                    self.console.print(NOTHING_TO_FIX, markup=False)
                    result.nothing_to_fix = True
                break

            correction = corrections[0]
            self._show(correction, ask)
            if ask:
                result.states.append(LoopState.CONFIRMING)
                self.confirm()

            result.states.append(LoopState.EXECUTING)
            if recursive:
                # Retries need the output, so stream it while capturing
                executed = self.executor.capture(correction, echo=self._echo)
            else:
                executed = self.executor.run(correction)
            result.executed.append(executed)

            if executed.success or not recursive:
                break

            result.attempts += 1
            if result.attempts >= max_attempts:
                break

            logger.debug(f"Correction {correction!r} failed with {executed.returncode}, retrying")
            result.states.append(LoopState.RETRYING)
            command = Command.from_raw(correction, executed.output)

        result.states.append(LoopState.DONE)
        return result

    def _show(self, correction: str, ask: bool) -> None:
        hint = escape(CONFIRM_HINT) if ask else ""
        self.console.print(
            f"[bold green]{escape(correction)}[/bold green]{hint}",
            emoji=False,
            soft_wrap=True,
        )

    def _echo(self, text: str) -> None:
        self.console.out(text, end="", highlight=False)
