"""Command-line interface for The Shit."""

from __future__ import annotations

import logging
import os
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from theshit import __version__
from theshit.command import Command
from theshit.core import CorrectionLoop
from theshit.fuzzy import ExecutableCache, FuzzySuggester
from theshit.rules.registry import RuleRegistry
from theshit.settings import Settings
from theshit.shell import ShellExecutor, get_last_command

ALIAS = "alias shit='theshit \"$(fc -ln -1)\"'"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Send debug logs to stderr when debugging is enabled."""
    if not settings.debug:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    }
)
@click.option("--yeah", "-y", "--hard", "yes", is_flag=True, help="Run the correction without asking")
@click.option("-r", "--recursive", is_flag=True, help="Keep correcting until the command succeeds")
@click.option("--alias", "print_alias", is_flag=True, help="Print the shell alias and exit")
@click.version_option(__version__, message="The Shit v%(version)s")
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
def cli(yes: bool, recursive: bool, print_alias: bool, command: tuple[str, ...]) -> None:
    """Correct the previous console command.

    COMMAND defaults to the last entry of the shell history.
    """
    if print_alias:
        click.echo(ALIAS)
        return

    settings = Settings.from_env()
    configure_logging(settings)

    script = " ".join(command).strip() or get_last_command()
    if not script:
        sys.exit(1)

    executor = ShellExecutor(shell=os.environ.get("SHELL") or None)
    output = executor.capture(script).output
    logger.debug(f"Correcting {script!r}")

    suggester = FuzzySuggester.from_settings(settings, ExecutableCache())
    registry = RuleRegistry.from_settings(settings, suggester)
    loop = CorrectionLoop(registry, settings, executor)
    loop.run(Command.from_raw(script, output), yes=yes, recursive=recursive)


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
