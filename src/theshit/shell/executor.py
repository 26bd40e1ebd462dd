"""Running scripts and capturing their output."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Result of running a script."""

    script: str
    returncode: int
    output: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


class ShellExecutor:
    """Runs scripts through the user's shell."""

    def __init__(self, shell: str | None = None) -> None:
        """Initialize the executor.

        Args:
            shell: Shell executable, ``/bin/sh`` when None
        """
        self.shell = shell

    def run(self, script: str) -> ExecutionResult:
        """Run a script attached to the terminal.

        Nothing is captured, so editors and prompts behave normally; the
        result carries only the exit status.
        """
        try:
            proc = subprocess.run(script, shell=True, executable=self.shell)
        except OSError as e:
            logger.debug(f"Failed to start {script!r}: {e}")
            return ExecutionResult(script=script, returncode=127, output=str(e))

        logger.debug(f"Ran {script!r}, exit code {proc.returncode}")
        return ExecutionResult(script=script, returncode=proc.returncode)

    def capture(
        self,
        script: str,
        echo: Callable[[str], None] | None = None,
    ) -> ExecutionResult:
        """Run a script, capturing combined stdout and stderr.

        Args:
            script: Script to run
            echo: Called with each line of output as it arrives

        A script that cannot be started is reported like the shell would,
        with status 127 and the error as output.
        """
        chunks: list[str] = []
        try:
            with subprocess.Popen(
                script,
                shell=True,
                executable=self.shell,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            ) as proc:
                for line in proc.stdout:
                    chunks.append(line)
                    if echo is not None:
                        echo(line)
                returncode = proc.wait()
        except OSError as e:
            logger.debug(f"Failed to start {script!r}: {e}")
            return ExecutionResult(script=script, returncode=127, output=str(e))

        logger.debug(f"Captured {script!r}, exit code {returncode}")
        return ExecutionResult(script=script, returncode=returncode, output="".join(chunks))
