"""
Run one encoder command, or just print it in dry-run mode.
Failures are logged and reported as False; they never abort the batch.
"""
import logging
import subprocess
import sys
from typing import TextIO

from .schema import Command

logger = logging.getLogger(__name__)

DRY_RUN_PREFIX = "DRY RUN: "


def _tail(text: str | None, lines: int = 5) -> str:
    if not text:
        return ""
    return "\n".join(text.strip().splitlines()[-lines:])


class CommandRunner:
    """Stateless between calls. dry_run=True never starts a process."""

    def __init__(self, *, dry_run: bool = False, stream: TextIO | None = None):
        self.dry_run = dry_run
        self._stream = stream

    def run(self, command: Command) -> bool:
        """Returns True if the command ran (or would run) successfully."""
        if self.dry_run:
            print(f"{DRY_RUN_PREFIX}{command}", file=self._stream if self._stream is not None else sys.stdout)
            return True

        logger.debug("%s", command)
        try:
            result = subprocess.run(
                list(command.argv),
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.warning("Failed to start %s: %s", command.program, e)
            return False
        if result.returncode != 0:
            logger.warning(
                "%s returned exit status %s: %s",
                command.program, result.returncode, _tail(result.stderr),
            )
            return False
        return True
