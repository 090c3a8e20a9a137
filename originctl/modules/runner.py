"""Execution of external commands (oc, oadm, docker, systemctl, exportfs)."""
import logging
import subprocess
from typing import List, Optional, Sequence

from originctl.errors import CommandError
from originctl.utils import format_command

logger = logging.getLogger("originctl.runner")


class CommandRunner:
    """Runs commands on the local VM.

    In dry-run mode every command is logged and reported as successful
    without being executed.
    """

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def run(
        self,
        cmd: Sequence[str],
        check: bool = True,
        capture: bool = False,
        input: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        """Run a command.

        Args:
            cmd: Command and arguments
            check: Raise CommandError on a non-zero exit code
            capture: Capture stdout/stderr instead of inheriting them
            input: Text fed to the command's stdin

        Returns:
            subprocess.CompletedProcess

        Raises:
            CommandError: If check is set and the command fails or the
                executable cannot be found (exit code 127 otherwise)
        """
        cmd = [str(c) for c in cmd]
        rendered = format_command(cmd)

        if self.dry_run:
            logger.info(f"[dry-run] {rendered}")
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        logger.info(f"$ {rendered}")
        try:
            result = subprocess.run(
                cmd,
                input=input,
                capture_output=capture or input is not None,
                text=True,
            )
        except FileNotFoundError as e:
            if check:
                raise CommandError(cmd, 127, stderr=str(e)) from e
            return subprocess.CompletedProcess(cmd, 127, stdout="", stderr=str(e))

        if check and result.returncode != 0:
            logger.debug(f"Command failed ({result.returncode}): {rendered}")
            raise CommandError(cmd, result.returncode, result.stdout, result.stderr)
        return result

    def output(self, cmd: Sequence[str], check: bool = True) -> str:
        """Run a command and return its stripped stdout."""
        result = self.run(cmd, check=check, capture=True)
        return (result.stdout or "").strip()

    def succeeds(self, cmd: Sequence[str]) -> bool:
        """Return True if the command exits with status 0.

        In dry-run mode this reports False so existence probes never hide
        the commands that would create the object.
        """
        if self.dry_run:
            logger.info(f"[dry-run] {format_command(cmd)}")
            return False
        return self.run(cmd, check=False, capture=True).returncode == 0
