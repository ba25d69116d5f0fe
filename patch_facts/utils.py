"""Shared helpers for running the host's package and release tooling."""

import subprocess
from pathlib import Path
from typing import Iterable

from patch_facts.exceptions import CommandExecutionError
from patch_facts.logging_config import logger

# Commands are run without a timeout: a hung package manager hangs the run,
# and scheduling is expected to serialize invocations.


def run_command(
    cmd: list[str],
    command_name: str,
    ok_returncodes: Iterable[int] = (0,),
) -> subprocess.CompletedProcess:
    """
    Run a command and handle common error cases.

    Args:
        cmd: Command to run as a list
        command_name: Name of the command for error reporting
        ok_returncodes: Exit codes that count as success (yum uses 100 for
            "updates available")

    Returns:
        CompletedProcess result

    Raises:
        CommandExecutionError: If the command cannot be started or exits with
            a code outside ``ok_returncodes``. Output captured before the
            failure is attached to the exception.
    """
    logger.debug(f"Running command: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            check=False,
            text=True,
            shell=False,
        )
    except OSError as e:
        logger.debug(f"{command_name} could not be started: {e}")
        raise CommandExecutionError(f"{command_name} could not be started: {e}", returncode=127)

    if result.returncode not in tuple(ok_returncodes):
        logger.debug(
            f"{command_name} exited with code {result.returncode}",
            extra={"command": command_name, "returncode": result.returncode},
        )
        log_command_error(command_name, result.stderr)
        raise CommandExecutionError(
            f"{command_name} exited with code {result.returncode}",
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
    return result


def log_command_error(command_name: str, stderr: str) -> None:
    """Log the first lines of a failed command's stderr."""
    if stderr:
        for line in stderr.strip().splitlines()[:5]:
            logger.debug(f"[{command_name}] {line}")


def read_text(path: Path) -> str:
    """Read a small text file, returning an empty string when it is absent or unreadable."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def host_path(root: Path, absolute: str) -> Path:
    """Resolve an absolute host path (e.g. ``/etc/os-release``) under ``root``."""
    return Path(root) / absolute.lstrip("/")
