"""Reboot advisor: does the host need a reboot to load patched software?"""

from enum import Enum
from pathlib import Path

from .exceptions import CommandExecutionError, RebootCheckUnavailable
from .identity import OsIdentity
from .logging_config import logger
from .tool_checks import check_tool_available
from .utils import host_path, run_command

REBOOT_REQUIRED_FILE = "/var/run/reboot-required"
NEEDS_RESTARTING = "needs-restarting"


class RebootStatus(str, Enum):
    """Tri-state reboot verdict, serialized as its value."""

    TRUE = "true"
    FALSE = "false"
    UNKNOWN = "unknown"

    @classmethod
    def from_bool(cls, value: bool) -> "RebootStatus":
        return cls.TRUE if value else cls.FALSE


def _needs_restarting_path() -> str:
    available, path = check_tool_available(NEEDS_RESTARTING)
    if not available or not path:
        raise RebootCheckUnavailable(f"{NEEDS_RESTARTING} is not installed (yum-utils / dnf-utils)")
    return path


def _check_el6() -> RebootStatus:
    # el6 needs-restarting has no meaningful exit code; it lists processes
    # that need a restart and prints nothing otherwise.
    path = _needs_restarting_path()
    try:
        result = run_command([path], NEEDS_RESTARTING)
    except CommandExecutionError as e:
        raise RebootCheckUnavailable(f"{NEEDS_RESTARTING} failed: {e}") from e
    processes = [line for line in result.stdout.splitlines() if line.strip()]
    return RebootStatus.from_bool(len(processes) > 0)


def _check_el7_plus() -> RebootStatus:
    # -r exits 0 when no reboot is needed and 1 when one is
    path = _needs_restarting_path()
    try:
        run_command([path, "-r"], NEEDS_RESTARTING)
    except CommandExecutionError as e:
        if e.returncode == 127:
            raise RebootCheckUnavailable(f"{NEEDS_RESTARTING} could not be started: {e}") from e
        return RebootStatus.TRUE
    return RebootStatus.FALSE


def check_reboot(identity: OsIdentity, root: Path = Path("/")) -> RebootStatus:
    """
    Decide whether the host needs a reboot.

    Args:
        identity: Normalized OS identity
        root: Filesystem root for the Debian reboot marker file

    Returns:
        RebootStatus; UNKNOWN when no reliable mechanism exists or the
        advisory tool is missing
    """
    if identity.family == "debian":
        return RebootStatus.from_bool(host_path(root, REBOOT_REQUIRED_FILE).exists())

    if identity.major <= 5:
        logger.debug(f"No reboot check available for {identity}")
        return RebootStatus.UNKNOWN

    try:
        if identity.major == 6:
            status = _check_el6()
        else:
            status = _check_el7_plus()
    except RebootCheckUnavailable as e:
        logger.info(f"Reboot status unknown: {e}")
        return RebootStatus.UNKNOWN

    logger.debug(f"Reboot needed: {status.value}")
    return status
