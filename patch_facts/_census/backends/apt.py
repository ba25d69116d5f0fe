"""APT backend for Debian and Ubuntu.

The cache is cleaned and refreshed on every run so that a host with broken
APT sources, a common cause of silent patch logjams, is reported as broken
instead of quietly reporting stale counts.

Counts come from update-notifier's ``apt-check`` when installed (Ubuntu),
which prints ``<all>;<security>`` to stderr. Otherwise ``apt-get -s upgrade``
is simulated and its ``Inst`` lines counted, treating lines that mention a
security pocket as security updates.
"""

from pathlib import Path
from typing import Optional

from patch_facts.exceptions import CommandExecutionError, UpdateQueryFailure
from patch_facts.identity import OsIdentity
from patch_facts.logging_config import logger
from patch_facts.utils import host_path, run_command

from ..result import UNKNOWN_COUNT, UpdateCounts

APT_CHECK = "/usr/lib/update-notifier/apt-check"


def parse_apt_check(output: str) -> Optional[UpdateCounts]:
    """
    Parse ``apt-check`` output of the form ``"<all>;<security>"``.

    Returns:
        UpdateCounts, or None if the output is not in the expected form
    """
    for line in reversed(output.strip().splitlines()):
        parts = line.strip().split(";")
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            return UpdateCounts(security_updates=int(parts[1]), all_updates=int(parts[0]))
    return None


def parse_apt_simulation(output: str) -> UpdateCounts:
    """Count ``Inst`` lines from ``apt-get -s upgrade``, and those from a security pocket."""
    inst_lines = [line for line in output.splitlines() if line.startswith("Inst ")]
    security = [line for line in inst_lines if "security" in line.lower()]
    return UpdateCounts(security_updates=len(security), all_updates=len(inst_lines))


class AptBackend:
    """Update census via apt-get (and apt-check when available)."""

    def __init__(self, root: Path = Path("/")) -> None:
        self._apt_check = host_path(root, APT_CHECK)

    @property
    def name(self) -> str:
        return "apt"

    @property
    def priority(self) -> int:
        return 10

    def supports(self, identity: OsIdentity) -> bool:
        return identity.family == "debian"

    def refresh(self) -> None:
        try:
            run_command(["apt-get", "clean"], "apt-get clean")
        except CommandExecutionError as e:
            logger.debug(f"apt-get clean failed, continuing: {e}")

        try:
            run_command(["apt-get", "-qq", "update"], "apt-get update")
        except CommandExecutionError as e:
            raise UpdateQueryFailure(f"APT cache refresh failed: {e}") from e

    def count_updates(self, errata_support: bool) -> UpdateCounts:
        if self._apt_check.exists():
            return self._count_with_apt_check()
        return self._count_with_simulation()

    def _count_with_apt_check(self) -> UpdateCounts:
        try:
            result = run_command([str(self._apt_check)], "apt-check")
        except CommandExecutionError as e:
            partial = parse_apt_check(e.stderr) or UpdateCounts()
            raise UpdateQueryFailure(f"apt-check failed: {e}", partial=partial) from e

        counts = parse_apt_check(result.stderr) or parse_apt_check(result.stdout)
        if counts is None:
            raise UpdateQueryFailure(
                f"Unexpected apt-check output: {result.stderr.strip()!r}",
                partial=UpdateCounts(UNKNOWN_COUNT, UNKNOWN_COUNT),
            )
        return counts

    def _count_with_simulation(self) -> UpdateCounts:
        try:
            result = run_command(["apt-get", "-s", "upgrade"], "apt-get upgrade simulation")
        except CommandExecutionError as e:
            partial = parse_apt_simulation(e.stdout) if e.stdout else UpdateCounts()
            raise UpdateQueryFailure(f"apt-get upgrade simulation failed: {e}", partial=partial) from e
        return parse_apt_simulation(result.stdout)
