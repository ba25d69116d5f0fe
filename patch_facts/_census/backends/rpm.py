"""YUM and DNF backends for RHEL, CentOS and Rocky Linux.

``check-update`` exits with 100 when updates are available and 1 on error,
so 100 is accepted as success. Security counts come from
``updateinfo list security`` and are only queried where the distribution
publishes errata; CentOS does not, so its security count stays -1.
"""

import re

from patch_facts.exceptions import CommandExecutionError, UpdateQueryFailure
from patch_facts.identity import OsIdentity
from patch_facts.tool_checks import check_tool_available
from patch_facts.utils import run_command

from ..result import UNKNOWN_COUNT, UpdateCounts

CHECK_UPDATE_RETURNCODES = (0, 100)

# RHSA-2021:1234, RLSA-2022:0001, FEDORA-EPEL-2023-5f8b6e5e1c, ...
ADVISORY_LINE = re.compile(r"^(?:[A-Z]+SA-\d{4}:\d+|FEDORA-EPEL-\d{4}-[0-9a-fA-F]+)\s")


def parse_check_update(output: str) -> int:
    """
    Count package lines in ``check-update`` output.

    Package lines have three columns (``name.arch  version  repo``). A
    ``name.arch`` too long for its column is printed alone and the remaining
    columns follow on an indented continuation line. The
    ``Obsoleting Packages`` section repeats packages already listed and is
    skipped.
    """
    count = 0
    pending: list[str] = []
    for line in output.splitlines():
        if line.startswith("Obsoleting Packages"):
            break
        fields = line.split()
        if not fields:
            pending = []
            continue
        if line[0].isspace():
            if not pending:
                continue
            fields = pending + fields
        pending = []
        if "." not in fields[0]:
            continue
        if len(fields) == 3:
            count += 1
        elif len(fields) < 3:
            pending = fields
    return count


def parse_updateinfo_security(output: str) -> int:
    """Count advisory lines in ``updateinfo list security`` output."""
    return sum(1 for line in output.splitlines() if ADVISORY_LINE.match(line))


class _RpmBackend:
    """Shared census logic for yum and dnf."""

    command = "yum"
    security_args = ["updateinfo", "list", "security"]

    @property
    def name(self) -> str:
        return self.command

    def refresh(self) -> None:
        try:
            run_command([self.command, "-q", "clean", "expire-cache"], f"{self.command} clean")
            run_command([self.command, "-q", "makecache"], f"{self.command} makecache")
        except CommandExecutionError as e:
            raise UpdateQueryFailure(f"{self.command} cache refresh failed: {e}") from e

    def count_updates(self, errata_support: bool) -> UpdateCounts:
        counts = UpdateCounts()
        errors = []

        try:
            result = run_command(
                [self.command, "-q", "check-update"],
                f"{self.command} check-update",
                ok_returncodes=CHECK_UPDATE_RETURNCODES,
            )
            counts.all_updates = parse_check_update(result.stdout)
        except CommandExecutionError as e:
            errors.append(str(e))
            if e.stdout:
                counts.all_updates = parse_check_update(e.stdout)

        if errata_support:
            try:
                result = run_command(
                    [self.command, "-q", *self.security_args],
                    f"{self.command} updateinfo",
                )
                counts.security_updates = parse_updateinfo_security(result.stdout)
            except CommandExecutionError as e:
                errors.append(str(e))
                if e.stdout:
                    counts.security_updates = parse_updateinfo_security(e.stdout)
        else:
            counts.security_updates = UNKNOWN_COUNT

        if errors:
            raise UpdateQueryFailure("; ".join(errors), partial=counts)
        return counts


class YumBackend(_RpmBackend):
    """Update census via yum; the fallback for every RHEL-family release."""

    command = "yum"
    security_args = ["updateinfo", "list", "security"]

    @property
    def priority(self) -> int:
        return 20

    def supports(self, identity: OsIdentity) -> bool:
        return identity.family == "redhat"


class DnfBackend(_RpmBackend):
    """Update census via dnf on RHEL-family 8 and later."""

    command = "dnf"
    security_args = ["updateinfo", "list", "--security"]

    @property
    def priority(self) -> int:
        return 10

    def supports(self, identity: OsIdentity) -> bool:
        if identity.family != "redhat" or identity.major < 8:
            return False
        available, _ = check_tool_available(self.command)
        return available
