"""Availability checks for the host tools patch-facts shells out to.

None of these tools is strictly required: identification falls back to
``/etc/os-release`` when ``lsb_release`` is missing, and the reboot check
reports ``unknown`` without ``needs-restarting``. Missing tools are logged
with install hints so operators can close the gaps.
"""

import shutil
from dataclasses import dataclass, field
from typing import Optional

from .logging_config import logger


@dataclass
class ToolInfo:
    """Information about an external tool."""

    name: str
    command: str
    description: str
    install_instructions: str
    required_for: list[str] = field(default_factory=list)


EXTERNAL_TOOLS: dict[str, ToolInfo] = {
    "lsb_release": ToolInfo(
        name="lsb_release",
        command="lsb_release",
        description="Standard release-metadata query tool",
        install_instructions=(
            "Install via package manager:\n"
            "  - Debian/Ubuntu: apt-get install lsb-release\n"
            "  - RHEL/CentOS 7: yum install redhat-lsb-core"
        ),
        required_for=["Distribution identification (primary source)"],
    ),
    "apt-get": ToolInfo(
        name="APT",
        command="apt-get",
        description="Debian/Ubuntu package manager",
        install_instructions="Ships with every Debian and Ubuntu installation",
        required_for=["Update census on Debian and Ubuntu"],
    ),
    "yum": ToolInfo(
        name="YUM",
        command="yum",
        description="RHEL-family package manager",
        install_instructions="Ships with RHEL, CentOS and Rocky Linux",
        required_for=["Update census on RHEL, CentOS and Rocky Linux"],
    ),
    "dnf": ToolInfo(
        name="DNF",
        command="dnf",
        description="RHEL 8+ package manager",
        install_instructions="Ships with RHEL, CentOS and Rocky Linux 8 and later",
        required_for=["Update census on RHEL-family 8 and later"],
    ),
    "needs-restarting": ToolInfo(
        name="needs-restarting",
        command="needs-restarting",
        description="Reports processes or a kernel that need a restart after updates",
        install_instructions=(
            "Install via package manager:\n"
            "  - RHEL/CentOS 6-7: yum install yum-utils\n"
            "  - RHEL/Rocky 8+: dnf install dnf-utils"
        ),
        required_for=["Reboot check on RHEL-family systems"],
    ),
}


@dataclass
class ToolStatus:
    """Status of an external tool."""

    name: str
    available: bool
    path: Optional[str] = None
    info: Optional[ToolInfo] = None


def check_tool_available(command: str) -> tuple[bool, Optional[str]]:
    """
    Check if a command-line tool is available on the system.

    Args:
        command: The command to check (e.g., "lsb_release", "dnf")

    Returns:
        Tuple of (is_available, path_if_found)
    """
    path = shutil.which(command)
    return (path is not None, path)


def check_all_tools() -> dict[str, ToolStatus]:
    """
    Check availability of all external tools.

    Returns:
        Dictionary mapping tool commands to their status
    """
    results = {}
    for tool_id, info in EXTERNAL_TOOLS.items():
        available, path = check_tool_available(info.command)
        results[tool_id] = ToolStatus(name=info.name, available=available, path=path, info=info)
    return results


def log_tool_status(verbose: bool = False) -> None:
    """
    Log the status of all external tools.

    Args:
        verbose: If True, show installation instructions for missing tools
    """
    statuses = check_all_tools()
    available = [s for s in statuses.values() if s.available]
    missing = [s for s in statuses.values() if not s.available]

    if available:
        logger.info(f"Available host tools: {', '.join(s.name for s in available)}")

    if missing:
        # Only one package manager family exists on any host
        logger.info(f"Missing host tools: {', '.join(s.name for s in missing)}")
        if verbose:
            for status in missing:
                if status.info:
                    logger.info(f"{status.info.name}: {status.info.description}")
                    for line in status.info.install_instructions.split("\n"):
                        logger.info(f"  {line}")
