"""Distribution identification.

Maps the host's release metadata onto a normalized ``OsIdentity``:

1. ``lsb_release`` (id, release, codename), when the tool is installed.
2. ``/etc/os-release`` as a fallback, which only identifies RHEL and Rocky.

Release text is never pattern-matched against an open-ended set of cases.
Every recognized token lives in one of the finite tables below and anything
outside them raises ``UnsupportedSystemError``.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from .exceptions import CommandExecutionError, UnsupportedSystemError
from .logging_config import logger
from .tool_checks import check_tool_available
from .utils import host_path, read_text, run_command

DEBIAN_FAMILY = frozenset({"debian", "ubuntu"})
REDHAT_FAMILY = frozenset({"rhel", "centos", "rocky"})
SUPPORTED_DISTRIBUTIONS = DEBIAN_FAMILY | REDHAT_FAMILY

# lsb_release ids (lower-cased, spaces removed) -> canonical distribution.
# Any id starting with RHEL_ID_PREFIX is handled separately.
DISTRIBUTION_ALIASES: Dict[str, str] = {
    "debian": "debian",
    "ubuntu": "ubuntu",
    "centos": "centos",
    "centosstream": "centos",
    "rocky": "rocky",
    "rockylinux": "rocky",
    "rhel": "rhel",
}
RHEL_ID_PREFIX = "redhatenterprise"

# Debian and Ubuntu are keyed by codename; the major version follows from it.
# Ubuntu interim (non-LTS) releases keep their YY.MM number.
DEBIAN_CODENAMES: Dict[str, str] = {
    "etch": "4",
    "lenny": "5",
    "squeeze": "6",
    "wheezy": "7",
    "jessie": "8",
    "stretch": "9",
    "buster": "10",
    "bullseye": "11",
    "bookworm": "12",
    "trixie": "13",
}

UBUNTU_CODENAMES: Dict[str, str] = {
    "hardy": "8",
    "lucid": "10",
    "precise": "12",
    "trusty": "14",
    "xenial": "16",
    "bionic": "18",
    "focal": "20",
    "groovy": "20.10",
    "hirsute": "21.04",
    "impish": "21.10",
    "jammy": "22",
    "kinetic": "22.10",
    "lunar": "23.04",
    "mantic": "23.10",
    "noble": "24",
    "oracular": "24.10",
    "plucky": "25.04",
    "questing": "25.10",
}

CODENAMES_BY_DISTRIBUTION: Dict[str, Dict[str, str]] = {
    "debian": DEBIAN_CODENAMES,
    "ubuntu": UBUNTU_CODENAMES,
}

# RHEL 7 and older only identify their release reliably by internal codename.
RHEL_CODENAMES: Dict[str, str] = {
    "nahant": "4",
    "tikanga": "5",
    "santiago": "6",
    "maipo": "7",
}

# CentOS labels every release "Core", so the number comes from the release file.
CENTOS_RELEASE_PATTERN = re.compile(r"\brelease (\d+)")

OS_RELEASE_FALLBACK_IDS = frozenset({"rocky", "rhel"})

RELEASE_FILES = ("/etc/redhat-release", "/etc/centos-release", "/etc/rocky-release")
OS_RELEASE_FILE = "/etc/os-release"


@dataclass(frozen=True)
class OsIdentity:
    """Normalized identity of the host operating system."""

    distribution: str
    major_version: str
    codename: Optional[str] = None

    def __post_init__(self) -> None:
        if self.distribution not in SUPPORTED_DISTRIBUTIONS:
            raise UnsupportedSystemError(f"Unsupported distribution: {self.distribution!r}")

    @property
    def family(self) -> str:
        """``"debian"`` or ``"redhat"``."""
        return "debian" if self.distribution in DEBIAN_FAMILY else "redhat"

    @property
    def major(self) -> int:
        """Leading integer of ``major_version`` (``"20.10"`` -> 20)."""
        return int(major_component(self.major_version) or 0)

    @property
    def version_key(self) -> Optional[str]:
        """Key used by the EOL table: codename for Debian/Ubuntu, major version otherwise."""
        if self.family == "debian":
            return self.codename
        return self.major_version

    def __str__(self) -> str:
        if self.codename:
            return f"{self.distribution} {self.major_version} ({self.codename})"
        return f"{self.distribution} {self.major_version}"


@dataclass
class ReleaseInfo:
    """Raw release metadata gathered from the host before interpretation."""

    lsb_id: Optional[str] = None
    lsb_release: Optional[str] = None
    lsb_codename: Optional[str] = None
    os_release: Dict[str, str] = field(default_factory=dict)
    release_text: str = ""


def major_component(version: str) -> Optional[str]:
    """Return the leading run of digits of a version string, e.g. ``"8.4"`` -> ``"8"``."""
    match = re.match(r"\s*(\d+)", version or "")
    return match.group(1) if match else None


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse ``os-release`` style ``KEY=value`` lines, dropping quotes and comments."""
    facts: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        facts[key.strip()] = value.strip().strip("\"'")
    return facts


def normalize_distribution(raw_id: str) -> str:
    """
    Map a raw distribution id onto its canonical key.

    Raises:
        UnsupportedSystemError: If the id is not a supported distribution
    """
    token = re.sub(r"\s+", "", raw_id or "").lower()
    if token.startswith(RHEL_ID_PREFIX):
        return "rhel"
    try:
        return DISTRIBUTION_ALIASES[token]
    except KeyError:
        raise UnsupportedSystemError(f"Unrecognized distribution id: {raw_id!r}")


def _lsb_query(flag: str) -> Optional[str]:
    try:
        result = run_command(["lsb_release", flag], "lsb_release")
    except CommandExecutionError as e:
        logger.debug(f"lsb_release {flag} failed: {e}")
        return None
    value = result.stdout.strip().lower()
    return value or None


def collect_release_info(root: Path = Path("/")) -> ReleaseInfo:
    """
    Gather release metadata from ``lsb_release`` and the release files under ``root``.

    Args:
        root: Filesystem root to read release files from

    Returns:
        ReleaseInfo snapshot; fields are empty when a source is unavailable
    """
    info = ReleaseInfo()

    available, _ = check_tool_available("lsb_release")
    if available:
        info.lsb_id = _lsb_query("-si")
        info.lsb_release = _lsb_query("-sr")
        info.lsb_codename = _lsb_query("-sc")
    else:
        logger.debug("lsb_release not found, falling back to /etc/os-release")

    info.os_release = parse_os_release(read_text(host_path(root, OS_RELEASE_FILE)))

    for release_file in RELEASE_FILES:
        text = read_text(host_path(root, release_file))
        if text.strip():
            info.release_text = text.strip()
            break

    return info


def _debian_identity(distribution: str, codename: Optional[str]) -> OsIdentity:
    codenames = CODENAMES_BY_DISTRIBUTION[distribution]
    if not codename or codename not in codenames:
        raise UnsupportedSystemError(f"Unrecognized {distribution} codename: {codename!r}")
    return OsIdentity(distribution=distribution, major_version=codenames[codename], codename=codename)


def _centos_identity(release_text: str) -> OsIdentity:
    match = CENTOS_RELEASE_PATTERN.search(release_text)
    if not match:
        raise UnsupportedSystemError(f"Unrecognized CentOS release string: {release_text!r}")
    return OsIdentity(distribution="centos", major_version=match.group(1))


def _rhel_identity(info: ReleaseInfo) -> OsIdentity:
    text = info.release_text.lower()
    for codename, major in RHEL_CODENAMES.items():
        if codename in text:
            return OsIdentity(distribution="rhel", major_version=major, codename=codename)

    major = major_component(info.os_release.get("VERSION_ID", "")) or major_component(info.lsb_release or "")
    if not major:
        raise UnsupportedSystemError(f"Unrecognized RHEL release: {info.release_text!r}")
    return OsIdentity(distribution="rhel", major_version=major)


def _rocky_identity(info: ReleaseInfo) -> OsIdentity:
    major = major_component(info.lsb_release or "") or major_component(info.os_release.get("VERSION_ID", ""))
    if not major:
        raise UnsupportedSystemError("Rocky Linux release number not found")
    return OsIdentity(distribution="rocky", major_version=major)


def _identify_from_lsb(info: ReleaseInfo) -> OsIdentity:
    distribution = normalize_distribution(info.lsb_id or "")

    if distribution in DEBIAN_FAMILY:
        return _debian_identity(distribution, info.lsb_codename)
    if distribution == "centos":
        return _centos_identity(info.release_text)
    if distribution == "rhel":
        return _rhel_identity(info)
    if distribution == "rocky":
        return _rocky_identity(info)
    raise UnsupportedSystemError(f"No identification rule for {distribution!r}")


def _identify_from_os_release(info: ReleaseInfo) -> OsIdentity:
    os_id = info.os_release.get("ID", "").lower()
    if os_id not in OS_RELEASE_FALLBACK_IDS:
        raise UnsupportedSystemError(f"Distribution {os_id!r} requires lsb_release for identification")

    major = major_component(info.os_release.get("VERSION_ID", ""))
    if not major:
        raise UnsupportedSystemError(f"No VERSION_ID in {OS_RELEASE_FILE} for {os_id!r}")
    return OsIdentity(distribution=os_id, major_version=major)


def identify_from(info: ReleaseInfo) -> OsIdentity:
    """
    Interpret a ReleaseInfo snapshot.

    Args:
        info: Raw release metadata

    Returns:
        Normalized OsIdentity

    Raises:
        UnsupportedSystemError: If no source identifies a supported release
    """
    if info.lsb_id:
        return _identify_from_lsb(info)
    if info.os_release:
        return _identify_from_os_release(info)
    raise UnsupportedSystemError("Neither lsb_release nor /etc/os-release identified this system")


def identify(root: Path = Path("/")) -> OsIdentity:
    """Identify the host operating system."""
    identity = identify_from(collect_release_info(root))
    logger.info(f"Identified operating system: {identity}")
    return identity
