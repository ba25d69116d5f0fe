"""Update census orchestration."""

from pathlib import Path
from typing import Dict, Optional

from patch_facts.exceptions import UnsupportedSystemError, UpdateQueryFailure
from patch_facts.identity import OsIdentity
from patch_facts.logging_config import logger

from .backends import AptBackend, DnfBackend, YumBackend
from .registry import BackendRegistry
from .result import CensusResult, UpdateCounts

# Whether each distribution's repositories tell security updates apart from
# bugfixes. This is a property of the family and does not depend on EOL state.
ERRATA_SUPPORT: Dict[str, bool] = {
    "debian": True,
    "ubuntu": True,
    "rhel": True,
    "rocky": True,
    "centos": False,
}


def create_default_registry(root: Path = Path("/")) -> BackendRegistry:
    """
    Create a BackendRegistry with the default backends.

    Priority 10:
    - AptBackend: Debian and Ubuntu
    - DnfBackend: RHEL-family 8+ when dnf is installed

    Priority 20:
    - YumBackend: every RHEL-family release
    """
    registry = BackendRegistry()
    registry.register(AptBackend(root=root))
    registry.register(DnfBackend())
    registry.register(YumBackend())
    return registry


def has_errata_support(identity: OsIdentity) -> bool:
    """Return True if the distribution publishes security errata."""
    return ERRATA_SUPPORT.get(identity.distribution, False)


def take_census(
    identity: OsIdentity,
    eol: bool,
    registry: Optional[BackendRegistry] = None,
) -> CensusResult:
    """
    Count outstanding updates for the identified system.

    EOL systems are not queried at all: their repositories are assumed to be
    gone or stale, and both counts are reported as -1.

    Refresh and query failures do not abort the census. They set
    ``os_updates_broken`` and the result keeps whatever counts could be
    parsed.

    Args:
        identity: Normalized OS identity
        eol: EOL verdict from the resolver
        registry: Backend registry; defaults to create_default_registry()

    Returns:
        CensusResult

    Raises:
        UnsupportedSystemError: If no backend supports the identity
    """
    errata_support = has_errata_support(identity)

    if eol:
        logger.info(f"{identity} is end-of-life, skipping package manager queries")
        return CensusResult.skipped(errata_support=errata_support)

    registry = registry or create_default_registry()
    backend = registry.get_backend_for(identity)
    if backend is None:
        raise UnsupportedSystemError(f"No package-manager backend for {identity}")

    broken = False

    try:
        backend.refresh()
    except UpdateQueryFailure as e:
        logger.warning(f"Package cache refresh failed: {e}")
        broken = True

    try:
        counts = backend.count_updates(errata_support)
    except UpdateQueryFailure as e:
        logger.warning(f"Update query failed: {e}")
        broken = True
        counts = e.partial if isinstance(e.partial, UpdateCounts) else UpdateCounts()

    result = CensusResult.from_counts(counts, errata_support, broken, backend.name)
    logger.info(
        f"Outstanding updates via {backend.name}: all={result.all_updates}, "
        f"security={result.security_updates}, broken={result.os_updates_broken}"
    )
    return result
