"""Update census plugin architecture.

Counts outstanding package updates through one of several package-manager
backends, chosen by priority for the identified system.

Usage:
    from patch_facts._census import take_census

    result = take_census(identity, eol=False)
    print(result.all_updates, result.security_updates, result.os_updates_broken)
"""

from .backends import AptBackend, DnfBackend, YumBackend
from .census import ERRATA_SUPPORT, create_default_registry, has_errata_support, take_census
from .protocol import UpdateBackend
from .registry import BackendRegistry
from .result import UNKNOWN_COUNT, CensusResult, UpdateCounts

__all__ = [
    "UpdateBackend",
    "AptBackend",
    "DnfBackend",
    "YumBackend",
    "BackendRegistry",
    "CensusResult",
    "UpdateCounts",
    "UNKNOWN_COUNT",
    "ERRATA_SUPPORT",
    "create_default_registry",
    "has_errata_support",
    "take_census",
]
