"""Result types for the update census."""

from dataclasses import dataclass

# Used for counts that are unknown: EOL systems that are never queried,
# security counts on distributions without errata, and unparseable output.
UNKNOWN_COUNT = -1


@dataclass
class UpdateCounts:
    """Outstanding update counts reported by a package manager."""

    security_updates: int = UNKNOWN_COUNT
    all_updates: int = UNKNOWN_COUNT


@dataclass
class CensusResult:
    """
    Outcome of an update census.

    Attributes:
        errata_support: Whether the distribution separates security updates
        security_updates: Outstanding security updates, or -1 if unknown
        all_updates: All outstanding updates, or -1 if unknown
        os_updates_broken: Whether refreshing or querying the package manager failed
        backend: Name of the backend that took the census, None if skipped
    """

    errata_support: bool
    security_updates: int = UNKNOWN_COUNT
    all_updates: int = UNKNOWN_COUNT
    os_updates_broken: bool = False
    backend: str | None = None

    @classmethod
    def skipped(cls, errata_support: bool) -> "CensusResult":
        """Result for a system whose package manager was not queried."""
        return cls(errata_support=errata_support)

    @classmethod
    def from_counts(
        cls,
        counts: UpdateCounts,
        errata_support: bool,
        os_updates_broken: bool,
        backend: str,
    ) -> "CensusResult":
        """Build a result from backend counts."""
        return cls(
            errata_support=errata_support,
            security_updates=counts.security_updates if errata_support else UNKNOWN_COUNT,
            all_updates=counts.all_updates,
            os_updates_broken=os_updates_broken,
            backend=backend,
        )
