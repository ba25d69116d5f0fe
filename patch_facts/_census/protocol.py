"""UpdateBackend protocol for package-manager census plugins."""

from typing import Protocol

from patch_facts.identity import OsIdentity

from .result import UpdateCounts


class UpdateBackend(Protocol):
    """
    Protocol defining the interface for package-manager backends.

    Each backend wraps one package manager. Backends have priorities -
    lower numbers are tried first - so a more specific backend (dnf on
    RHEL 8+) can take precedence over a generic one (yum).

    Example:
        class AptBackend:
            name = "apt"
            priority = 10

            def supports(self, identity: OsIdentity) -> bool:
                return identity.family == "debian"
            ...
    """

    @property
    def name(self) -> str:
        """Human-readable backend name used in log messages."""
        ...

    @property
    def priority(self) -> int:
        """Priority of this backend (lower = higher priority)."""
        ...

    def supports(self, identity: OsIdentity) -> bool:
        """Return True if this backend can take the census on the given system."""
        ...

    def refresh(self) -> None:
        """
        Clear and refresh the package-manager cache.

        Raises:
            UpdateQueryFailure: If the refresh fails
        """
        ...

    def count_updates(self, errata_support: bool) -> UpdateCounts:
        """
        Count outstanding updates.

        Args:
            errata_support: Whether security updates can be told apart; when
                False the security count is the -1 sentinel and is not queried

        Returns:
            UpdateCounts

        Raises:
            UpdateQueryFailure: If a query fails; ``partial`` holds the
                counts that could still be parsed
        """
        ...
