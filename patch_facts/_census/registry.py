"""Backend registry for the update census."""

from typing import Any, Dict, List, Optional

from patch_facts.identity import OsIdentity
from patch_facts.logging_config import logger

from .protocol import UpdateBackend


class BackendRegistry:
    """
    Registry for package-manager backends.

    Example:
        registry = BackendRegistry()
        registry.register(AptBackend())
        registry.register(YumBackend())

        backend = registry.get_backend_for(identity)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._backends: List[UpdateBackend] = []

    def register(self, backend: UpdateBackend) -> None:
        """Register a backend."""
        self._backends.append(backend)
        logger.debug(f"Registered update backend: {backend.name} (priority={backend.priority})")

    def get_backends_for(self, identity: OsIdentity) -> List[UpdateBackend]:
        """Get all backends supporting an identity, sorted by priority."""
        applicable = [b for b in self._backends if b.supports(identity)]
        return sorted(applicable, key=lambda b: b.priority)

    def get_backend_for(self, identity: OsIdentity) -> Optional[UpdateBackend]:
        """Get the highest-priority backend supporting an identity, or None."""
        backends = self.get_backends_for(identity)
        return backends[0] if backends else None

    def list_backends(self) -> List[Dict[str, Any]]:
        """List all registered backends with their priorities."""
        return [{"name": b.name, "priority": b.priority} for b in sorted(self._backends, key=lambda b: b.priority)]

    def clear(self) -> None:
        """Remove all registered backends."""
        self._backends.clear()
