"""Package-manager backends for the update census."""

from .apt import AptBackend
from .rpm import DnfBackend, YumBackend

__all__ = ["AptBackend", "DnfBackend", "YumBackend"]
