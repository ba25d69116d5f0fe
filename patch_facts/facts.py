"""Fact assembly: combine the component verdicts into one PatchFacts record."""

from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from ._census import CensusResult
from .exceptions import FileProcessingError
from .reboot import RebootStatus
from .utils import host_path

SECONDS_PER_DAY = 86400
PROC_UPTIME = "/proc/uptime"


@dataclass(frozen=True)
class PatchFacts:
    """The patch-posture fact record."""

    eol: bool
    errata_support: bool
    security_updates: int
    all_updates: int
    os_updates_broken: bool
    needs_reboot: RebootStatus
    uptime_days: int
    date_collected: str

    def to_fact_dict(self) -> Dict[str, str]:
        """
        Render the record the way the fact consumer expects it: every value
        a string, booleans lower-cased.
        """
        rendered: Dict[str, str] = {}
        for key, value in asdict(self).items():
            if isinstance(value, RebootStatus):
                rendered[key] = value.value
            elif isinstance(value, bool):
                rendered[key] = "true" if value else "false"
            else:
                rendered[key] = str(value)
        return rendered


def uptime_days_from_seconds(seconds: float) -> int:
    """Whole days of uptime, floored: 86399s is 0 days, 86400s is 1 day."""
    return max(int(seconds), 0) // SECONDS_PER_DAY


def read_uptime_seconds(root: Path = Path("/")) -> float:
    """
    Read seconds since boot from ``/proc/uptime``.

    Raises:
        FileProcessingError: If the file is missing or malformed
    """
    path = host_path(root, PROC_UPTIME)
    try:
        return float(path.read_text().split()[0])
    except (OSError, IndexError, ValueError) as e:
        raise FileProcessingError(f"Could not read uptime from {path}: {e}")


def format_collection_date(now: Optional[datetime] = None) -> str:
    """ISO-8601 local time with minute precision and offset, e.g. ``2021-04-18T10:15+02:00``."""
    now = now or datetime.now()
    if now.tzinfo is None:
        now = now.astimezone()
    return now.isoformat(timespec="minutes")


def assemble_facts(
    eol: bool,
    census: CensusResult,
    needs_reboot: RebootStatus,
    uptime_seconds: float,
    now: Optional[datetime] = None,
) -> PatchFacts:
    """Build the fact record from the component results."""
    return PatchFacts(
        eol=eol,
        errata_support=census.errata_support,
        security_updates=census.security_updates,
        all_updates=census.all_updates,
        os_updates_broken=census.os_updates_broken,
        needs_reboot=needs_reboot,
        uptime_days=uptime_days_from_seconds(uptime_seconds),
        date_collected=format_collection_date(now),
    )
