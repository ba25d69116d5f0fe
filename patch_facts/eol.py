"""End-of-life resolution for an identified operating system."""

from datetime import datetime, timezone
from typing import Dict, Optional, Union

from .eol_data import EOL_TABLE, FAR_FUTURE_EPOCH
from .identity import OsIdentity
from .logging_config import logger

EpochValue = Union[int, float, str, None]


def to_instant(value: EpochValue) -> datetime:
    """
    Convert an EOL table value to an aware UTC datetime.

    Numeric strings are converted to numbers before anything is compared, so
    ``"999999999"`` sorts before ``"1719858457"``. ``None`` maps to the far
    future.

    Raises:
        ValueError: If a string value is not a number
    """
    if value is None:
        return datetime.fromtimestamp(FAR_FUTURE_EPOCH, tz=timezone.utc)
    if isinstance(value, str):
        value = float(value.strip())
    return datetime.fromtimestamp(value, tz=timezone.utc)


def _as_datetime(now: Union[datetime, int, float, None]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if isinstance(now, datetime):
        if now.tzinfo is None:
            return now.replace(tzinfo=timezone.utc)
        return now
    return datetime.fromtimestamp(now, tz=timezone.utc)


def get_eol_instant(
    identity: OsIdentity,
    table: Optional[Dict[str, Dict[str, EpochValue]]] = None,
) -> Optional[datetime]:
    """
    Return the EOL instant recorded for an identity.

    Returns:
        Aware UTC datetime, or None when the release is not listed or its
        date is not published
    """
    table = EOL_TABLE if table is None else table
    key = identity.version_key
    if not key:
        return None
    value = table.get(identity.distribution, {}).get(key)
    if value is None:
        return None
    return to_instant(value)


def resolve_eol(
    identity: OsIdentity,
    now: Union[datetime, int, float, None] = None,
    table: Optional[Dict[str, Dict[str, EpochValue]]] = None,
) -> bool:
    """
    Decide whether the identified release is end-of-life.

    Args:
        identity: Normalized OS identity
        now: Current instant (datetime or epoch seconds); defaults to now in UTC
        table: EOL table override, mainly for tests

    Returns:
        True if the release's EOL instant is before ``now``. Releases missing
        from the table are reported as not EOL.
    """
    instant = get_eol_instant(identity, table)
    if instant is None:
        logger.debug(f"No EOL date recorded for {identity}, treating as supported")
        return False

    eol = instant < _as_datetime(now)
    logger.info(f"{identity} EOL date {instant.date().isoformat()}: {'EOL' if eol else 'supported'}")
    return eol
