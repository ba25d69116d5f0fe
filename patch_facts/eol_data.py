"""End-of-life data for the supported Linux distributions.

Each entry maps a release key to the instant (Unix epoch seconds, UTC) after
which the release no longer receives vendor updates:

- Debian and Ubuntu are keyed by codename.
- RHEL, CentOS and Rocky Linux are keyed by major version.

Value conventions:
- ``0``: the release is known to be EOL but its date was never recorded. It is
  an already-elapsed instant, not a live date.
- ``None``: the date is not published yet. Treated as far future (never EOL).

Releases missing from the table are not EOL. New releases are added here as
data; the resolver does not change.

Data last updated: 2026-10-01
"""

from typing import Dict, Optional

EOL_TABLE_VERSION = "2026-10-01"

# Stands in for "None" during comparisons
FAR_FUTURE_EPOCH = 253402300799  # 9999-12-31T23:59:59Z

ELAPSED_SENTINEL_EPOCH = 0


# =============================================================================
# EOL_TABLE
# =============================================================================
#
# Sources and the support phase used as "EOL" are documented per distro below.

EOL_TABLE: Dict[str, Dict[str, Optional[int]]] = {
    # -------------------------------------------------------------------------
    # Debian
    # Source: https://wiki.debian.org/LTS
    # Note: EOL is the end of Long Term Support, after which the archive stops
    # receiving security updates.
    # -------------------------------------------------------------------------
    "debian": {
        "etch": ELAPSED_SENTINEL_EPOCH,
        "lenny": ELAPSED_SENTINEL_EPOCH,
        "squeeze": 1456704000,  # 2016-02-29
        "wheezy": 1527724800,  # 2018-05-31
        "jessie": 1593475200,  # 2020-06-30
        "stretch": 1656547200,  # 2022-06-30
        "buster": 1719705600,  # 2024-06-30
        "bullseye": 1788134400,  # 2026-08-31
        "bookworm": 1845936000,  # 2028-06-30
        "trixie": 1909008000,  # 2030-06-30
    },
    # -------------------------------------------------------------------------
    # Ubuntu
    # Source: https://ubuntu.com/about/release-cycle
    # Note: EOL is the end of standard security maintenance. Expanded Security
    # Maintenance (ESM) needs a subscription and is not counted.
    # -------------------------------------------------------------------------
    "ubuntu": {
        "hardy": ELAPSED_SENTINEL_EPOCH,
        "lucid": 1430352000,  # 2015-04-30
        "precise": 1493337600,  # 2017-04-28
        "trusty": 1556150400,  # 2019-04-25
        "xenial": 1619740800,  # 2021-04-30
        "bionic": 1685491200,  # 2023-05-31
        "focal": 1748476800,  # 2025-05-29
        "groovy": 1626912000,  # 2021-07-22
        "hirsute": 1642636800,  # 2022-01-20
        "impish": 1657756800,  # 2022-07-14
        "jammy": 1811808000,  # 2027-06-01, month precision upstream
        "kinetic": 1689811200,  # 2023-07-20
        "lunar": 1706140800,  # 2024-01-25
        "mantic": 1720656000,  # 2024-07-11
        "noble": 1874880000,  # 2029-05-31
        "oracular": 1752105600,  # 2025-07-10
        "plucky": 1768435200,  # 2026-01-15
        "questing": None,  # Not captured yet
    },
    # -------------------------------------------------------------------------
    # Red Hat Enterprise Linux
    # Source: https://access.redhat.com/support/policy/updates/errata
    # Note: EOL is the end of the Maintenance Support phase. Extended Life
    # Cycle Support is a paid add-on and is not counted.
    # -------------------------------------------------------------------------
    "rhel": {
        "4": ELAPSED_SENTINEL_EPOCH,
        "5": 1490918400,  # 2017-03-31
        "6": 1606694400,  # 2020-11-30
        "7": 1719705600,  # 2024-06-30
        "8": 1874880000,  # 2029-05-31
        "9": 1969574400,  # 2032-05-31
        "10": 2064182400,  # 2035-05-31
    },
    # -------------------------------------------------------------------------
    # CentOS Linux / CentOS Stream
    # Source: https://www.centos.org/centos-linux-eol/
    #         https://www.centos.org/cl-vs-cs/
    # Note: CentOS 8 ended early when the project moved to Stream. Major 9 is
    # CentOS Stream 9.
    # -------------------------------------------------------------------------
    "centos": {
        "4": ELAPSED_SENTINEL_EPOCH,
        "5": 1490918400,  # 2017-03-31
        "6": 1606694400,  # 2020-11-30
        "7": 1719705600,  # 2024-06-30
        "8": 1640908800,  # 2021-12-31
        "9": 1811721600,  # 2027-05-31
    },
    # -------------------------------------------------------------------------
    # Rocky Linux
    # Source: https://docs.rockylinux.org/
    # Note: EOL is the end of security support.
    # -------------------------------------------------------------------------
    "rocky": {
        "8": 1874880000,  # 2029-05-31
        "9": 1969574400,  # 2032-05-31
        "10": 2064182400,  # 2035-05-31
    },
}


def has_entry(distribution: str, version_key: Optional[str]) -> bool:
    """Return True if the table lists the release, even with an unknown date."""
    return bool(version_key) and version_key in EOL_TABLE.get(distribution, {})
