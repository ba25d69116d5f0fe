"""Tests for fact assembly."""

from datetime import datetime, timedelta, timezone

import pytest

from patch_facts._census import CensusResult
from patch_facts.exceptions import FileProcessingError
from patch_facts.facts import (
    PatchFacts,
    assemble_facts,
    format_collection_date,
    read_uptime_seconds,
    uptime_days_from_seconds,
)
from patch_facts.reboot import RebootStatus

CEST = timezone(timedelta(hours=2))
NOW = datetime(2021, 4, 18, 10, 15, 42, tzinfo=CEST)


class TestUptime:
    @pytest.mark.parametrize(
        "seconds,days",
        [(0, 0), (86399, 0), (86399.99, 0), (86400, 1), (86400 * 45 + 12.5, 45)],
    )
    def test_days_are_floored(self, seconds, days):
        assert uptime_days_from_seconds(seconds) == days

    def test_negative_clamped(self):
        assert uptime_days_from_seconds(-5) == 0

    def test_read_proc_uptime(self, host_root):
        host_root.write("/proc/uptime", "350735.47 234388.90\n")
        assert read_uptime_seconds(host_root.path) == pytest.approx(350735.47)

    def test_missing_proc_uptime(self, host_root):
        with pytest.raises(FileProcessingError):
            read_uptime_seconds(host_root.path)

    def test_malformed_proc_uptime(self, host_root):
        host_root.write("/proc/uptime", "\n")
        with pytest.raises(FileProcessingError):
            read_uptime_seconds(host_root.path)


class TestCollectionDate:
    def test_minute_precision_with_offset(self):
        assert format_collection_date(NOW) == "2021-04-18T10:15+02:00"

    def test_utc(self):
        assert format_collection_date(datetime(2021, 1, 2, 3, 4, tzinfo=timezone.utc)) == "2021-01-02T03:04+00:00"

    def test_naive_gets_local_offset(self):
        rendered = format_collection_date(datetime(2021, 1, 2, 3, 4))
        assert rendered.startswith("2021-01-02T03:04")
        assert rendered[16] in "+-Z"


class TestAssembleFacts:
    def test_healthy_host(self):
        census = CensusResult(errata_support=True, security_updates=2, all_updates=7, backend="apt")

        facts = assemble_facts(False, census, RebootStatus.TRUE, 86400 * 3 + 10, NOW)

        assert facts == PatchFacts(
            eol=False,
            errata_support=True,
            security_updates=2,
            all_updates=7,
            os_updates_broken=False,
            needs_reboot=RebootStatus.TRUE,
            uptime_days=3,
            date_collected="2021-04-18T10:15+02:00",
        )

    def test_eol_host(self):
        facts = assemble_facts(True, CensusResult.skipped(errata_support=False), RebootStatus.UNKNOWN, 10, NOW)

        assert facts.to_fact_dict() == {
            "eol": "true",
            "errata_support": "false",
            "security_updates": "-1",
            "all_updates": "-1",
            "os_updates_broken": "false",
            "needs_reboot": "unknown",
            "uptime_days": "0",
            "date_collected": "2021-04-18T10:15+02:00",
        }

    def test_every_value_is_a_string(self):
        census = CensusResult(errata_support=True, security_updates=0, all_updates=0, os_updates_broken=True)
        rendered = assemble_facts(False, census, RebootStatus.FALSE, 0, NOW).to_fact_dict()

        assert all(isinstance(value, str) for value in rendered.values())
        assert rendered["os_updates_broken"] == "true"
        assert rendered["needs_reboot"] == "false"
