"""Tests for fact serialization, validation and the fact file."""

import json
import os
import stat
from dataclasses import replace
from unittest.mock import patch

import pytest

from patch_facts.exceptions import FactValidationError, FileProcessingError
from patch_facts.facts import PatchFacts
from patch_facts.reboot import RebootStatus
from patch_facts.serialization import fact_file_path, serialize_facts, write_fact_file
from patch_facts.validation import validate_fact_data

FACTS = PatchFacts(
    eol=False,
    errata_support=True,
    security_updates=2,
    all_updates=7,
    os_updates_broken=False,
    needs_reboot=RebootStatus.UNKNOWN,
    uptime_days=12,
    date_collected="2021-04-18T10:15+02:00",
)


class TestSerializeFacts:
    def test_single_line_json(self):
        content = serialize_facts(FACTS)

        assert content.endswith("\n")
        assert content.count("\n") == 1
        assert json.loads(content) == {
            "eol": "false",
            "errata_support": "true",
            "security_updates": "2",
            "all_updates": "7",
            "os_updates_broken": "false",
            "needs_reboot": "unknown",
            "uptime_days": "12",
            "date_collected": "2021-04-18T10:15+02:00",
        }

    def test_invalid_count_rejected(self):
        with pytest.raises(FactValidationError):
            serialize_facts(replace(FACTS, all_updates=-2))

    def test_invalid_date_rejected(self):
        with pytest.raises(FactValidationError):
            serialize_facts(replace(FACTS, date_collected="2021-04-18 10:15"))


class TestValidation:
    def test_valid_record(self):
        assert validate_fact_data(FACTS.to_fact_dict()).valid

    def test_missing_key(self):
        data = FACTS.to_fact_dict()
        del data["needs_reboot"]
        result = validate_fact_data(data)
        assert not result.valid
        assert "needs_reboot" in result.error_message

    def test_extra_key(self):
        data = FACTS.to_fact_dict()
        data["kernel"] = "5.10"
        assert not validate_fact_data(data).valid

    def test_non_string_value(self):
        data = FACTS.to_fact_dict()
        data["uptime_days"] = 12
        result = validate_fact_data(data)
        assert not result.valid
        assert result.error_path == "uptime_days"


class TestWriteFactFile:
    def test_writes_file(self, tmp_path):
        facts_dir = tmp_path / "facts.d"

        path = write_fact_file(FACTS, facts_dir, "os_patch_status")

        assert path == facts_dir / "os_patch_status.fact"
        assert json.loads(path.read_text())["security_updates"] == "2"
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o644
        assert [p.name for p in facts_dir.iterdir()] == ["os_patch_status.fact"]

    def test_replaces_previous_file(self, tmp_path):
        write_fact_file(FACTS, tmp_path, "os_patch_status")
        path = write_fact_file(replace(FACTS, all_updates=0, security_updates=0), tmp_path, "os_patch_status")

        assert json.loads(path.read_text())["all_updates"] == "0"

    def test_invalid_record_writes_nothing(self, tmp_path):
        path = fact_file_path(tmp_path, "os_patch_status")
        path.write_text("previous\n")

        with pytest.raises(FactValidationError):
            write_fact_file(replace(FACTS, uptime_days=-1), tmp_path, "os_patch_status")

        assert path.read_text() == "previous\n"

    def test_failed_rename_cleans_up(self, tmp_path):
        with patch("patch_facts.serialization.os.replace", side_effect=OSError("read-only file system")):
            with pytest.raises(FileProcessingError):
                write_fact_file(FACTS, tmp_path, "os_patch_status")

        assert list(tmp_path.iterdir()) == []

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "facts.d"
        blocker.write_text("not a directory")

        with pytest.raises(FileProcessingError):
            write_fact_file(FACTS, blocker, "os_patch_status")
