"""Tests for the reboot advisor."""

import unittest
from pathlib import Path
from unittest.mock import patch

from patch_facts.exceptions import CommandExecutionError
from patch_facts.identity import OsIdentity
from patch_facts.reboot import RebootStatus, check_reboot

NEEDS_RESTARTING = "/usr/bin/needs-restarting"


class TestDebianFamily:
    def test_marker_file_present(self, host_root):
        host_root.write("/var/run/reboot-required", "*** System restart required ***\n")
        assert check_reboot(OsIdentity("ubuntu", "16", "xenial"), host_root.path) is RebootStatus.TRUE

    def test_marker_file_absent(self, host_root):
        assert check_reboot(OsIdentity("debian", "10", "buster"), host_root.path) is RebootStatus.FALSE


@patch("patch_facts.reboot.check_tool_available", return_value=(True, NEEDS_RESTARTING))
class TestRedHatFamily(unittest.TestCase):
    """needs-restarting drives the verdict on RHEL 6 and later."""

    root = Path("/nonexistent")

    @patch("patch_facts.reboot.run_command")
    def test_el7_exit_zero_means_no_reboot(self, mock_run, _mock_which):
        status = check_reboot(OsIdentity("centos", "7"), self.root)

        self.assertIs(status, RebootStatus.FALSE)
        mock_run.assert_called_once_with([NEEDS_RESTARTING, "-r"], "needs-restarting")

    @patch("patch_facts.reboot.run_command")
    def test_el7_nonzero_means_reboot(self, mock_run, _mock_which):
        mock_run.side_effect = CommandExecutionError("needs-restarting exited with code 1", returncode=1)
        self.assertIs(check_reboot(OsIdentity("rhel", "8"), self.root), RebootStatus.TRUE)

    @patch("patch_facts.reboot.run_command")
    def test_el7_tool_cannot_start(self, mock_run, _mock_which):
        mock_run.side_effect = CommandExecutionError("needs-restarting could not be started", returncode=127)
        self.assertIs(check_reboot(OsIdentity("rocky", "9"), self.root), RebootStatus.UNKNOWN)

    @patch("patch_facts.reboot.run_command")
    def test_el6_lists_processes(self, mock_run, _mock_which):
        mock_run.return_value.stdout = "1234 : /usr/sbin/sshd\n5678 : /sbin/rsyslogd -i /var/run/syslogd.pid\n"
        self.assertIs(check_reboot(OsIdentity("rhel", "6", "santiago"), self.root), RebootStatus.TRUE)
        mock_run.assert_called_once_with([NEEDS_RESTARTING], "needs-restarting")

    @patch("patch_facts.reboot.run_command")
    def test_el6_empty_output(self, mock_run, _mock_which):
        mock_run.return_value.stdout = "\n"
        self.assertIs(check_reboot(OsIdentity("centos", "6"), self.root), RebootStatus.FALSE)

    @patch("patch_facts.reboot.run_command")
    def test_el6_failure_is_unknown(self, mock_run, _mock_which):
        mock_run.side_effect = CommandExecutionError("needs-restarting exited with code 1", returncode=1)
        self.assertIs(check_reboot(OsIdentity("centos", "6"), self.root), RebootStatus.UNKNOWN)

    @patch("patch_facts.reboot.run_command")
    def test_el5_has_no_check(self, mock_run, _mock_which):
        self.assertIs(check_reboot(OsIdentity("rhel", "5", "tikanga"), self.root), RebootStatus.UNKNOWN)
        mock_run.assert_not_called()


@patch("patch_facts.reboot.run_command")
@patch("patch_facts.reboot.check_tool_available", return_value=(False, None))
def test_missing_needs_restarting_is_unknown(_mock_which, mock_run):
    assert check_reboot(OsIdentity("rhel", "7", "maipo")) is RebootStatus.UNKNOWN
    mock_run.assert_not_called()


def test_status_serializes_as_value():
    assert RebootStatus.from_bool(True).value == "true"
    assert RebootStatus.from_bool(False).value == "false"
    assert RebootStatus.UNKNOWN == "unknown"
