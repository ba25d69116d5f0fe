"""Tests for tool_checks module."""

import unittest
from unittest.mock import patch

from patch_facts.tool_checks import (
    EXTERNAL_TOOLS,
    ToolInfo,
    ToolStatus,
    check_all_tools,
    check_tool_available,
    log_tool_status,
)


class TestToolInfo(unittest.TestCase):
    def test_default_required_for(self):
        info = ToolInfo(name="Test", command="test", description="desc", install_instructions="install")
        self.assertEqual(info.required_for, [])

    def test_known_tools(self):
        self.assertEqual(set(EXTERNAL_TOOLS), {"lsb_release", "apt-get", "yum", "dnf", "needs-restarting"})
        for tool_id, info in EXTERNAL_TOOLS.items():
            self.assertEqual(info.command, tool_id)
            self.assertTrue(info.required_for)


class TestCheckToolAvailable(unittest.TestCase):
    @patch("patch_facts.tool_checks.shutil.which", return_value="/usr/bin/lsb_release")
    def test_available(self, mock_which):
        self.assertEqual(check_tool_available("lsb_release"), (True, "/usr/bin/lsb_release"))
        mock_which.assert_called_once_with("lsb_release")

    @patch("patch_facts.tool_checks.shutil.which", return_value=None)
    def test_missing(self, _mock_which):
        self.assertEqual(check_tool_available("needs-restarting"), (False, None))


class TestCheckAllTools(unittest.TestCase):
    @patch("patch_facts.tool_checks.shutil.which")
    def test_debian_host(self, mock_which):
        present = {"lsb_release": "/usr/bin/lsb_release", "apt-get": "/usr/bin/apt-get"}
        mock_which.side_effect = present.get

        statuses = check_all_tools()

        self.assertIsInstance(statuses["apt-get"], ToolStatus)
        self.assertTrue(statuses["apt-get"].available)
        self.assertEqual(statuses["apt-get"].path, "/usr/bin/apt-get")
        self.assertFalse(statuses["yum"].available)
        self.assertIs(statuses["yum"].info, EXTERNAL_TOOLS["yum"])


class TestLogToolStatus(unittest.TestCase):
    @patch("patch_facts.tool_checks.shutil.which", return_value=None)
    def test_install_hints_only_when_verbose(self, _mock_which):
        with self.assertLogs("patch_facts", level="INFO") as logs:
            log_tool_status(verbose=False)
        self.assertFalse(any("yum-utils" in line for line in logs.output))

        with self.assertLogs("patch_facts", level="INFO") as logs:
            log_tool_status(verbose=True)
        self.assertTrue(any("yum-utils" in line for line in logs.output))
        self.assertTrue(any("Missing host tools" in line for line in logs.output))
