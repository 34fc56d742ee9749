"""
Tests for shell tool health checks.
"""

from unittest.mock import patch

from packaging.version import Version

from aidev.core.tools import (
    DEV_TOOLS,
    MINIMAL_TOOLS,
    ToolRequirement,
    check_tool,
    check_tools,
    parse_version,
)


class TestParseVersion:
    """Test version extraction."""

    def test_node_style(self):
        assert parse_version("v22.3.0") == Version("22.3.0")

    def test_embedded(self):
        assert parse_version("git version 2.45.1") == Version("2.45.1")

    def test_no_version(self):
        assert parse_version("unknown") is None
        assert parse_version("") is None


class TestCheckTool:
    """Test single tool checks."""

    def test_missing_tool(self, tmp_path):
        """Test missing tool fails with a fix hint."""
        tool = ToolRequirement("Git", "git", required=True)

        result = check_tool(tool, {"PATH": str(tmp_path)})

        assert result.passed is False
        assert result.required is True
        assert "not found" in result.message
        assert result.fix_command is not None

    def test_present_tool(self, tmp_path, make_executable):
        """Test present tool without version requirement."""
        make_executable(tmp_path, "rg")

        result = check_tool(ToolRequirement("ripgrep", "rg"), {"PATH": str(tmp_path)})

        assert result.passed is True
        assert str(tmp_path / "rg") in result.message

    @patch("aidev.core.tools.query_version", return_value="v20.11.1")
    def test_too_old(self, mock_query, tmp_path, make_executable):
        """Test minimum version is enforced."""
        make_executable(tmp_path, "node")
        tool = ToolRequirement("Node.js", "node", required=True, min_version="22")

        result = check_tool(tool, {"PATH": str(tmp_path)})

        assert result.passed is False
        assert "too old" in result.message
        assert "22+" in result.message

    @patch("aidev.core.tools.query_version", return_value="v22.3.0")
    def test_new_enough(self, mock_query, tmp_path, make_executable):
        """Test satisfied minimum version."""
        make_executable(tmp_path, "node")
        tool = ToolRequirement("Node.js", "node", required=True, min_version="22")

        result = check_tool(tool, {"PATH": str(tmp_path)})

        assert result.passed is True
        assert "22.3.0" in result.message

    @patch("aidev.core.tools.query_version", return_value=None)
    def test_unknown_version_passes(self, mock_query, tmp_path, make_executable):
        """Test unreadable version does not fail a present tool."""
        make_executable(tmp_path, "node")
        tool = ToolRequirement("Node.js", "node", min_version="22")

        result = check_tool(tool, {"PATH": str(tmp_path)})

        assert result.passed is True
        assert "version unknown" in result.message


class TestCheckTools:
    """Test variant tool sets."""

    def test_minimal_variant(self, tmp_path):
        results = check_tools("minimal", {"PATH": str(tmp_path)})

        assert [r.name for r in results] == [t.name for t in MINIMAL_TOOLS]
        assert all(not r.passed for r in results)

    def test_dev_variant_requires_node_22(self):
        node = next(t for t in DEV_TOOLS if t.command == "node")

        assert node.required is True
        assert node.min_version == "22"
