"""
Tests for status reporting helpers.
"""

import subprocess
from unittest.mock import Mock, patch

from aidev.core.status import KeyCheck, KeyStatus, check_api_key, query_version


class TestCheckApiKey:
    """Test API-key classification."""

    def test_unset(self):
        """Test missing key."""
        check = check_api_key("OPENAI_API_KEY", {})

        assert check.status == KeyStatus.MISSING
        assert check.message == (
            "⚠️ Warning: OPENAI_API_KEY not set in .env or .env.local"
        )

    def test_empty_is_unset(self):
        """Test empty value counts as missing."""
        check = check_api_key("OPENAI_API_KEY", {"OPENAI_API_KEY": ""})

        assert check.status == KeyStatus.MISSING

    def test_placeholder(self):
        """Test unedited template value."""
        check = check_api_key("OPENAI_API_KEY", {"OPENAI_API_KEY": "sk-your-key-here"})

        assert check.status == KeyStatus.PLACEHOLDER
        assert check.message == (
            "⚠️ Warning: OPENAI_API_KEY appears to be a placeholder value"
        )

    def test_set(self):
        """Test real value is confirmed without being shown."""
        check = check_api_key("OPENAI_API_KEY", {"OPENAI_API_KEY": "sk-live-123"})

        assert check.status == KeyStatus.SET
        assert check.message == "✅ OPENAI_API_KEY is set"
        assert "sk-live-123" not in check.message

    def test_custom_markers(self):
        """Test configurable placeholder markers."""
        env = {"TOKEN": "changeme"}

        assert check_api_key("TOKEN", env).status == KeyStatus.SET
        assert check_api_key("TOKEN", env, ["changeme"]).status == (
            KeyStatus.PLACEHOLDER
        )

    def test_key_check_is_value_object(self):
        assert KeyCheck("A", KeyStatus.SET) == KeyCheck("A", KeyStatus.SET)


class TestQueryVersion:
    """Test tool version queries."""

    @patch("aidev.core.status.subprocess.run")
    def test_not_on_path(self, mock_run, tmp_path):
        """Test absent command is never executed."""
        assert query_version("claude", {"PATH": str(tmp_path)}) is None
        mock_run.assert_not_called()

    @patch("aidev.core.status.subprocess.run")
    def test_first_line_of_output(self, mock_run, tmp_path, make_executable):
        """Test version is the first output line."""
        exe = make_executable(tmp_path / "bin", "claude")
        mock_run.return_value = Mock(returncode=0, stdout="1.0.3\nextra\n")

        version = query_version("claude", {"PATH": str(tmp_path / "bin")})

        assert version == "1.0.3"
        cmd = mock_run.call_args[0][0]
        assert cmd == [str(exe), "--version"]

    @patch("aidev.core.status.subprocess.run")
    def test_failing_command(self, mock_run, tmp_path, make_executable):
        """Test non-zero exit yields None."""
        make_executable(tmp_path / "bin", "codex")
        mock_run.return_value = Mock(returncode=1, stdout="", stderr="boom")

        assert query_version("codex", {"PATH": str(tmp_path / "bin")}) is None

    @patch("aidev.core.status.subprocess.run", side_effect=OSError("exec format"))
    def test_os_error(self, mock_run, tmp_path, make_executable):
        """Test exec errors yield None."""
        make_executable(tmp_path / "bin", "codex")

        assert query_version("codex", {"PATH": str(tmp_path / "bin")}) is None

    @patch(
        "aidev.core.status.subprocess.run",
        side_effect=subprocess.TimeoutExpired("codex", 10),
    )
    def test_timeout(self, mock_run, tmp_path, make_executable):
        """Test hanging tools yield None."""
        make_executable(tmp_path / "bin", "codex")

        assert query_version("codex", {"PATH": str(tmp_path / "bin")}) is None
