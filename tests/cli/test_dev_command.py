"""
Tests for the dev command.
"""

from unittest.mock import patch

from aidev.cli.parser import CLI
from aidev.core.exceptions import ShellLaunchError


def run_cli(project_dir, *args):
    return CLI().run(["--project-root", str(project_dir), *args])


class TestDevCommand:
    """Test `aidev dev`."""

    def test_no_shell(self, isolated_cli_env, project_dir, capsys):
        """Test bootstrap without entering a shell."""
        assert run_cli(project_dir, "dev", "--no-shell", "--skip-install") == 0

        out = capsys.readouterr().out
        assert "Creating template .env file..." in out
        assert "AI Development Environment Ready" in out
        assert "⚠️ Warning: OPENAI_API_KEY not set in .env or .env.local" in out
        assert (project_dir / ".claude" / "settings.json").is_file()
        assert (isolated_cli_env / ".npm-global" / "bin").is_dir()

    def test_print_env(self, isolated_cli_env, project_dir, capsys):
        """Test activation script on stdout, status on stderr."""
        (project_dir / ".env").write_text('OPENAI_API_KEY="sk live"\n')

        assert run_cli(project_dir, "dev", "--print-env", "--skip-install") == 0

        captured = capsys.readouterr()
        assert captured.out.startswith("# aidev dev environment for")
        assert "export OPENAI_API_KEY='sk live'" in captured.out
        prefix = isolated_cli_env / ".npm-global"
        assert f"export NPM_CONFIG_PREFIX={prefix}" in captured.out
        assert "Environment ready!" in captured.err
        assert "Environment ready!" not in captured.out

    @patch("aidev.cli.commands.session.enter_shell")
    def test_enters_shell(self, mock_enter, isolated_cli_env, project_dir):
        """Test the default path hands the session environment to a shell."""
        (project_dir / ".env.local").write_text("OPENAI_API_KEY=sk-real\n")

        assert run_cli(project_dir, "dev", "--skip-install") == 0

        env, root = mock_enter.call_args[0]
        assert env["OPENAI_API_KEY"] == "sk-real"
        assert env["NPM_CONFIG_PREFIX"] == str(isolated_cli_env / ".npm-global")
        assert root == project_dir.resolve()

    def test_invalid_config(self, isolated_cli_env, project_dir, capsys):
        (project_dir / "aidev.yaml").write_text("unknown_key: 1\n")

        assert run_cli(project_dir, "dev", "--no-shell") == 1
        assert "Failed to load configuration" in capsys.readouterr().err
        assert not (project_dir / ".env").exists()

    def test_missing_project_root(self, isolated_cli_env, tmp_path, capsys):
        assert run_cli(tmp_path / "missing", "dev", "--no-shell") == 1
        assert "Project root is not a directory" in capsys.readouterr().err

    def test_explicit_config(self, isolated_cli_env, project_dir, tmp_path, capsys):
        config = tmp_path / "team.yaml"
        config.write_text(f"install_prefix: {tmp_path / 'tools'}\napi_keys: [TEAM_KEY]\n")

        result = CLI().run(
            [
                "--project-root",
                str(project_dir),
                "--config",
                str(config),
                "dev",
                "--no-shell",
                "--skip-install",
            ]
        )

        assert result == 0
        assert (tmp_path / "tools" / "bin").is_dir()
        assert (project_dir / ".env").read_text().endswith("TEAM_KEY=your-key-here\n")
        assert "TEAM_KEY not set" in capsys.readouterr().out

    @patch(
        "aidev.cli.commands.session.Bootstrapper.run",
        side_effect=PermissionError("Permission denied: '.claude'"),
    )
    def test_filesystem_error(self, mock_run, isolated_cli_env, project_dir, capsys):
        """Test permission errors become an error line and exit code 1."""
        assert run_cli(project_dir, "dev", "--no-shell") == 1

        err = capsys.readouterr().err
        assert "ERROR: Failed to bootstrap environment" in err
        assert "Permission denied" in err

    @patch(
        "aidev.cli.commands.session.enter_shell",
        side_effect=ShellLaunchError("Failed to start shell /bin/nope: not found"),
    )
    def test_shell_launch_failure(self, mock_enter, isolated_cli_env, project_dir, capsys):
        assert run_cli(project_dir, "dev", "--skip-install") == 1
        assert "ERROR: Failed to start shell" in capsys.readouterr().err
