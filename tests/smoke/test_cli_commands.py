"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work. Anything
that needs the study service runs with --offline against the bundled deck.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


def run_cli_command(command: str, stdin: str | None = None, timeout: int = 30) -> tuple[int, str, str]:
    """
    Run a CLI command and return exit code, stdout, stderr.

    Args:
        command: The command to run (after 'python -m src.cli.vocab_cli')
        stdin: Text fed to the process as user input
        timeout: Maximum time to wait

    Returns:
        Tuple of (exit_code, stdout, stderr)
    """
    full_command = f"{sys.executable} -m src.cli.vocab_cli {command}"
    env = {k: v for k, v in os.environ.items() if not k.startswith("VOCAB_")}
    env["COLUMNS"] = "120"

    result = subprocess.run(
        full_command,
        shell=True,
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        input=stdin,
        env=env,
        timeout=timeout,
    )

    return result.returncode, result.stdout, result.stderr


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self):
        """Main help should display without errors."""
        code, stdout, stderr = run_cli_command("--help")

        assert code == 0, f"Help failed: {stderr}"
        assert "vocab" in stdout.lower()
        assert "Commands" in stdout

    def test_study_help(self):
        """Study command help should list its options."""
        code, stdout, stderr = run_cli_command("study --help")

        assert code == 0, f"Study help failed: {stderr}"
        assert "--offline" in stdout
        assert "--subject" in stdout

    def test_fetch_help(self):
        """Fetch command help should work."""
        code, stdout, stderr = run_cli_command("fetch --help")

        assert code == 0, f"Fetch help failed: {stderr}"


class TestCLIHome:
    """Test home command."""

    def test_home_shows_welcome(self):
        code, stdout, stderr = run_cli_command("home")

        assert code == 0, f"Home failed: {stderr}"
        assert "Welcome to Grow My Vocab!" in stdout


class TestCLIFetch:
    """Test fetch command against the bundled deck."""

    def test_fetch_offline(self):
        code, stdout, stderr = run_cli_command("fetch --offline -n 2")

        assert code == 0, f"Fetch failed: {stderr}"
        assert "cat" in stdout
        assert "dog" in stdout
        assert "to eat" not in stdout

    def test_fetch_unknown_subject_fails_cleanly(self):
        code, stdout, stderr = run_cli_command("fetch --offline -s 999")

        assert code == 1
        assert "Unknown subject" in stdout

    def test_fetch_unreachable_service_fails_cleanly(self):
        code, stdout, stderr = run_cli_command("fetch --url http://127.0.0.1:9/gql")

        assert code == 1
        assert "Error" in stdout


class TestCLIStudy:
    """Test an interactive session fed from stdin."""

    def test_answer_then_quit(self):
        code, stdout, stderr = run_cli_command("study --offline", stdin="gato\n\nq\n")

        assert code == 0, f"Study crashed: {stderr}"
        assert "Translate: cat" in stdout
        assert "Correct!" in stdout
        assert "dog" in stdout
        assert "Session ended." in stdout

    def test_empty_answer_is_not_submitted(self):
        code, stdout, stderr = run_cli_command("study --offline", stdin="\n   \nq\n")

        assert code == 0, f"Study crashed: {stderr}"
        assert stdout.count("Type an answer first") == 2
        assert "Expected:" not in stdout

    def test_hint_then_quit(self):
        code, stdout, stderr = run_cli_command("study --offline", stdin="h\nq\n")

        assert code == 0, f"Study crashed: {stderr}"
        assert "Other Hints: feline pet" in stdout
