"""
Tests for SecureAuth Lab CLI Module
"""

import json

import pytest
import yaml
from click.testing import CliRunner

from secureauthlab import __version__
from secureauthlab.cli import cli


@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated(runner, tmp_path, monkeypatch):
    """Run each command away from any config.yaml in the working tree."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_cli_help(self, runner):
        """Test that help message displays."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "SecureAuth Lab" in result.output

    def test_cli_version(self, runner):
        """Test version flag."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_cli_quiet_mode(self, runner):
        result = runner.invoke(cli, ["--quiet", "--help"])
        assert result.exit_code == 0


class TestAnalyzeCommand:
    """Tests for the analyze command."""

    def test_analyze_json(self, runner, isolated):
        result = runner.invoke(cli, ["-j", "analyze", "Tiger2024"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["detected_pattern"] == "Capitalized word + numbers"
        assert data["length"] == 9

    def test_analyze_rate_override(self, runner, isolated):
        result = runner.invoke(cli, ["-j", "analyze", "abcd", "--rate", "1000000"])

        assert result.exit_code == 0
        assert json.loads(result.output)["estimated_crack_time"] == "Instantly"

    def test_analyze_prompts_for_password(self, runner, isolated):
        result = runner.invoke(cli, ["-j", "analyze"], input="123456\n")

        assert result.exit_code == 0
        assert '"detected_pattern": "Only digits"' in result.output

    def test_analyze_table(self, runner, isolated):
        result = runner.invoke(cli, ["-q", "analyze", "Tiger2024"])

        assert result.exit_code == 0
        assert "Pre-Attack Analysis" in result.output


class TestSimulateCommand:
    """Tests for the simulate command."""

    def test_simulate_help(self, runner):
        result = runner.invoke(cli, ["simulate", "--help"])
        assert result.exit_code == 0
        assert "--no-lockout" in result.output
        assert "--max-attempts" in result.output

    def test_simulate_json(self, runner, isolated):
        result = runner.invoke(cli, ["-j", "simulate", "-p", "password", "--fast"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["headline"] == "Password Compromised"
        assert data["result"]["total_attempts"] == 1
        assert data["simulation_mode"] is True

    def test_simulate_defense_stop(self, runner, isolated):
        result = runner.invoke(cli, [
            "-j", "simulate", "-p", "Xk9#mQ2!zL", "--fast", "--no-rate-limit", "-m", "5",
        ])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["headline"] == "Password Secure"
        assert data["result"]["total_attempts"] == 5
        assert data["result"]["defenses_triggered"] == ["Maximum attempts reached"]

    def test_simulate_invalid_max_attempts(self, runner, isolated):
        result = runner.invoke(cli, ["-q", "simulate", "-p", "password", "--fast", "-m", "0"])
        assert result.exit_code == 2

    def test_simulate_markdown_output_file(self, runner, isolated):
        report_path = isolated / "reports" / "run.md"
        result = runner.invoke(cli, [
            "-q", "simulate", "-p", "Tiger2024", "--fast", "--no-lockout",
            "-m", "1000", "-f", "md", "-o", str(report_path),
        ])

        assert result.exit_code == 0
        assert "# SecureAuth Lab Attack Simulation Report" in result.output
        assert "tiger + capitalize + append 2024" in report_path.read_text(encoding="utf-8")

    def test_simulate_uses_config_file(self, runner, isolated):
        config_path = isolated / "lab.yaml"
        config_path.write_text(yaml.dump({"defense": {"max_attempts": 3, "rate_limit_enabled": False}}))

        result = runner.invoke(cli, ["-c", str(config_path), "-j", "simulate", "-p", "Xk9#mQ2!zL", "--fast"])

        assert result.exit_code == 0
        assert json.loads(result.output)["result"]["total_attempts"] == 3


class TestConfigHandling:
    """Tests for how the CLI applies the configuration file."""

    def test_invalid_config_file_rejected(self, runner, isolated):
        config_path = isolated / "lab.yaml"
        config_path.write_text(yaml.dump({"defense": {"max_attempts": 0}}))

        result = runner.invoke(cli, ["-c", str(config_path), "-j", "simulate", "-p", "password", "--fast"])

        assert result.exit_code == 2
        assert "Invalid configuration" in result.output

    def test_relative_output_goes_under_report_dir(self, runner, isolated):
        config_path = isolated / "lab.yaml"
        config_path.write_text(yaml.dump({"report_dir": str(isolated / "saved")}))

        result = runner.invoke(cli, [
            "-c", str(config_path), "-q", "simulate", "-p", "password", "--fast",
            "-f", "json", "-o", "run.json",
        ])

        assert result.exit_code == 0
        saved = json.loads((isolated / "saved" / "run.json").read_text(encoding="utf-8"))
        assert saved["result"]["total_attempts"] == 1

    def test_config_log_level_used_without_flags(self, runner, isolated):
        log_path = isolated / "lab.log"
        config_path = isolated / "lab.yaml"
        config_path.write_text(yaml.dump({"log_file": str(log_path), "log_level": "debug"}))

        result = runner.invoke(cli, ["-c", str(config_path), "-j", "simulate", "-p", "password", "--fast"])

        assert result.exit_code == 0
        assert "Attempt #1" in log_path.read_text(encoding="utf-8")
