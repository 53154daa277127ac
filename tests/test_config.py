"""
Tests for SecureAuth Lab Config Module
"""

from pathlib import Path

import pytest
import yaml

from secureauthlab.config import (
    AnalyzerConfig,
    Config,
    DefenseConfig,
    PacingConfig,
)
from secureauthlab.exceptions import ConfigurationError


class TestDefenseConfig:
    """Tests for DefenseConfig."""

    def test_default_values(self):
        """Test default configuration values."""
        config = DefenseConfig()

        assert config.rate_limit_enabled is True
        assert config.account_lockout_enabled is True
        assert config.max_attempts == 50
        assert config.attempt_delay_ms == 100

    def test_validate_returns_self(self):
        config = DefenseConfig(max_attempts=1, attempt_delay_ms=0)
        assert config.validate() is config

    @pytest.mark.parametrize("kwargs", [
        {"max_attempts": 0},
        {"max_attempts": 2.5},
        {"max_attempts": True},
        {"attempt_delay_ms": -1},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ConfigurationError):
            DefenseConfig(**kwargs).validate()

    def test_immutable(self):
        config = DefenseConfig()
        with pytest.raises(AttributeError):
            config.max_attempts = 5


class TestPacingConfig:
    """Tests for PacingConfig."""

    def test_dictionary_and_hybrid_faster_than_bruteforce(self):
        pacing = PacingConfig()

        assert pacing.dictionary_delay_ms < pacing.bruteforce_delay_ms
        assert pacing.hybrid_delay_ms < pacing.bruteforce_delay_ms
        assert pacing.symbol_delay_multiplier == 1.5

    def test_instant(self):
        pacing = PacingConfig.instant()

        assert pacing.analysis_delay_ms == 0
        assert pacing.lock_in_pause_ms == 0
        assert pacing.validate() is pacing

    def test_negative_rejected(self):
        with pytest.raises(ConfigurationError):
            PacingConfig(hybrid_delay_ms=-1).validate()


class TestConfig:
    """Tests for main Config class."""

    @pytest.fixture
    def sample_config_dict(self):
        """Sample configuration dictionary."""
        return {
            "log_file": "logs/test.log",
            "log_level": "DEBUG",
            "defense": {
                "rate_limit_enabled": False,
                "max_attempts": 500,
            },
            "pacing": {
                "lock_in_pause_ms": 100,
            },
            "analyzer": {
                "assumed_rate_per_second": 1_000_000,
            },
        }

    def test_default_config(self):
        config = Config()

        assert config.defense == DefenseConfig()
        assert config.pacing == PacingConfig()
        assert config.analyzer == AnalyzerConfig()
        assert config.log_file is None
        assert config.log_level == "INFO"

    def test_from_dict(self, sample_config_dict):
        config = Config._from_dict(sample_config_dict)

        assert config.log_level == "DEBUG"
        assert config.log_file == Path("logs/test.log")
        assert config.defense.rate_limit_enabled is False
        assert config.defense.account_lockout_enabled is True
        assert config.defense.max_attempts == 500
        assert config.pacing.lock_in_pause_ms == 100
        assert config.pacing.bruteforce_delay_ms == 60
        assert config.analyzer.assumed_rate_per_second == 1_000_000

    def test_load_from_file(self, tmp_path, sample_config_dict):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump(sample_config_dict))

        config = Config.load(config_path)
        assert config.defense.max_attempts == 500

    def test_load_invalid_defense(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump({"defense": {"max_attempts": 0}}))

        with pytest.raises(ConfigurationError):
            Config.load(config_path)

    def test_log_level_normalized(self):
        assert Config._from_dict({"log_level": "debug"}).log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ConfigurationError):
            Config._from_dict({"log_level": "chatty"})

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path / "missing.yaml")

    def test_load_empty_file(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")

        assert Config.load(config_path).defense == DefenseConfig()

    def test_load_or_default_without_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))

        config = Config.load_or_default()
        assert config.defense == DefenseConfig()

    def test_load_or_default_finds_local_file(self, tmp_path, monkeypatch, sample_config_dict):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.yaml").write_text(yaml.dump(sample_config_dict))

        assert Config.load_or_default().defense.max_attempts == 500

    def test_save_and_reload(self, tmp_path, sample_config_dict):
        config = Config._from_dict(sample_config_dict)
        config_path = tmp_path / "nested" / "config.yaml"

        config.save(config_path)
        reloaded = Config.load(config_path)

        assert reloaded.to_dict() == config.to_dict()
