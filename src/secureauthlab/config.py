"""
SecureAuth Lab Configuration Module
Handles loading and managing YAML configuration files.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from secureauthlab.exceptions import ConfigurationError


# Fixed policy constant, independent of max_attempts
LOCKOUT_THRESHOLD = 100


def _require_int(name: str, value: Any, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class DefenseConfig:
    """Defensive controls applied to a single simulated attack."""
    rate_limit_enabled: bool = True
    account_lockout_enabled: bool = True
    max_attempts: int = 50
    attempt_delay_ms: int = 100

    def validate(self) -> "DefenseConfig":
        """
        Check the configuration before any attempt is made.

        Raises:
            ConfigurationError: max_attempts < 1 or a negative delay
        """
        _require_int("max_attempts", self.max_attempts, 1)
        _require_int("attempt_delay_ms", self.attempt_delay_ms, 0)
        return self


@dataclass(frozen=True)
class PacingConfig:
    """Cosmetic pacing used when rate limiting is disabled."""
    dictionary_delay_ms: int = 50
    hybrid_delay_ms: int = 40
    bruteforce_delay_ms: int = 60
    symbol_delay_multiplier: float = 1.5
    lock_in_pause_ms: int = 400
    analysis_delay_ms: int = 2000

    def validate(self) -> "PacingConfig":
        for name in ("dictionary_delay_ms", "hybrid_delay_ms", "bruteforce_delay_ms",
                     "lock_in_pause_ms", "analysis_delay_ms"):
            _require_int(name, getattr(self, name), 0)
        if self.symbol_delay_multiplier < 0:
            raise ConfigurationError(
                f"symbol_delay_multiplier must be >= 0, got {self.symbol_delay_multiplier}"
            )
        return self

    @classmethod
    def instant(cls) -> "PacingConfig":
        """Zero-delay pacing, used by tests and --fast runs."""
        return cls(
            dictionary_delay_ms=0,
            hybrid_delay_ms=0,
            bruteforce_delay_ms=0,
            lock_in_pause_ms=0,
            analysis_delay_ms=0,
        )


@dataclass(frozen=True)
class AnalyzerConfig:
    """Configuration for password analysis."""
    assumed_rate_per_second: int = 1000


@dataclass
class Config:
    """Main SecureAuth Lab configuration."""
    defense: DefenseConfig = field(default_factory=DefenseConfig)
    pacing: PacingConfig = field(default_factory=PacingConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)

    # Global settings
    log_file: Path | None = None
    log_level: str = "INFO"
    report_dir: Path = field(default_factory=lambda: Path("reports"))

    @classmethod
    def load(cls, config_path: Path | str) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            Config instance with loaded values
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def load_or_default(cls, config_path: Path | str | None = None) -> "Config":
        """
        Load configuration from file or return defaults.

        Args:
            config_path: Optional path to config file

        Returns:
            Config instance
        """
        if config_path is None:
            # Check default locations
            default_paths = [
                Path("config/config.yaml"),
                Path("config.yaml"),
                Path.home() / ".config" / "secureauthlab" / "config.yaml",
            ]
            for path in default_paths:
                if path.exists():
                    return cls.load(path)
            return cls()

        return cls.load(config_path)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        # Defense config
        if "defense" in data:
            dc = data["defense"] or {}
            config.defense = DefenseConfig(
                rate_limit_enabled=dc.get("rate_limit_enabled", True),
                account_lockout_enabled=dc.get("account_lockout_enabled", True),
                max_attempts=dc.get("max_attempts", 50),
                attempt_delay_ms=dc.get("attempt_delay_ms", 100),
            ).validate()

        # Pacing config
        if "pacing" in data:
            pc = data["pacing"] or {}
            config.pacing = PacingConfig(
                dictionary_delay_ms=pc.get("dictionary_delay_ms", 50),
                hybrid_delay_ms=pc.get("hybrid_delay_ms", 40),
                bruteforce_delay_ms=pc.get("bruteforce_delay_ms", 60),
                symbol_delay_multiplier=pc.get("symbol_delay_multiplier", 1.5),
                lock_in_pause_ms=pc.get("lock_in_pause_ms", 400),
                analysis_delay_ms=pc.get("analysis_delay_ms", 2000),
            ).validate()

        # Analyzer config
        if "analyzer" in data:
            ac = data["analyzer"] or {}
            config.analyzer = AnalyzerConfig(
                assumed_rate_per_second=ac.get("assumed_rate_per_second", 1000),
            )

        # Global settings
        log_file = data.get("log_file")
        config.log_file = Path(log_file) if log_file else None
        log_level = str(data.get("log_level", "INFO")).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f"Unknown log_level: {log_level}")
        config.log_level = log_level
        config.report_dir = Path(data.get("report_dir", "reports"))

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            "log_file": str(self.log_file) if self.log_file else None,
            "log_level": self.log_level,
            "report_dir": str(self.report_dir),
            "defense": {
                "rate_limit_enabled": self.defense.rate_limit_enabled,
                "account_lockout_enabled": self.defense.account_lockout_enabled,
                "max_attempts": self.defense.max_attempts,
                "attempt_delay_ms": self.defense.attempt_delay_ms,
            },
            "pacing": {
                "dictionary_delay_ms": self.pacing.dictionary_delay_ms,
                "hybrid_delay_ms": self.pacing.hybrid_delay_ms,
                "bruteforce_delay_ms": self.pacing.bruteforce_delay_ms,
                "symbol_delay_multiplier": self.pacing.symbol_delay_multiplier,
                "lock_in_pause_ms": self.pacing.lock_in_pause_ms,
                "analysis_delay_ms": self.pacing.analysis_delay_ms,
            },
            "analyzer": {
                "assumed_rate_per_second": self.analyzer.assumed_rate_per_second,
            },
        }

    def save(self, config_path: Path | str) -> None:
        """Save configuration to YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
