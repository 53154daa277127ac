"""
SecureAuth Lab Test Configuration
Shared fixtures and configuration for pytest.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from secureauthlab.clock import VirtualClock
from secureauthlab.config import DefenseConfig, PacingConfig
from secureauthlab.engine import SimulationEngine


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def virtual_clock():
    """Simulated clock: no real waiting, deterministic elapsed time."""
    return VirtualClock()


@pytest.fixture
def engine(virtual_clock):
    """Engine with zero pacing on a virtual clock."""
    return SimulationEngine(pacing=PacingConfig.instant(), clock=virtual_clock)


@pytest.fixture
def paced_engine(virtual_clock):
    """Engine with the default cosmetic pacing on a virtual clock."""
    return SimulationEngine(pacing=PacingConfig(), clock=virtual_clock)


@pytest.fixture
def open_defense():
    """Defenses that never stop a full run."""
    return DefenseConfig(
        rate_limit_enabled=False,
        account_lockout_enabled=False,
        max_attempts=100_000,
        attempt_delay_ms=0,
    )
