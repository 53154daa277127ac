"""
SecureAuth Lab Defense Policy
Decides, after each counted attempt, whether the simulated attack must halt,
and how long an attempt is paced.
"""

from dataclasses import dataclass
from enum import Enum

from secureauthlab.config import LOCKOUT_THRESHOLD, DefenseConfig, PacingConfig
from secureauthlab.generators import is_symbol


MAX_ATTEMPTS_LABEL = "Maximum attempts reached"
LOCKOUT_LABEL = f"Account lockout after {LOCKOUT_THRESHOLD} failed attempts"


class DefenseAction(Enum):
    CONTINUE = "continue"
    TERMINATE = "terminate"


@dataclass(frozen=True)
class DefenseDecision:
    """Outcome of a defense check."""
    action: DefenseAction
    trigger: str | None = None

    @property
    def halted(self) -> bool:
        return self.action is DefenseAction.TERMINATE


CONTINUE = DefenseDecision(DefenseAction.CONTINUE)


def evaluate(attempt_count: int, config: DefenseConfig) -> DefenseDecision:
    """
    Check defenses for the attempt just counted. First matching rule wins.

    Args:
        attempt_count: Cumulative attempts, including the current one
        config: Defense configuration for the run

    Returns:
        DefenseDecision (TERMINATE carries a human-readable trigger label)
    """
    if attempt_count >= config.max_attempts:
        return DefenseDecision(DefenseAction.TERMINATE, MAX_ATTEMPTS_LABEL)

    if config.account_lockout_enabled and attempt_count >= LOCKOUT_THRESHOLD:
        return DefenseDecision(DefenseAction.TERMINATE, LOCKOUT_LABEL)

    return CONTINUE


def attempt_delay_ms(
    phase_baseline_ms: int,
    config: DefenseConfig,
    pacing: PacingConfig,
    char: str | None = None,
) -> float:
    """
    Delay before an attempt's outcome is revealed.

    Rate limiting replaces the phase baseline with the configured delay.
    Single-character (brute-force) attempts on a symbol cost
    pacing.symbol_delay_multiplier times as much.
    """
    base = config.attempt_delay_ms if config.rate_limit_enabled else phase_baseline_ms
    if char is not None and is_symbol(char):
        return base * pacing.symbol_delay_multiplier
    return float(base)
