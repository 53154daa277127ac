"""
SecureAuth Lab Password Analyzer
Entropy, strength rating, pattern detection and crack-time estimation.

Every function here is pure: the same secret always yields the same profile.
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from secureauthlab.config import AnalyzerConfig


LOWERCASE_SIZE = 26
UPPERCASE_SIZE = 26
DIGIT_SIZE = 10
SYMBOL_SIZE = 32

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
SECONDS_PER_YEAR = 31536000
SECONDS_PER_CENTURY = 100 * SECONDS_PER_YEAR

COMPLEX_PATTERN = "Complex/random pattern"

# Ordered: the first template that matches wins
PASSWORD_PATTERNS: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"[A-Z][a-z]+"), "Single capitalized word"),
    (re.compile(r"[A-Z][a-z]+[0-9]+"), "Capitalized word + numbers"),
    (re.compile(r"[a-z]+[0-9]+"), "Lowercase word + numbers"),
    (re.compile(r"[a-z]+[0-9]+[!@#$%]"), "Word + numbers + symbol"),
    (re.compile(r"[0-9]+"), "Only digits"),
    (re.compile(r"[A-Z][a-z]+[!@#$%]"), "Capitalized word + symbol"),
)


class StrengthLabel(Enum):
    """Password strength classification."""
    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    FAIR = "Fair"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"

    @classmethod
    def from_entropy(cls, entropy_bits: float) -> "StrengthLabel":
        """Map entropy to a band. Bands are half-open; a boundary belongs to the higher band."""
        if entropy_bits < 28:
            return cls.VERY_WEAK
        elif entropy_bits < 36:
            return cls.WEAK
        elif entropy_bits < 60:
            return cls.FAIR
        elif entropy_bits < 128:
            return cls.STRONG
        return cls.VERY_STRONG

    @property
    def score(self) -> int:
        """1 (Very Weak) to 5 (Very Strong)."""
        return list(StrengthLabel).index(self) + 1

    @property
    def color(self) -> str:
        return _STRENGTH_COLORS[self]


_STRENGTH_COLORS = {
    StrengthLabel.VERY_WEAK: "red",
    StrengthLabel.WEAK: "orange1",
    StrengthLabel.FAIR: "yellow",
    StrengthLabel.STRONG: "green",
    StrengthLabel.VERY_STRONG: "bright_green",
}


@dataclass(frozen=True)
class PasswordProfile:
    """Security profile derived from a secret."""
    entropy_bits: float
    strength: StrengthLabel
    detected_pattern: str
    estimated_crack_time: str
    length: int = 0
    character_classes: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "entropy_bits": round(self.entropy_bits, 2),
            "strength": self.strength.value,
            "strength_score": self.strength.score,
            "detected_pattern": self.detected_pattern,
            "estimated_crack_time": self.estimated_crack_time,
            "length": self.length,
            "character_classes": list(self.character_classes),
        }


def character_classes(secret: str) -> tuple[str, ...]:
    """Names of the character classes present in a secret, in canonical order."""
    classes = []
    if any("a" <= c <= "z" for c in secret):
        classes.append("lowercase")
    if any("A" <= c <= "Z" for c in secret):
        classes.append("uppercase")
    if any("0" <= c <= "9" for c in secret):
        classes.append("digit")
    if any(not c.isascii() or not c.isalnum() for c in secret):
        classes.append("symbol")
    return tuple(classes)


def charset_size(secret: str) -> int:
    """Size of the search space alphabet implied by the classes in a secret."""
    sizes = {
        "lowercase": LOWERCASE_SIZE,
        "uppercase": UPPERCASE_SIZE,
        "digit": DIGIT_SIZE,
        "symbol": SYMBOL_SIZE,
    }
    return sum(sizes[name] for name in character_classes(secret))


def entropy_bits(secret: str) -> float:
    """
    Calculate password entropy in bits: log2(charset_size ** length).

    An empty secret has an entropy of 0.
    """
    size = charset_size(secret)
    if size == 0:
        return 0.0
    # log2(size ** n) without materialising size ** n
    return len(secret) * math.log2(size)


def detect_pattern(secret: str) -> str:
    """Name of the first structural template the secret matches."""
    for pattern, name in PASSWORD_PATTERNS:
        if pattern.fullmatch(secret):
            return name
    return COMPLEX_PATTERN


def classify_strength(bits: float) -> StrengthLabel:
    return StrengthLabel.from_entropy(bits)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def estimate_crack_time(secret: str, assumed_rate_per_second: float = 1000) -> str:
    """
    Estimate average-case exhaustive search time as a human-readable bucket.

    Args:
        secret: Password to estimate
        assumed_rate_per_second: Guess rate of the modelled attacker

    Returns:
        "Instantly", or "<n> seconds|minutes|hours|days|years|centuries"
    """
    if assumed_rate_per_second <= 0:
        raise ValueError("assumed_rate_per_second must be positive")

    bits = entropy_bits(secret)
    try:
        seconds = 2.0 ** bits / assumed_rate_per_second / 2
    except OverflowError:
        seconds = math.inf

    if seconds < 1:
        return "Instantly"
    if seconds < SECONDS_PER_MINUTE:
        return f"{_round_half_up(seconds)} seconds"
    if seconds < SECONDS_PER_HOUR:
        return f"{_round_half_up(seconds / SECONDS_PER_MINUTE)} minutes"
    if seconds < SECONDS_PER_DAY:
        return f"{_round_half_up(seconds / SECONDS_PER_HOUR)} hours"
    if seconds < SECONDS_PER_YEAR:
        return f"{_round_half_up(seconds / SECONDS_PER_DAY)} days"
    if seconds < SECONDS_PER_CENTURY:
        return f"{_round_half_up(seconds / SECONDS_PER_YEAR)} years"

    centuries = seconds / SECONDS_PER_CENTURY
    if math.isinf(centuries):
        return "Effectively infinite centuries"
    if centuries >= 1e15:
        return f"{centuries:.1e} centuries"
    return f"{_round_half_up(centuries)} centuries"


def analyze_password(secret: str, config: AnalyzerConfig | None = None) -> PasswordProfile:
    """
    Build the full profile for a secret.

    Args:
        secret: Password to analyze
        config: Analyzer configuration (assumed attacker rate)

    Returns:
        PasswordProfile
    """
    config = config or AnalyzerConfig()
    bits = entropy_bits(secret)
    return PasswordProfile(
        entropy_bits=bits,
        strength=classify_strength(bits),
        detected_pattern=detect_pattern(secret),
        estimated_crack_time=estimate_crack_time(secret, config.assumed_rate_per_second),
        length=len(secret),
        character_classes=character_classes(secret),
    )
