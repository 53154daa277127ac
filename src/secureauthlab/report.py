"""
SecureAuth Lab Report Module
Turns a SimulationResult into an educational report (dict or markdown).
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from secureauthlab.engine import SimulationResult
from secureauthlab.utils import attempts_per_second, format_duration


logger = logging.getLogger("secureauthlab.report")


COMPROMISED_RECOMMENDATIONS = [
    "Avoid common words and phrases found in dictionaries",
    "Use a combination of uppercase, lowercase, numbers, and special characters",
    "Create passwords that are at least 12-16 characters long",
    "Consider using a passphrase or password manager",
]

SECURE_RECOMMENDATIONS = [
    "Your password demonstrates good security practices",
    "Continue using unique, complex passwords for each account",
    "Enable multi-factor authentication when available",
    "Regularly update your passwords every 3-6 months",
]

VULNERABILITY_NOTE = (
    "This password was vulnerable because it matched predictable patterns that "
    "attackers exploit. Strong passwords should have high entropy (60+ bits) "
    "and avoid common patterns."
)


@dataclass
class SimulationReport:
    """Complete report for one simulation run."""
    result: SimulationResult
    headline: str
    attack_rate: float
    recommendations: list[str]
    generated_at: datetime = field(default_factory=datetime.now)
    simulation_mode: bool = True

    @classmethod
    def from_result(cls, result: SimulationResult) -> "SimulationReport":
        return cls(
            result=result,
            headline="Password Compromised" if result.success else "Password Secure",
            attack_rate=attempts_per_second(result.total_attempts, result.elapsed_ms),
            recommendations=list(
                COMPROMISED_RECOMMENDATIONS if result.success else SECURE_RECOMMENDATIONS
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "headline": self.headline,
            "result": self.result.to_dict(),
            "attack_rate": round(self.attack_rate, 1),
            "recommendations": self.recommendations,
            "generated_at": self.generated_at.isoformat(),
            "simulation_mode": self.simulation_mode,
        }

    def to_markdown(self) -> str:
        """Generate markdown report."""
        result = self.result
        lines = [
            "# SecureAuth Lab Attack Simulation Report",
            "",
            "> **SIMULATION MODE**: The attack ran entirely in memory against a locally",
            "> supplied password. No real account or network was touched.",
            "",
            f"**Outcome:** **{self.headline}**",
            f"**Generated:** {self.generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            "---",
            "",
            "## Summary",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Total attempts | {result.total_attempts:,} |",
            f"| Time elapsed | {format_duration(result.elapsed_ms)} |",
            f"| Attempts/sec | {self.attack_rate:.1f} |",
            f"| Ended in phase | {result.phase_at_termination.value} |",
        ]
        for phase, count in result.attempts_by_phase.items():
            lines.append(f"| {phase.title()} attempts | {count:,} |")
        lines.append("")

        heading = "Why was this password vulnerable?" if result.success else "Why was this password secure?"
        lines.extend([f"### {heading}", "", result.termination_reason, ""])

        if result.success and result.matched_by:
            lines.append(f"**Matched by:** {result.matched_by}")
            lines.append("")

        if result.profile is not None:
            profile = result.profile
            lines.extend([
                "## Password Analysis",
                "",
                f"- **Detected Pattern:** {profile.detected_pattern}",
                f"- **Strength Rating:** {profile.strength.value} ({profile.entropy_bits:.1f} bits of entropy)",
                f"- **Length:** {profile.length} characters",
                f"- **Estimated Crack Time:** {profile.estimated_crack_time}",
                "",
            ])
            if result.success:
                lines.extend([VULNERABILITY_NOTE, ""])

        if result.defenses_triggered:
            lines.extend(["## Defenses Triggered", ""])
            for defense in result.defenses_triggered:
                lines.append(f"- {defense}")
            lines.append("")

        lines.extend(["## Recommendations", ""])
        for item in self.recommendations:
            lines.append(f"- {item}")

        lines.extend([
            "",
            "---",
            "*Report generated by SecureAuth Lab*",
        ])
        return "\n".join(lines)

    def save(self, output_path: Path, fmt: str = "md") -> Path:
        """Write the report as markdown or JSON."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        content = self.to_markdown() if fmt == "md" else json.dumps(self.to_dict(), indent=2)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"Report saved to {output_path}")
        return output_path
