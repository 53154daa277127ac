"""
SecureAuth Lab CLI Module
Main command-line interface using Click.
"""

import asyncio
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich import box

from secureauthlab import __version__
from secureauthlab.analyzer import PasswordProfile, StrengthLabel, analyze_password
from secureauthlab.clock import MonotonicClock, VirtualClock
from secureauthlab.config import Config, PacingConfig
from secureauthlab.exceptions import ConfigurationError
from secureauthlab.utils import format_duration, print_banner, setup_logging


console = Console()


PHASE_ORDER = ["dictionary", "hybrid", "bruteforce"]


def get_version_info() -> str:
    """Get detailed version information."""
    import platform
    lines = [
        f"SecureAuth Lab {__version__}",
        f"Python {platform.python_version()}",
        f"Platform: {platform.system()} {platform.release()} ({platform.machine()})",
    ]
    return "\n".join(lines)


def strength_bar(strength: StrengthLabel) -> str:
    """Five-segment strength meter."""
    return f"[{strength.color}]" + "█" * strength.score + "[/]" + "░" * (5 - strength.score)


@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress non-essential output",
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output results as JSON",
)
@click.version_option(
    version=__version__,
    prog_name="SecureAuth Lab",
    message=get_version_info(),
)
@click.pass_context
def cli(ctx, config, verbose, quiet, json_output):
    """
    SecureAuth Lab - Credential Attack Simulator

    Shows how attackers prioritise dictionary, hybrid and brute-force
    strategies, and how rate limiting, lockout and attempt limits stop them.

    Examples:

        secureauthlab analyze 'Tiger2024'

        secureauthlab simulate --password 'Tiger2024'

        secureauthlab simulate --no-lockout --max-attempts 5000 --fast
    """
    ctx.ensure_object(dict)

    # Load configuration
    try:
        ctx.obj["config"] = Config.load_or_default(config)
    except ConfigurationError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise SystemExit(2)
    except Exception as e:
        if not quiet:
            console.print(f"[yellow]Warning: Could not load config: {e}[/yellow]")
        ctx.obj["config"] = Config()

    # Set up logging
    log_level = logging.getLevelName(ctx.obj["config"].log_level)
    if verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.ERROR

    logger = setup_logging(
        log_file=ctx.obj["config"].log_file if not quiet else None,
        level=log_level,
        console=verbose and not json_output,
    )
    ctx.obj["logger"] = logger
    ctx.obj["json_output"] = json_output
    ctx.obj["quiet"] = quiet

    # Print banner unless quiet
    if not quiet and not json_output and ctx.invoked_subcommand is not None:
        print_banner()


def _profile_table(profile: PasswordProfile) -> Table:
    table = Table(title="Pre-Attack Analysis", box=box.ROUNDED)
    table.add_column("Metric", style="cyan", width=22)
    table.add_column("Value", width=40)

    table.add_row("Password Strength", f"{strength_bar(profile.strength)} {profile.strength.value}")
    table.add_row("Entropy", f"{profile.entropy_bits:.1f} bits")
    table.add_row("Detected Pattern", profile.detected_pattern)
    table.add_row("Est. Crack Time", profile.estimated_crack_time)
    table.add_row("Length", str(profile.length))
    table.add_row("Character Classes", ", ".join(profile.character_classes) or "-")
    return table


@cli.command("analyze")
@click.argument("password", required=False)
@click.option(
    "--rate",
    type=click.IntRange(min=1),
    default=None,
    help="Assumed attacker guesses per second (default: from config)",
)
@click.pass_context
def analyze(ctx, password, rate):
    """
    Analyze a password: entropy, strength, pattern and crack-time estimate.

    Examples:

        secureauthlab analyze 'Summer2024!'

        secureauthlab analyze --rate 1000000000
    """
    config = ctx.obj["config"]
    if password is None:
        password = click.prompt("Password", hide_input=True)

    analyzer_config = config.analyzer
    if rate is not None:
        analyzer_config = replace(analyzer_config, assumed_rate_per_second=rate)

    profile = analyze_password(password, analyzer_config)

    if ctx.obj["json_output"]:
        click.echo(json.dumps(profile.to_dict(), indent=2))
    else:
        console.print(_profile_table(profile))


def _render_progress(snapshot, defense, length: int) -> Panel:
    """Render the latest progress snapshot."""
    phase = snapshot.phase.value
    steps = []
    for name in PHASE_ORDER:
        if name == phase:
            steps.append(f"[bold orange1]{name.title()}[/bold orange1]")
        elif phase == "complete" or (phase in PHASE_ORDER and PHASE_ORDER.index(phase) > PHASE_ORDER.index(name)):
            steps.append(f"[green]{name.title()}[/green]")
        else:
            steps.append(f"[dim]{name.title()}[/dim]")

    if phase == "bruteforce":
        progress = f"{len(snapshot.discovered)}/{length} chars"
        cracked = snapshot.discovered + "•" * (length - len(snapshot.discovered))
        testing = f"Position {(snapshot.position or 0) + 1}: [blue]{snapshot.current}[/blue]\n[green]{cracked}[/green]"
    else:
        progress = phase.title()
        testing = f"Testing: [blue]{snapshot.current}[/blue]" if snapshot.current else ""

    rate_limit = f"{defense.attempt_delay_ms}ms delay" if defense.rate_limit_enabled else "Disabled"
    lockout = "After 100 attempts" if defense.account_lockout_enabled else "Disabled"

    body = (
        " → ".join(steps) + "\n"
        f"[yellow]⚡[/yellow] {snapshot.description}\n"
        f"{testing}\n\n"
        f"[bold]Time Elapsed:[/bold] {snapshot.elapsed_ms / 1000:.1f}s   "
        f"[bold]Total Attempts:[/bold] {snapshot.attempt_count:,}   "
        f"[bold]Progress:[/bold] {progress}\n"
        f"[dim]Rate Limiting: {rate_limit} | Account Lockout: {lockout} | "
        f"Max Attempts: {defense.max_attempts}[/dim]"
    )
    return Panel(body, title="Attack Phase", border_style="orange1")


async def _drive_simulation(engine, password, defense, live: Live | None):
    from secureauthlab.engine import ProgressSnapshot, SimulationResult

    run = engine.start_simulation(password, defense)
    result = None
    try:
        async for event in run:
            if isinstance(event, ProgressSnapshot) and live is not None:
                live.update(_render_progress(event, defense, len(password)))
            elif isinstance(event, SimulationResult):
                result = event
    finally:
        if not run.done:
            run.cancel()
    return result


@cli.command("simulate")
@click.option(
    "--password", "-p",
    type=str,
    help="Password to attack (prompted for, hidden, if omitted)",
)
@click.option("--no-rate-limit", is_flag=True, help="Disable rate limiting")
@click.option("--no-lockout", is_flag=True, help="Disable account lockout")
@click.option(
    "--max-attempts", "-m",
    type=int,
    default=None,
    help="Maximum attempts before the attack is stopped",
)
@click.option(
    "--delay", "-d",
    type=int,
    default=None,
    help="Rate-limit delay per attempt in milliseconds",
)
@click.option(
    "--fast",
    is_flag=True,
    help="Skip real waiting (simulated clock)",
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    help="Output file for report (relative paths go under report_dir)",
)
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(["table", "json", "md"]),
    default="table",
    help="Output format (default: table)",
)
@click.pass_context
def simulate(ctx, password, no_rate_limit, no_lockout, max_attempts, delay, fast, output, output_format):
    """
    Run the multi-phase attack simulation against a password.

    Phases: dictionary -> hybrid -> adaptive brute force, with the
    configured defenses checked after every attempt.

    Examples:

        secureauthlab simulate --password 'Tiger2024' --fast

        secureauthlab simulate --no-lockout --max-attempts 2000 --delay 5

        secureauthlab simulate -p 'Xk9#mQ2!zL' --no-lockout -m 10000 --fast --format json
    """
    from secureauthlab.engine import SimulationEngine
    from secureauthlab.report import SimulationReport

    config = ctx.obj["config"]
    quiet = ctx.obj["quiet"]

    if ctx.obj["json_output"]:
        output_format = "json"

    if password is None:
        password = click.prompt("Password to test", hide_input=True)

    defense = config.defense
    overrides = {}
    if no_rate_limit:
        overrides["rate_limit_enabled"] = False
    if no_lockout:
        overrides["account_lockout_enabled"] = False
    if max_attempts is not None:
        overrides["max_attempts"] = max_attempts
    if delay is not None:
        overrides["attempt_delay_ms"] = delay
    defense = replace(defense, **overrides)

    pacing = PacingConfig.instant() if fast else config.pacing

    try:
        engine = SimulationEngine(
            pacing=pacing,
            clock=VirtualClock() if fast else MonotonicClock(),
            analyzer_config=config.analyzer,
        )

        interactive = not quiet and output_format == "table"
        if interactive:
            console.print(_profile_table(analyze_password(password, config.analyzer)))
            with Live(console=console, refresh_per_second=12, transient=True) as live:
                result = asyncio.run(_drive_simulation(engine, password, defense, live))
        else:
            result = asyncio.run(_drive_simulation(engine, password, defense, None))
    except ConfigurationError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise SystemExit(2)
    except KeyboardInterrupt:
        console.print("\n[yellow]Simulation cancelled[/yellow]")
        raise SystemExit(130)

    report = SimulationReport.from_result(result)

    if output:
        if not output.is_absolute():
            output = config.report_dir / output
        fmt = "md" if output_format == "md" or str(output).endswith(".md") else "json"
        saved = report.save(output, fmt)
        if not quiet and output_format != "json":
            console.print(f"\n[green]Report saved to: {saved}[/green]")

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    elif output_format == "md":
        click.echo(report.to_markdown())
    else:
        _display_result(report)


def _display_result(report):
    """Display simulation report as rich panels."""
    result = report.result
    color = "red" if result.success else "green"

    summary = (
        f"[bold]{report.headline}[/bold]\n\n"
        f"[bold]Total Attempts:[/bold] {result.total_attempts:,}\n"
        f"[bold]Time Elapsed:[/bold] {format_duration(result.elapsed_ms)}\n"
        f"[bold]Attempts/Sec:[/bold] {report.attack_rate:.1f}\n"
        f"[bold]Ended In:[/bold] {result.phase_at_termination.value}\n"
    )
    if result.success:
        summary += f"[bold]Discovered:[/bold] {result.discovered}\n"
    summary += f"\n{result.termination_reason}"

    console.print(Panel(summary, title="Simulation Result", border_style=color))

    if result.defenses_triggered:
        console.print("\n[bold]Defenses Triggered:[/bold]")
        for defense in result.defenses_triggered:
            console.print(f"  [green]🛡[/green] {defense}")

    console.print("\n[bold]Recommendations:[/bold]")
    for item in report.recommendations:
        console.print(f"  • {item}")

    console.print("\n[dim]Run with --format md for full report or --output report.md to save[/dim]")


def main():
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
