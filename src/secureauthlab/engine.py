"""
SecureAuth Lab Simulation Engine
Phased credential attack simulation: dictionary, hybrid, adaptive brute force.

The engine drives the candidate generators in a fixed order, checks the
defense policy after every counted attempt, and streams progress events to
its caller through a SimulationRun channel.

Everything happens in memory against a locally supplied secret. No network,
no storage, no real account system.
"""

import asyncio
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from secureauthlab import defense as defense_policy
from secureauthlab.analyzer import PasswordProfile, analyze_password, detect_pattern
from secureauthlab.clock import Clock, MonotonicClock
from secureauthlab.config import AnalyzerConfig, DefenseConfig, PacingConfig
from secureauthlab.exceptions import (
    ConfigurationError,
    SimulationStateError,
    UnsupportedCharacterError,
)
from secureauthlab.generators import (
    Corpus,
    dictionary_candidates,
    hybrid_candidates,
    position_candidates,
)


logger = logging.getLogger("secureauthlab.engine")


class Phase(Enum):
    """Engine states, in the only order they can occur."""
    ANALYSIS = "analysis"
    DICTIONARY = "dictionary"
    HYBRID = "hybrid"
    BRUTEFORCE = "bruteforce"
    COMPLETE = "complete"


ATTACK_PHASES = (Phase.DICTIONARY, Phase.HYBRID, Phase.BRUTEFORCE)

PHASE_DESCRIPTIONS = {
    Phase.ANALYSIS: "Analyzing password structure...",
    Phase.DICTIONARY: "Trying common passwords from database...",
    Phase.HYBRID: "Generating variations of common words...",
    Phase.BRUTEFORCE: "Analyzing character patterns with adaptive algorithm...",
    Phase.COMPLETE: "Simulation complete",
}

DEFENSE_STOP_REASON = "Defense mechanisms prevented the attack. Password remained secure."


@dataclass(frozen=True)
class AttemptRecord:
    """One simulated guess."""
    candidate: str
    phase: Phase
    sequence_number: int


@dataclass(frozen=True)
class ProgressSnapshot:
    """Point-in-time view of a run. Consumers only need the latest one."""
    phase: Phase
    attempt_count: int
    current: str
    discovered: str
    elapsed_ms: int
    phase_attempts: int = 0
    position: int | None = None
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase.value,
            "attempt_count": self.attempt_count,
            "current": self.current,
            "discovered": self.discovered,
            "elapsed_ms": self.elapsed_ms,
            "phase_attempts": self.phase_attempts,
            "position": self.position,
            "description": self.description,
        }


@dataclass(frozen=True)
class SimulationResult:
    """Terminal artifact of a run, created exactly once."""
    success: bool
    discovered: str | None
    total_attempts: int
    elapsed_ms: int
    termination_reason: str
    defenses_triggered: tuple[str, ...]
    phase_at_termination: Phase
    attempts_by_phase: dict[str, int] = field(default_factory=dict)
    matched_by: str | None = None
    profile: PasswordProfile | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "discovered": self.discovered,
            "total_attempts": self.total_attempts,
            "elapsed_ms": self.elapsed_ms,
            "termination_reason": self.termination_reason,
            "defenses_triggered": list(self.defenses_triggered),
            "phase_at_termination": self.phase_at_termination.value,
            "attempts_by_phase": dict(self.attempts_by_phase),
            "matched_by": self.matched_by,
            "profile": self.profile.to_dict() if self.profile else None,
        }


SimulationEvent = Union[PasswordProfile, ProgressSnapshot, SimulationResult]


@dataclass
class _Outcome:
    success: bool
    reason: str
    discovered: str | None = None
    matched_by: str | None = None


class _RunState:
    """Private, per-run counters. Never shared between runs."""

    def __init__(self, clock: Clock):
        self.clock = clock
        self.phase = Phase.ANALYSIS
        self.attempts = 0
        self.attempts_by_phase = {phase.value: 0 for phase in ATTACK_PHASES}
        self.prefix: list[str] = []
        self.defenses_triggered: list[str] = []
        self.position: int | None = None
        self.current = ""
        self.description = PHASE_DESCRIPTIONS[Phase.ANALYSIS]
        self.started_ms: float | None = None

    def enter(self, phase: Phase) -> None:
        if self.started_ms is None and phase is not Phase.ANALYSIS:
            self.started_ms = self.clock.now_ms()
        self.phase = phase
        self.current = ""
        self.description = PHASE_DESCRIPTIONS[phase]

    def count(self, candidate: str) -> AttemptRecord:
        self.attempts += 1
        self.attempts_by_phase[self.phase.value] += 1
        self.current = candidate
        return AttemptRecord(candidate, self.phase, self.attempts)

    def elapsed_ms(self) -> int:
        if self.started_ms is None:
            return 0
        return int(round(self.clock.now_ms() - self.started_ms))

    def snapshot(self) -> ProgressSnapshot:
        if sum(self.attempts_by_phase.values()) != self.attempts:
            raise SimulationStateError(
                f"Attempt counter {self.attempts} disagrees with phase counters "
                f"{self.attempts_by_phase}"
            )
        return ProgressSnapshot(
            phase=self.phase,
            attempt_count=self.attempts,
            current=self.current,
            discovered="".join(self.prefix),
            elapsed_ms=self.elapsed_ms(),
            phase_attempts=self.attempts_by_phase.get(self.phase.value, 0),
            position=self.position,
            description=self.description,
        )


_END = object()


class SimulationRun:
    """
    Handle for one in-flight simulation.

    Iterate it with ``async for`` to receive the PasswordProfile, the progress
    snapshots and finally exactly one SimulationResult. Events are only
    queued once iteration has started, so begin iterating before awaiting
    anything else. ``cancel()`` stops the run: nothing further is delivered,
    including events already queued.
    """

    def __init__(self, on_event: Callable[[SimulationEvent], None] | None = None):
        self.run_id = uuid.uuid4().hex[:12]
        self._on_event = on_event
        self._queue: asyncio.Queue = asyncio.Queue()
        self._task: asyncio.Task | None = None
        self._result: SimulationResult | None = None
        self._error: BaseException | None = None
        self._cancelled = False
        self._exhausted = False
        self._streaming = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def _attach(self, task: asyncio.Task) -> None:
        self._task = task
        task.add_done_callback(self._on_task_done)

    def _publish(self, event: SimulationEvent) -> None:
        if self._cancelled:
            return
        if isinstance(event, SimulationResult):
            self._result = event
        if self._on_event is not None:
            self._on_event(event)
        if self._streaming:
            self._queue.put_nowait(event)

    def _on_task_done(self, task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            self._error = task.exception()
            logger.error(f"Simulation run {self.run_id} failed: {self._error}")
        self._queue.put_nowait(_END)

    def cancel(self) -> bool:
        """
        Abandon the run.

        Returns:
            False if the run had already finished, True otherwise
        """
        if self._cancelled:
            return True
        if self.done:
            return False

        self._cancelled = True
        if self._task is not None:
            self._task.cancel()

        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_END)
        logger.info(f"Simulation run {self.run_id} cancelled")
        return True

    def __aiter__(self) -> "SimulationRun":
        self._streaming = True
        return self

    async def __anext__(self) -> SimulationEvent:
        if self._exhausted:
            raise StopAsyncIteration
        event = await self._queue.get()
        if event is _END or self._cancelled:
            self._exhausted = True
            if self._error is not None and not self._cancelled:
                raise self._error
            raise StopAsyncIteration
        return event

    async def wait(self) -> SimulationResult | None:
        """Wait for the run to end. Returns None for a cancelled run."""
        if self._task is None:
            raise SimulationStateError("Run has not been started")
        await asyncio.wait({self._task})
        if self._cancelled:
            return None
        if self._error is not None:
            raise self._error
        return self._result

    def result(self) -> SimulationResult:
        """Final result of a finished run."""
        if self._cancelled:
            raise SimulationStateError(f"Run {self.run_id} was cancelled and has no result")
        if self._result is None:
            raise SimulationStateError(f"Run {self.run_id} has not finished")
        return self._result


class SimulationEngine:
    """
    Phased attack simulator.

    Each call to start_simulation() gets its own run state; one engine can
    drive any number of independent runs.
    """

    def __init__(
        self,
        corpus: Corpus | None = None,
        pacing: PacingConfig | None = None,
        clock: Clock | None = None,
        analyzer_config: AnalyzerConfig | None = None,
    ):
        """
        Initialize the engine.

        Args:
            corpus: Word lists, transformations and frequency strings
            pacing: Cosmetic baseline delays used when rate limiting is off
            clock: Time source; VirtualClock makes runs instant and deterministic
            analyzer_config: Assumed attacker rate for the crack-time estimate
        """
        self.corpus = corpus or Corpus.default()
        self.pacing = (pacing or PacingConfig()).validate()
        self.clock = clock or MonotonicClock()
        self.analyzer_config = analyzer_config or AnalyzerConfig()

    def start_simulation(
        self,
        secret: str,
        defense: DefenseConfig | None = None,
        on_event: Callable[[SimulationEvent], None] | None = None,
    ) -> SimulationRun:
        """
        Start a run on the current event loop.

        Args:
            secret: Target password (kept in memory only)
            defense: Defense configuration (default: DefenseConfig())
            on_event: Optional observer called synchronously with every event

        Returns:
            SimulationRun handle

        Raises:
            ConfigurationError: Invalid configuration or empty secret
        """
        defense = (defense or DefenseConfig()).validate()
        if not isinstance(secret, str) or secret == "":
            raise ConfigurationError("A non-empty password is required")

        run = SimulationRun(on_event)
        task = asyncio.get_running_loop().create_task(
            self._execute(secret, defense, run._publish)
        )
        run._attach(task)
        logger.info(
            f"Run {run.run_id} started: length={len(secret)}, "
            f"max_attempts={defense.max_attempts}, lockout={defense.account_lockout_enabled}, "
            f"rate_limit={defense.rate_limit_enabled}"
        )
        return run

    def run(
        self,
        secret: str,
        defense: DefenseConfig | None = None,
        on_event: Callable[[SimulationEvent], None] | None = None,
    ) -> SimulationResult:
        """Run a simulation to completion on a fresh event loop."""

        async def _drive() -> SimulationResult:
            run = self.start_simulation(secret, defense, on_event)
            return await run.wait()

        return asyncio.run(_drive())

    async def _execute(
        self,
        secret: str,
        defense: DefenseConfig,
        emit: Callable[[SimulationEvent], None],
    ) -> SimulationResult:
        state = _RunState(self.clock.fork())

        profile = analyze_password(secret, self.analyzer_config)
        emit(profile)
        emit(state.snapshot())
        await state.clock.sleep(self.pacing.analysis_delay_ms)

        outcome = await self._dictionary_phase(state, secret, defense, emit)
        if outcome is None:
            outcome = await self._hybrid_phase(state, secret, defense, emit)
        if outcome is None:
            outcome = await self._bruteforce_phase(state, secret, defense, emit)

        return self._complete(state, outcome, profile, emit)

    def _transition(self, state: _RunState, phase: Phase, emit) -> None:
        state.enter(phase)
        logger.info(f"Entering {phase.value} phase after {state.attempts} attempts")
        emit(state.snapshot())

    async def _attempt(
        self,
        state: _RunState,
        candidate: str,
        delay_ms: float,
        defense: DefenseConfig,
        emit,
    ) -> bool:
        """
        Count, report and pace one attempt.

        Returns:
            False if a defense halted the run on this attempt
        """
        record = state.count(candidate)
        logger.debug(f"Attempt #{record.sequence_number} [{record.phase.value}]")
        emit(state.snapshot())

        decision = defense_policy.evaluate(state.attempts, defense)
        if decision.halted:
            state.defenses_triggered.append(decision.trigger)
            logger.info(f"Defense triggered at attempt {state.attempts}: {decision.trigger}")
            return False

        await state.clock.sleep(delay_ms)
        return True

    async def _dictionary_phase(self, state, secret, defense, emit) -> _Outcome | None:
        self._transition(state, Phase.DICTIONARY, emit)
        delay = defense_policy.attempt_delay_ms(self.pacing.dictionary_delay_ms, defense, self.pacing)
        lowered = secret.lower()

        for index, candidate in enumerate(dictionary_candidates(self.corpus)):
            if not await self._attempt(state, candidate, delay, defense, emit):
                return _Outcome(False, DEFENSE_STOP_REASON)

            if candidate == secret or candidate.lower() == lowered:
                return _Outcome(
                    True,
                    "Weak password found in common password database during dictionary "
                    "attack phase. This password appears in known leaked-password lists "
                    "and is known to attackers.",
                    discovered=candidate,
                    matched_by=f"dictionary entry #{index + 1}",
                )
        return None

    async def _hybrid_phase(self, state, secret, defense, emit) -> _Outcome | None:
        self._transition(state, Phase.HYBRID, emit)
        logger.debug(f"Hybrid phase: {self.corpus.hybrid_size} candidates")
        delay = defense_policy.attempt_delay_ms(self.pacing.hybrid_delay_ms, defense, self.pacing)

        for candidate, word, transform in hybrid_candidates(self.corpus):
            if not await self._attempt(state, candidate, delay, defense, emit):
                return _Outcome(False, DEFENSE_STOP_REASON)

            if candidate == secret:
                return _Outcome(
                    True,
                    "Password cracked using hybrid attack (common word with variations). "
                    f"Pattern detected: {detect_pattern(candidate)}",
                    discovered=candidate,
                    matched_by=f"{word} + {transform.name}",
                )
        return None

    async def _bruteforce_phase(self, state, secret, defense, emit) -> _Outcome:
        self._transition(state, Phase.BRUTEFORCE, emit)
        length = len(secret)

        for position, target in enumerate(secret):
            state.position = position
            found = False

            for char in position_candidates(state.prefix, self.corpus):
                delay = defense_policy.attempt_delay_ms(
                    self.pacing.bruteforce_delay_ms, defense, self.pacing, char
                )
                if not await self._attempt(state, char, delay, defense, emit):
                    return _Outcome(
                        False,
                        f"Defense mechanisms stopped the attack at position {position + 1}/{length}. "
                        f"{len(state.prefix)} characters were discovered before defenses triggered.",
                        discovered="".join(state.prefix) or None,
                    )

                if char == target:
                    state.prefix.append(char)
                    state.description = _describe_learning(state.prefix, state.description)
                    emit(state.snapshot())
                    await state.clock.sleep(self.pacing.lock_in_pause_ms)
                    found = True
                    break

            if not found:
                error = UnsupportedCharacterError(position, "".join(state.prefix))
                logger.warning(f"Brute force exhausted the character set at position {position + 1}")
                return _Outcome(False, str(error), discovered=error.discovered or None)

        return _Outcome(
            True,
            "Password fully compromised using adaptive brute-force analysis. Attack succeeded "
            "by learning patterns from discovered characters. "
            f"Detected pattern: {detect_pattern(secret)}",
            discovered="".join(state.prefix),
            matched_by="adaptive brute force",
        )

    def _complete(self, state: _RunState, outcome: _Outcome, profile, emit) -> SimulationResult:
        phase_at_termination = state.phase
        elapsed = state.elapsed_ms()
        state.enter(Phase.COMPLETE)
        emit(state.snapshot())

        result = SimulationResult(
            success=outcome.success,
            discovered=outcome.discovered,
            total_attempts=state.attempts,
            elapsed_ms=elapsed,
            termination_reason=outcome.reason,
            defenses_triggered=tuple(state.defenses_triggered),
            phase_at_termination=phase_at_termination,
            attempts_by_phase=dict(state.attempts_by_phase),
            matched_by=outcome.matched_by if outcome.success else None,
            profile=profile,
        )
        logger.info(
            f"Simulation complete: success={result.success}, attempts={result.total_attempts}, "
            f"phase={phase_at_termination.value}, elapsed={elapsed}ms"
        )
        emit(result)
        return result


def _describe_learning(prefix: list[str], current: str) -> str:
    if len(prefix) <= 2:
        return current
    partial = "".join(prefix)
    if "A" <= partial[0] <= "Z":
        hint = "Capitalized start detected"
    elif "0" <= partial[0] <= "9":
        hint = "Numeric start detected"
    else:
        hint = "Analyzing patterns"
    return f"Smart brute-force: {hint}..."


def start_simulation(
    secret: str,
    defense: DefenseConfig | None = None,
    engine: SimulationEngine | None = None,
    on_event: Callable[[SimulationEvent], None] | None = None,
) -> SimulationRun:
    """Start a run with a default (or given) engine. Must be called from a running loop."""
    return (engine or SimulationEngine()).start_simulation(secret, defense, on_event)


def cancel(run: SimulationRun) -> bool:
    """Best-effort immediate stop of a run."""
    return run.cancel()
