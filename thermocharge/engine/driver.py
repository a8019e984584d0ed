"""
Regulator driver for ThermoCharge.

This module provides the RegulatorDriver class, the finite-state
orchestrator that owns the canonical snapshot and the lifetime of the
producers. It walks a fixed state machine:

```
    Start ──> Cooling ──┐
      │  └──> Heating ──┤
      │                 v
      ├──────────> Charging ──> Cooling / Heating
      │                 │
      └──> Finish <─────┘
             │
             └──> Start   (the loop never ends on its own)
```

One call to step() runs one iteration: the current state's action is
performed, exactly one producer is stepped (or run, for charging), and
the next state is chosen from the snapshot the producer handed back.

The driver only ever assigns values produced by a producer; it never
holds a reference into a producer's private state. Producer faults abort
the current phase and surface as PhaseAborted, with the driver's state
and snapshot left as they were before the phase.

Example usage:
    >>> from thermocharge.engine.driver import RegulatorDriver
    >>> from thermocharge.engine.initializer import RandomInitializer
    >>>
    >>> driver = RegulatorDriver(RandomInitializer(seed=42))
    >>> result = driver.run(max_cycles=3)
    >>> print(result.metrics.total_transitions)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone

from ..config import RegulatorConfig
from ..regulator.acclimate import AcclimateSequence
from ..regulator.charge import ChargeSequence
from ..regulator.errors import PhaseAborted, RegulatorError
from ..regulator.interfaces import Done
from ..regulator.snapshot import OperatingState, Snapshot, validate_snapshot
from .initializer import Initializer
from .interfaces import RunMetrics, RunResult, TransitionSample
from .reporting import NEW_SEQUENCE, Reporter, format_report

logger = logging.getLogger(__name__)


class RegulatorDriver:
    """
    Finite-state driver for the thermal/battery regulator.

    The driver owns at most one AcclimateSequence at a time. Starting a
    new phase closes the previous sequence, whether or not it ran to its
    hand-off. ChargeSequence instances live only for the duration of the
    Charging iteration that creates them.

    Attributes:
        config: Regulator thresholds and rates.
        scenario_name: Name recorded in run metrics.
        seed: Seed recorded in run metrics (None when not seeded).
    """

    def __init__(
        self,
        initializer: Initializer,
        config: RegulatorConfig | None = None,
        reporter: Reporter | None = None,
        initial_state: OperatingState = OperatingState.START,
        snapshot: Snapshot | None = None,
        scenario_name: str = "regulator",
        seed: int | None = None,
    ) -> None:
        """
        Initialize the driver.

        Args:
            initializer: Called on every Start to get a fresh snapshot
            config: Regulator configuration (uses defaults if None)
            reporter: Sink for report lines (logs at INFO if None)
            initial_state: State of the first iteration
            snapshot: Starting snapshot; required unless starting at Start
            scenario_name: Name recorded in run metrics
            seed: Seed recorded in run metrics

        Raises:
            ValueError: If the configuration is invalid, or a non-Start
                        initial state is given without a snapshot
            InvalidSnapshot: If the given snapshot is unusable
        """
        self.config = (config or RegulatorConfig()).validate()
        self.scenario_name = scenario_name
        self.seed = seed
        self._initializer = initializer
        self._report = reporter if reporter is not None else logger.info

        if initial_state is not OperatingState.START and snapshot is None:
            raise ValueError(f"initial state {initial_state.label} needs a snapshot")

        self._state = OperatingState(initial_state)
        self._snapshot: Snapshot | None = None
        if snapshot is not None:
            self._snapshot = validate_snapshot(snapshot)

        self._sequence: AcclimateSequence | None = None
        if self._state in (OperatingState.COOLING, OperatingState.HEATING):
            self._sequence = AcclimateSequence(self._snapshot, self.config.acclimate_params())

        self._transitions: list[TransitionSample] = []
        self._cycles = 0
        self._stop_requested = False

    # ─────────────────────────────────────────────────────────────────
    # Read-only views
    # ─────────────────────────────────────────────────────────────────

    @property
    def state(self) -> OperatingState:
        """State the next iteration will run in."""
        return self._state

    @property
    def snapshot(self) -> Snapshot | None:
        """The driver's canonical snapshot (None before the first Start)."""
        return self._snapshot

    @property
    def active_sequence(self) -> AcclimateSequence | None:
        return self._sequence

    @property
    def cycles(self) -> int:
        """Completed Finish -> Start cycles."""
        return self._cycles

    @property
    def transitions(self) -> list[TransitionSample]:
        return list(self._transitions)

    # ─────────────────────────────────────────────────────────────────
    # Control
    # ─────────────────────────────────────────────────────────────────

    def stop(self) -> None:
        """Ask run() to return before its next iteration."""
        self._stop_requested = True

    def step(self) -> TransitionSample:
        """
        Run one iteration of the state machine.

        Returns:
            The recorded transition

        Raises:
            PhaseAborted: If a producer or the initializer fails. State and
                          snapshot are unchanged.

        Any other exception from a collaborator propagates unwrapped, also
        with state and snapshot unchanged.
        """
        source = self._state
        previous = self._snapshot
        try:
            target = self._dispatch(source)
        except RegulatorError as exc:
            logger.exception("%s phase aborted", source.label)
            self._snapshot = previous
            self._close_sequence()
            if isinstance(exc, PhaseAborted):
                raise
            raise PhaseAborted(source, str(exc)) from exc
        except BaseException:
            # Collaborator failures (initializer, reporter) pass through as-is
            self._snapshot = previous
            raise

        self._state = target
        if self._snapshot.operating_state is not target:
            self._snapshot = replace(self._snapshot, operating_state=target)
        sample = TransitionSample(
            index=len(self._transitions),
            cycle=self._cycles,
            source=source.label,
            target=target.label,
            temperature=self._snapshot.temperature,
            battery_charge=self._snapshot.battery_charge,
        )
        self._transitions.append(sample)
        if source is OperatingState.FINISH:
            self._cycles += 1
            logger.info("cycle %d complete after %d transitions",
                        self._cycles, len(self._transitions))

        logger.debug(
            "transition %d: %s -> %s (temperature=%.3f, battery=%.3f)",
            sample.index, sample.source, sample.target,
            sample.temperature, sample.battery_charge,
        )
        return sample

    def run(
        self,
        max_transitions: int | None = None,
        max_cycles: int | None = None,
    ) -> RunResult:
        """
        Run iterations until stopped or a limit is reached.

        The state machine itself never halts: Finish always leads back to
        Start. Without limits this only returns once stop() is called, for
        example from a reporter.

        Args:
            max_transitions: Return after this many iterations of this call
            max_cycles: Return once this many cycles completed in this call

        Returns:
            RunResult with metrics and every transition recorded so far

        Raises:
            PhaseAborted: If a phase fails; the run is not resumed
        """
        start_time = datetime.now(timezone.utc).isoformat()
        self._stop_requested = False
        first_transition = len(self._transitions)
        first_cycle = self._cycles
        stop_reason = "stopped"

        while True:
            if self._stop_requested:
                stop_reason = "stopped"
                break
            if max_transitions is not None and len(self._transitions) - first_transition >= max_transitions:
                stop_reason = "max_transitions"
                break
            if max_cycles is not None and self._cycles - first_cycle >= max_cycles:
                stop_reason = "max_cycles"
                break
            self.step()

        finish_time = datetime.now(timezone.utc).isoformat()
        metrics = RunMetrics(
            total_transitions=len(self._transitions) - first_transition,
            total_cycles=self._cycles - first_cycle,
            start_time=start_time,
            finish_time=finish_time,
            scenario_name=self.scenario_name,
            seed=self.seed,
            stop_reason=stop_reason,
        )
        return RunResult(
            metrics=metrics,
            transitions=self._transitions[first_transition:],
            final_snapshot=self._snapshot,
        )

    # ─────────────────────────────────────────────────────────────────
    # State actions
    # ─────────────────────────────────────────────────────────────────

    def _dispatch(self, state: OperatingState) -> OperatingState:
        if state is OperatingState.START:
            return self._start()
        if state in (OperatingState.COOLING, OperatingState.HEATING):
            return self._acclimate(state)
        if state is OperatingState.CHARGING:
            return self._charge()
        if state is OperatingState.FINISH:
            return self._finish()
        # Standby is reserved and nothing enters it
        return OperatingState.STANDBY

    def _start(self) -> OperatingState:
        self._report(NEW_SEQUENCE)
        fresh = validate_snapshot(self._initializer())
        target = self._classify(fresh)

        # A new sequence is primed from every fresh reading, but only a
        # Cooling or Heating start keeps its first step
        self._close_sequence()
        sequence = AcclimateSequence(fresh, self.config.acclimate_params())
        if target in (OperatingState.COOLING, OperatingState.HEATING):
            self._report(format_report(fresh, target.label))
            result = sequence.step()
            self._sequence = sequence
            self._snapshot = result.snapshot
            return result.snapshot.operating_state

        # Settled or too low to regulate: the primed step is the hand-off
        sequence.step()
        sequence.close()
        self._snapshot = fresh
        return target

    def _acclimate(self, state: OperatingState) -> OperatingState:
        if self._sequence is None:
            raise PhaseAborted(state, "no active acclimate sequence")

        result = self._sequence.step()
        self._snapshot = result.snapshot
        if isinstance(result, Done):
            self._close_sequence()
            return OperatingState.CHARGING
        return result.snapshot.operating_state

    def _charge(self) -> OperatingState:
        cfg = self.config
        current = self._snapshot
        self._report(format_report(current, f"Start {OperatingState.CHARGING.label}"))

        charged = ChargeSequence(current, cfg.charge_params()).run()
        self._report(format_report(charged, f"Finish {OperatingState.CHARGING.label}"))

        # Strict thresholds: exactly band_low or band_high counts as settled
        if charged.temperature < cfg.band_low:
            target = OperatingState.HEATING
        elif charged.temperature > cfg.band_high:
            target = OperatingState.COOLING
        else:
            target = OperatingState.FINISH

        sequence = None
        if target is not OperatingState.FINISH:
            sequence = AcclimateSequence(charged, cfg.acclimate_params())
            self._report(format_report(charged, target.label))

        # Nothing is adopted until the last report went out
        self._close_sequence()
        self._sequence = sequence
        self._snapshot = charged
        return target

    def _finish(self) -> OperatingState:
        self._report(format_report(self._snapshot, OperatingState.FINISH.label))
        return OperatingState.START

    def _classify(self, snapshot: Snapshot) -> OperatingState:
        cfg = self.config
        charged = snapshot.battery_charge > cfg.battery_floor
        if snapshot.temperature < cfg.band_low and charged:
            return OperatingState.HEATING
        if snapshot.temperature > cfg.band_high and charged:
            return OperatingState.COOLING
        if charged:
            return OperatingState.FINISH
        return OperatingState.CHARGING

    def _close_sequence(self) -> None:
        if self._sequence is not None:
            self._sequence.close()
            self._sequence = None
