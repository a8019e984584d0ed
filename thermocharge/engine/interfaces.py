from __future__ import annotations

from dataclasses import dataclass

from thermocharge.regulator.snapshot import Snapshot


# Transition recording

@dataclass(frozen=True, slots=True)
class TransitionSample:
    """
    One driver iteration: the state it ran in and the state it chose next.

    The snapshot fields are the driver's snapshot after the iteration.
    These samples are written to transitions.jsonl.
    """
    index: int              # Iteration number, from 0
    cycle: int              # Completed Finish -> Start cycles before this iteration
    source: str             # State label the iteration ran in
    target: str             # State label chosen for the next iteration
    temperature: float      # Temperature after the iteration (°C)
    battery_charge: float   # Battery charge after the iteration (%)


@dataclass(frozen=True, slots=True)
class RunMetrics:
    total_transitions: int
    total_cycles: int
    start_time: str
    finish_time: str
    scenario_name: str
    seed: int | None
    stop_reason: str        # "max_transitions", "max_cycles" or "stopped"


# Run results

@dataclass(frozen=True, slots=True)
class RunResult:
    """
    Complete results from a driver run.

    Attributes:
        metrics: Run-level metadata (timing, counts, why it stopped).
        transitions: One sample per driver iteration, in order.
        final_snapshot: The driver's snapshot when the run ended.
    """
    metrics: RunMetrics
    transitions: list[TransitionSample]
    final_snapshot: Snapshot | None = None
