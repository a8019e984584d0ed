from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from thermocharge.regulator.errors import AlreadyCompleted
from thermocharge.regulator.interfaces import Done, StepResult, Yielded
from thermocharge.regulator.snapshot import OperatingState, Snapshot, validate_snapshot


@dataclass(frozen=True, slots=True)
class AcclimateParams:
    """
    Parameters for stepping temperature back into the comfort band.
    """
    band_low: float = 18.0           # Heat while temperature is below this (°C)
    band_high: float = 20.0          # Cool while temperature is above this (°C)
    battery_floor: float = 20.0      # No regulation at or below this charge (%)
    temperature_step: float = 0.1    # Temperature change per step (°C)
    battery_drain: float = 0.8       # Charge spent per step (%)


class _Phase(Enum):
    COOLING = "cooling"
    HEATING = "heating"
    HANDOFF = "handoff"
    DONE = "done"


class AcclimateSequence:
    """
    Stepwise producer that moves temperature toward [band_low, band_high].

    Each step() call takes exactly one step and returns a snapshot:
    - Cooling phase: temperature down, battery down, state COOLING
    - Heating phase: temperature up, battery down, state HEATING
    - Hand-off: state CHARGING, returned as Done

    Phases only move forward (cooling -> heating -> hand-off). With the
    battery at or below the floor the first step is already the hand-off.

    The sequence owns a private snapshot; callers get frozen values back
    and can never reach into it.
    """

    def __init__(self, snapshot: Snapshot, params: AcclimateParams | None = None):
        """
        Initialize the sequence from a starting snapshot.

        Args:
            snapshot: Starting reading (validated)
            params: Stepping parameters (uses defaults if None)

        Raises:
            InvalidSnapshot: If the starting snapshot is unusable
        """
        self.params = params or AcclimateParams()
        self._snapshot: Snapshot | None = validate_snapshot(snapshot)
        self._phase = _Phase.COOLING
        self._steps = 0

    @property
    def completed(self) -> bool:
        return self._phase is _Phase.DONE

    @property
    def steps(self) -> int:
        """Number of results produced so far."""
        return self._steps

    @property
    def snapshot(self) -> Snapshot | None:
        """Last produced snapshot (the input before the first step, None once closed)."""
        return self._snapshot

    def step(self) -> StepResult:
        """
        Take one step.

        Returns:
            Yielded for a cooling/heating step, Done for the CHARGING hand-off

        Raises:
            AlreadyCompleted: If the hand-off was already produced or the
                              sequence was closed
        """
        if self._phase is _Phase.DONE or self._snapshot is None:
            raise AlreadyCompleted(
                f"acclimate sequence already completed after {self._steps} steps"
            )

        p = self.params
        snap = self._snapshot

        if self._phase is _Phase.COOLING:
            if snap.temperature > p.band_high and snap.battery_charge > p.battery_floor:
                return self._advance(-p.temperature_step, OperatingState.COOLING)
            self._phase = _Phase.HEATING

        if self._phase is _Phase.HEATING:
            if snap.temperature < p.band_low and snap.battery_charge > p.battery_floor:
                return self._advance(p.temperature_step, OperatingState.HEATING)
            self._phase = _Phase.HANDOFF

        # Settled in the band, or the battery ran down mid-phase
        self._snapshot = replace(snap, operating_state=OperatingState.CHARGING)
        self._phase = _Phase.DONE
        self._steps += 1
        return Done(self._snapshot)

    def close(self) -> None:
        """Abandon the sequence. Further step() calls raise AlreadyCompleted."""
        self._phase = _Phase.DONE
        self._snapshot = None

    def _advance(self, temperature_delta: float, state: OperatingState) -> Yielded:
        snap = self._snapshot
        self._snapshot = replace(
            snap,
            temperature=snap.temperature + temperature_delta,
            battery_charge=snap.battery_charge - self.params.battery_drain,
            operating_state=state,
        )
        self._steps += 1
        return Yielded(self._snapshot)
