from __future__ import annotations

from dataclasses import dataclass, replace

from thermocharge.regulator.errors import AlreadyCompleted
from thermocharge.regulator.snapshot import Snapshot, validate_snapshot


@dataclass(frozen=True, slots=True)
class ChargeParams:
    """
    Parameters for the charging run.
    """
    charge_target: float = 94.9      # Charge until at least this level (%)
    charge_step: float = 0.1         # Charge added per iteration (%)
    charge_heating: float = 0.01     # Passive heating per iteration (°C)


class ChargeSequence:
    """
    One-shot producer that charges the battery up to the target.

    run() performs every iteration internally and returns only the final
    snapshot. Each iteration adds charge_step to the battery and then
    charge_heating to the temperature. The operating state is passed
    through untouched; the driver decides what to call the result.
    """

    def __init__(self, snapshot: Snapshot, params: ChargeParams | None = None):
        """
        Args:
            snapshot: Starting reading (validated)
            params: Charging parameters (uses defaults if None)

        Raises:
            InvalidSnapshot: If the starting snapshot is unusable
            ValueError: If charge_step is not positive
        """
        self.params = params or ChargeParams()
        if self.params.charge_step <= 0:
            raise ValueError("charge_step must be > 0")
        self._input = validate_snapshot(snapshot)
        self._result: Snapshot | None = None
        self.iterations = 0

    @property
    def completed(self) -> bool:
        return self._result is not None

    def run(self) -> Snapshot:
        """
        Charge until battery_charge >= charge_target.

        Returns:
            Final snapshot. battery_charge may overshoot the target by less
            than one charge_step. Already at or above the target, the input
            comes back unchanged.

        Raises:
            AlreadyCompleted: If run() was already called
        """
        if self._result is not None:
            raise AlreadyCompleted("charge sequence already produced its result")

        p = self.params
        battery = self._input.battery_charge
        temperature = self._input.temperature
        iterations = 0

        while battery < p.charge_target:
            battery = battery + p.charge_step
            temperature = temperature + p.charge_heating
            iterations += 1

        self.iterations = iterations
        if iterations == 0:
            self._result = self._input
        else:
            self._result = replace(
                self._input,
                temperature=temperature,
                battery_charge=battery,
            )
        return self._result
