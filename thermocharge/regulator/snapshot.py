from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

from thermocharge.regulator.errors import InvalidSnapshot

# Battery charge is a percentage
BATTERY_MIN = 0.0
BATTERY_MAX = 100.0


class OperatingState(IntEnum):
    """
    Externally visible phase of the regulator.

    STANDBY is reserved: nothing transitions into it.
    """
    START = 0
    COOLING = 1
    HEATING = 2
    CHARGING = 3
    FINISH = 4
    STANDBY = 5

    @property
    def label(self) -> str:
        """Display name used in report lines."""
        return _LABELS[self]


_LABELS = {
    OperatingState.START: "Start",
    OperatingState.COOLING: "Cooling",
    OperatingState.HEATING: "Heating",
    OperatingState.CHARGING: "Charging",
    OperatingState.FINISH: "Finish",
    OperatingState.STANDBY: "StandBy",
}


@dataclass(frozen=True, slots=True)
class Snapshot:
    """
    Regulator reading shared between the driver and the producers.

    Frozen so that every holder has its own value; producers derive new
    snapshots with dataclasses.replace, which updates all fields at once.
    """
    temperature: float                  # Degrees (°C)
    battery_charge: float               # Percent [0, 100]
    operating_state: OperatingState = OperatingState.START


def validate_snapshot(snapshot: Snapshot) -> Snapshot:
    """
    Check that a snapshot is usable by the producers.

    Args:
        snapshot: Snapshot to check

    Returns:
        The same snapshot, for chaining

    Raises:
        InvalidSnapshot: If a numeric field is not a finite number, the
                         battery charge is outside [0, 100], or the state
                         is not an OperatingState
    """
    if not isinstance(snapshot, Snapshot):
        raise InvalidSnapshot(f"expected Snapshot, got {type(snapshot).__name__}")

    for field_name in ("temperature", "battery_charge"):
        value = getattr(snapshot, field_name)
        # bool is an int subclass but never a reading
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidSnapshot(f"{field_name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidSnapshot(f"{field_name} must be finite, got {value!r}")

    if not BATTERY_MIN <= snapshot.battery_charge <= BATTERY_MAX:
        raise InvalidSnapshot(
            f"battery_charge must be within [{BATTERY_MIN}, {BATTERY_MAX}], "
            f"got {snapshot.battery_charge!r}"
        )

    if not isinstance(snapshot.operating_state, OperatingState):
        raise InvalidSnapshot(
            f"operating_state must be an OperatingState, got {snapshot.operating_state!r}"
        )

    return snapshot
