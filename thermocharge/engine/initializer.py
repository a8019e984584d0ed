from __future__ import annotations

import random
from itertools import cycle
from typing import Callable, Iterator

from thermocharge.regulator.snapshot import OperatingState, Snapshot, validate_snapshot

# Type alias for initializers: () -> fresh starting snapshot
Initializer = Callable[[], Snapshot]


class RandomInitializer:
    """
    Seeded source of starting readings.

    Temperatures are whole degrees in [0, temperature_max) and battery
    charges whole percents in [0, battery_max), like an integer sensor.
    The same seed always produces the same sequence of snapshots.
    """

    def __init__(self, seed: int, temperature_max: int = 55, battery_max: int = 100):
        """
        Initialize the initializer with a seed.

        Args:
            seed: Random seed for deterministic draws
            temperature_max: Exclusive upper bound for temperature (°C)
            battery_max: Exclusive upper bound for battery charge (%)
        """
        if temperature_max <= 0 or battery_max <= 0:
            raise ValueError("temperature_max and battery_max must be > 0")
        if battery_max > 101:
            raise ValueError("battery_max must be <= 101")
        self._rng = random.Random(seed)
        self.temperature_max = temperature_max
        self.battery_max = battery_max

    def __call__(self) -> Snapshot:
        temperature = float(self._rng.randrange(self.temperature_max))
        battery_charge = float(self._rng.randrange(self.battery_max))
        return Snapshot(
            temperature=temperature,
            battery_charge=battery_charge,
            operating_state=OperatingState.START,
        )


class FixedInitializer:
    """
    Replays the given snapshots in order, starting over after the last one.

    Useful for reproducing a specific scenario.
    """

    def __init__(self, *snapshots: Snapshot):
        if not snapshots:
            raise ValueError("FixedInitializer needs at least one snapshot")
        self.snapshots = tuple(validate_snapshot(s) for s in snapshots)
        self._iter: Iterator[Snapshot] = cycle(self.snapshots)

    def __call__(self) -> Snapshot:
        return next(self._iter)
