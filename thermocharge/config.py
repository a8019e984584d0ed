from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from thermocharge.regulator.acclimate import AcclimateParams
from thermocharge.regulator.charge import ChargeParams
from thermocharge.regulator.snapshot import BATTERY_MAX

def _clean_path_name(path_name: str) -> str:
    # Remove unsafe characters from directory name
    cleaned = [c if (c.isalnum() or c in ("-", "_")) else "_" for c in path_name]
    return "".join(cleaned).strip("_")


def _check_limit(label: str, value: int | None) -> int | None:
    if value is None:
        return None
    if value < 0:
        raise ValueError(f"{label} must be >= 0")
    return int(value)


# slots are used to enfore good interface hygiene, disables dynamic attribute creation.
@dataclass(frozen=True, slots=True)
class SimConfig:
    """
    SimConfig

    Definitions and configuration for a regulator run

    Params:
    - name (str) : run name
    - max_transitions (int|None) : stop after this many driver iterations
    - max_cycles (int|None) : stop after this many Finish -> Start cycles
    - seed (int) : random seed for the initializer
    - out_dir (str|None) : output directory for run artifacts
                           default: artifacts/runs/<timestamp>_<name>
    """
    name: str
    max_transitions: int | None
    max_cycles: int | None
    seed: int
    out_dir: Path

    @staticmethod
    def from_args(
        *,
        name: str,
        seed: int,
        out_dir: str | None,
        max_cycles: int | None = 1,
        max_transitions: int | None = None,
    ) -> "SimConfig":
        if not isinstance(name, str) or not name:
            raise ValueError("name must be a non-empty string")
        max_cycles = _check_limit("max_cycles", max_cycles)
        max_transitions = _check_limit("max_transitions", max_transitions)
        # The driver loops forever by itself, so a bounded run needs a limit
        if max_cycles is None and max_transitions is None:
            raise ValueError("at least one of max_cycles or max_transitions must be set")

        if out_dir is not None:
            out_dir = Path(out_dir)
        else:
            # artifacts/runs/<UTC YYYYmmdd_HHMMSS>_<name>
            ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            clean_name = _clean_path_name(name)
            if not clean_name:
                clean_name = "run"
            out_dir = Path("artifacts").joinpath(f"runs/{ts}_{clean_name}")

        return SimConfig(
            name=name,
            max_transitions=max_transitions,
            max_cycles=max_cycles,
            seed=int(seed),
            out_dir=out_dir,
        )


@dataclass(frozen=True, slots=True)
class RegulatorConfig:
    """
    Thresholds and rates for the regulator.

    The comfort band and battery floor are shared by the driver's
    classification and the acclimate sequence, so they live here once.
    """
    # Comfort band
    band_low: float = 18.0           # Below this the regulator heats (°C)
    band_high: float = 20.0          # Above this the regulator cools (°C)
    battery_floor: float = 20.0      # At or below this it must charge first (%)

    # Acclimate stepping
    temperature_step: float = 0.1    # °C per cooling/heating step
    battery_drain: float = 0.8       # % spent per cooling/heating step

    # Charging
    charge_target: float = 94.9      # % reached by a charging run
    charge_step: float = 0.1         # % added per charging iteration
    charge_heating: float = 0.01     # °C of passive heating per iteration

    def validate(self) -> "RegulatorConfig":
        if self.band_low > self.band_high:
            raise ValueError("band_low must be <= band_high")
        if self.temperature_step <= 0:
            raise ValueError("temperature_step must be > 0")
        if self.battery_drain < 0:
            raise ValueError("battery_drain must be >= 0")
        if self.charge_step <= 0:
            raise ValueError("charge_step must be > 0")
        if self.charge_heating < 0:
            raise ValueError("charge_heating must be >= 0")
        # A charged battery has to be able to pay for at least one step
        if self.charge_target <= self.battery_floor:
            raise ValueError("charge_target must be > battery_floor")
        # The last charging iteration may overshoot the target by one step
        if self.charge_target + self.charge_step > BATTERY_MAX:
            raise ValueError(f"charge_target + charge_step must be <= {BATTERY_MAX}")
        return self

    def acclimate_params(self) -> AcclimateParams:
        return AcclimateParams(
            band_low=self.band_low,
            band_high=self.band_high,
            battery_floor=self.battery_floor,
            temperature_step=self.temperature_step,
            battery_drain=self.battery_drain,
        )

    def charge_params(self) -> ChargeParams:
        return ChargeParams(
            charge_target=self.charge_target,
            charge_step=self.charge_step,
            charge_heating=self.charge_heating,
        )
