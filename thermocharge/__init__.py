"""
ThermoCharge: deterministic thermal/battery regulator simulation.

Features:
- Snapshot value record shared by the driver and the producers
- AcclimateSequence: stepwise producer moving temperature into the band
- ChargeSequence: one-shot producer charging the battery
- RegulatorDriver: finite-state orchestrator with stop/limit hooks
- Seeded initializers and JSON/JSONL run artifacts
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
