from __future__ import annotations

from thermocharge.regulator.acclimate import AcclimateParams, AcclimateSequence
from thermocharge.regulator.charge import ChargeParams, ChargeSequence
from thermocharge.regulator.errors import (
    AlreadyCompleted,
    InvalidSnapshot,
    PhaseAborted,
    RegulatorError,
)
from thermocharge.regulator.interfaces import (
    Done,
    OneShotProducer,
    StepResult,
    StepwiseProducer,
    Yielded,
)
from thermocharge.regulator.snapshot import OperatingState, Snapshot, validate_snapshot

__all__ = [
    "AcclimateParams",
    "AcclimateSequence",
    "ChargeParams",
    "ChargeSequence",
    "RegulatorError",
    "AlreadyCompleted",
    "InvalidSnapshot",
    "PhaseAborted",
    "Done",
    "Yielded",
    "StepResult",
    "StepwiseProducer",
    "OneShotProducer",
    "OperatingState",
    "Snapshot",
    "validate_snapshot",
]
