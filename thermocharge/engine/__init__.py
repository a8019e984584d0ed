from __future__ import annotations

from thermocharge.engine.driver import RegulatorDriver
from thermocharge.engine.initializer import FixedInitializer, Initializer, RandomInitializer
from thermocharge.engine.interfaces import RunMetrics, RunResult, TransitionSample
from thermocharge.engine.reporting import ReportLog, Reporter, format_report

__all__ = [
    "RegulatorDriver",
    "FixedInitializer",
    "Initializer",
    "RandomInitializer",
    "RunMetrics",
    "RunResult",
    "TransitionSample",
    "ReportLog",
    "Reporter",
    "format_report",
]
