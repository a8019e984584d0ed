from __future__ import annotations

from typing import Callable

from thermocharge.regulator.snapshot import Snapshot

# Type alias for report sinks: one human-readable line per call
Reporter = Callable[[str], None]

NEW_SEQUENCE = "Start a new sequence"


def format_report(snapshot: Snapshot, action: str | None = None) -> str:
    """
    Format a report line for a snapshot.

    Args:
        snapshot: Reading to report
        action: Phrase placed before "at", e.g. "Start Charging". Defaults
                to the snapshot's own state label.

    Returns:
        e.g. "The actual temperature is 28.000000. Cooling at 86.000000% of battery."
    """
    if action is None:
        action = snapshot.operating_state.label
    return (
        f"The actual temperature is {snapshot.temperature:.6f}. "
        f"{action} at {snapshot.battery_charge:.6f}% of battery."
    )


class ReportLog:
    """Reporter that keeps every line, for tests and post-run inspection."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def __call__(self, line: str) -> None:
        self.lines.append(line)
