from __future__ import annotations

import dataclasses

import pytest

from thermocharge.regulator.errors import InvalidSnapshot
from thermocharge.regulator.snapshot import OperatingState, Snapshot, validate_snapshot


def test_snapshot_defaults_to_start():
    """A fresh snapshot starts in the Start state."""
    snap = Snapshot(temperature=28.0, battery_charge=86.0)
    assert snap.operating_state is OperatingState.START


def test_snapshot_is_immutable():
    """Holders cannot change a snapshot in place."""
    snap = Snapshot(temperature=28.0, battery_charge=86.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.temperature = 20.0


def test_operating_state_order_and_labels():
    """States keep their numbering and display names."""
    assert [s.value for s in OperatingState] == [0, 1, 2, 3, 4, 5]
    assert OperatingState.COOLING.label == "Cooling"
    assert OperatingState.CHARGING.label == "Charging"
    assert OperatingState.STANDBY.label == "StandBy"


def test_validate_returns_same_snapshot():
    snap = Snapshot(temperature=-5.0, battery_charge=0.0, operating_state=OperatingState.HEATING)
    assert validate_snapshot(snap) is snap


@pytest.mark.parametrize(
    "temperature, battery_charge",
    [
        (float("nan"), 50.0),
        (float("inf"), 50.0),
        (20.0, float("-inf")),
        (20.0, 100.5),
        (20.0, -0.1),
        ("20", 50.0),
        (True, 50.0),
    ],
)
def test_validate_rejects_bad_numbers(temperature, battery_charge):
    """Non-finite, non-numeric and out-of-domain readings are rejected."""
    snap = Snapshot(temperature=temperature, battery_charge=battery_charge)
    with pytest.raises(InvalidSnapshot):
        validate_snapshot(snap)


def test_validate_rejects_plain_int_state():
    snap = Snapshot(temperature=20.0, battery_charge=50.0, operating_state=1)
    with pytest.raises(InvalidSnapshot):
        validate_snapshot(snap)


def test_validate_rejects_non_snapshot():
    with pytest.raises(InvalidSnapshot):
        validate_snapshot({"temperature": 20.0, "battery_charge": 50.0})


def test_invalid_snapshot_is_value_error():
    """Callers that only know about ValueError still catch it."""
    with pytest.raises(ValueError):
        validate_snapshot(Snapshot(temperature=float("nan"), battery_charge=50.0))
