from __future__ import annotations

import pytest

from thermocharge.regulator.charge import ChargeParams, ChargeSequence
from thermocharge.regulator.errors import AlreadyCompleted, InvalidSnapshot
from thermocharge.regulator.snapshot import OperatingState, Snapshot


@pytest.mark.parametrize("battery", [0.0, 15.0, 22.0, 50.0, 94.85])
def test_charge_reaches_target(battery):
    """The result always sits at or just above the target."""
    result = ChargeSequence(Snapshot(temperature=20.0, battery_charge=battery)).run()
    assert result.battery_charge >= 94.9
    assert result.battery_charge < 94.9 + 0.1 + 1e-9


def test_charge_heats_passively():
    """Every iteration adds 0.01 degrees."""
    seq = ChargeSequence(Snapshot(temperature=20.0, battery_charge=22.0))
    result = seq.run()

    assert seq.iterations > 700
    assert result.temperature == pytest.approx(20.0 + 0.01 * seq.iterations)
    assert result.temperature > 27.0


def test_charge_keeps_operating_state():
    """The driver names the result; the producer passes the state through."""
    start = Snapshot(temperature=19.0, battery_charge=15.0, operating_state=OperatingState.CHARGING)
    assert ChargeSequence(start).run().operating_state is OperatingState.CHARGING

    start = Snapshot(temperature=19.0, battery_charge=15.0, operating_state=OperatingState.HEATING)
    assert ChargeSequence(start).run().operating_state is OperatingState.HEATING


def test_charge_is_idempotent_on_its_result():
    """Running again on a charged snapshot changes nothing."""
    first = ChargeSequence(Snapshot(temperature=18.0, battery_charge=30.0)).run()

    again = ChargeSequence(first)
    second = again.run()
    assert second == first
    assert again.iterations == 0


def test_charge_runs_once():
    seq = ChargeSequence(Snapshot(temperature=18.0, battery_charge=30.0))
    assert not seq.completed
    seq.run()
    assert seq.completed
    with pytest.raises(AlreadyCompleted):
        seq.run()


def test_charge_rejects_bad_input():
    with pytest.raises(InvalidSnapshot):
        ChargeSequence(Snapshot(temperature=float("inf"), battery_charge=30.0))
    with pytest.raises(ValueError):
        ChargeSequence(Snapshot(temperature=18.0, battery_charge=30.0), ChargeParams(charge_step=0.0))


def test_charge_custom_params():
    params = ChargeParams(charge_target=60.0, charge_step=5.0, charge_heating=1.0)
    result = ChargeSequence(Snapshot(temperature=10.0, battery_charge=40.0), params).run()
    assert result.battery_charge == 60.0
    assert result.temperature == 14.0
