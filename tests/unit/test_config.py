from __future__ import annotations

from pathlib import Path

import pytest

from thermocharge.config import RegulatorConfig, SimConfig
from thermocharge.regulator.acclimate import AcclimateParams
from thermocharge.regulator.charge import ChargeParams


def test_sim_config_default_out_dir():
    cfg = SimConfig.from_args(name="my run!", seed=3, out_dir=None)
    assert cfg.out_dir.parts[:2] == ("artifacts", "runs")
    assert cfg.out_dir.name.endswith("_my_run")
    assert cfg.max_cycles == 1
    assert cfg.max_transitions is None


def test_sim_config_explicit_out_dir(tmp_path):
    cfg = SimConfig.from_args(name="x", seed=0, out_dir=str(tmp_path), max_cycles=None, max_transitions=10)
    assert cfg.out_dir == Path(tmp_path)
    assert cfg.max_transitions == 10


def test_sim_config_unsafe_name_falls_back():
    cfg = SimConfig.from_args(name="???", seed=0, out_dir=None)
    assert cfg.out_dir.name.endswith("_run")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": ""},
        {"name": "x", "max_cycles": -1},
        {"name": "x", "max_transitions": -5},
        {"name": "x", "max_cycles": None, "max_transitions": None},
    ],
)
def test_sim_config_rejects_bad_args(kwargs):
    with pytest.raises(ValueError):
        SimConfig.from_args(seed=0, out_dir=None, **kwargs)


def test_sim_config_is_frozen():
    cfg = SimConfig.from_args(name="x", seed=0, out_dir=None)
    with pytest.raises(Exception):  # FrozenInstanceError
        cfg.seed = 1


def test_regulator_config_defaults_match_params():
    cfg = RegulatorConfig().validate()
    assert cfg.acclimate_params() == AcclimateParams()
    assert cfg.charge_params() == ChargeParams()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"band_low": 21.0},
        {"temperature_step": 0.0},
        {"battery_drain": -0.1},
        {"charge_step": -1.0},
        {"charge_heating": -0.01},
        {"charge_target": 20.0},
    ],
)
def test_regulator_config_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        RegulatorConfig(**kwargs).validate()


def test_regulator_config_builds_custom_params():
    cfg = RegulatorConfig(band_low=15.0, band_high=25.0, charge_target=80.0)
    assert cfg.acclimate_params().band_low == 15.0
    assert cfg.acclimate_params().band_high == 25.0
    assert cfg.charge_params().charge_target == 80.0


@pytest.mark.parametrize(
    "charge_target, charge_step",
    [(100.0, 0.1), (99.95, 0.1), (96.0, 5.0)],
)
def test_regulator_config_rejects_overcharge(charge_target, charge_step):
    """A charging run must never push the battery past 100%."""
    with pytest.raises(ValueError):
        RegulatorConfig(charge_target=charge_target, charge_step=charge_step).validate()


def test_regulator_config_accepts_full_charge_with_exact_step():
    cfg = RegulatorConfig(charge_target=99.0, charge_step=1.0).validate()
    assert cfg.charge_params().charge_target == 99.0
