from __future__ import annotations

import json

import pytest

from thermocharge.cli import main
from thermocharge.engine.driver import RegulatorDriver
from thermocharge.engine.initializer import FixedInitializer
from thermocharge.engine.metrics import read_transitions, write_run_artifacts
from thermocharge.engine.reporting import ReportLog
from thermocharge.regulator.snapshot import Snapshot


def _run_one_cycle():
    driver = RegulatorDriver(
        FixedInitializer(Snapshot(temperature=28.0, battery_charge=86.0)),
        reporter=ReportLog(),
        scenario_name="artifacts",
        seed=None,
    )
    return driver.run(max_cycles=1, max_transitions=100_000)


def test_artifacts_schema(tmp_path):
    result = _run_one_cycle()
    out_dir = tmp_path / "run"
    write_run_artifacts(out_path=out_dir, metrics=result.metrics, transitions=result.transitions)

    data = json.loads((out_dir / "metrics.json").read_text(encoding="utf-8"))
    assert set(data.keys()) == {"run", "states"}
    assert set(data["run"].keys()) == {
        "total_transitions",
        "total_cycles",
        "start_time",
        "finish_time",
        "scenario_name",
        "seed",
        "stop_reason",
    }
    assert data["run"]["scenario_name"] == "artifacts"
    assert data["run"]["seed"] is None
    assert data["run"]["total_cycles"] == 1
    assert sum(data["states"].values()) == result.metrics.total_transitions
    assert data["states"]["Start"] == 1
    assert data["states"]["Finish"] == 1

    lines = (out_dir / "transitions.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == result.metrics.total_transitions
    assert set(json.loads(lines[0]).keys()) == {
        "index", "cycle", "source", "target", "temperature", "battery_charge",
    }

    assert read_transitions(out_dir) == result.transitions


def test_artifacts_without_transitions(tmp_path):
    result = _run_one_cycle()
    write_run_artifacts(out_path=tmp_path, metrics=result.metrics, transitions=[])
    assert (tmp_path / "metrics.json").exists()
    assert not (tmp_path / "transitions.jsonl").exists()
    with pytest.raises(FileNotFoundError):
        read_transitions(tmp_path)


def test_cli_runs_one_cycle(tmp_path, capsys):
    out_dir = tmp_path / "cli_run"
    rc = main(["--name", "cli", "--seed", "3", "--out-dir", str(out_dir), "--quiet"])

    assert rc == 0
    out = capsys.readouterr().out
    assert out.startswith("cli: transitions=")
    assert "cycles=1" in out
    assert "stop=max_cycles" in out
    assert "The actual temperature" not in out

    data = json.loads((out_dir / "metrics.json").read_text(encoding="utf-8"))
    assert data["run"]["seed"] == 3
    assert data["run"]["scenario_name"] == "cli"


def test_cli_prints_reports(tmp_path, capsys):
    rc = main(["--name", "loud", "--seed", "3", "--out-dir", str(tmp_path)])
    assert rc == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Start a new sequence"
    assert " Finish at " in out


def test_cli_transition_limit_only(tmp_path, capsys):
    rc = main(["--cycles", "0", "--max-transitions", "4", "--out-dir", str(tmp_path), "--quiet"])
    assert rc == 0
    assert "transitions=4 " in capsys.readouterr().out
    assert len((tmp_path / "transitions.jsonl").read_text(encoding="utf-8").splitlines()) == 4


@pytest.mark.parametrize("argv", [["--cycles", "0"], ["--cycles", "-1"], ["--name", ""]])
def test_cli_rejects_unbounded_or_bad_runs(argv, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(argv + ["--out-dir", str(tmp_path)])
    assert excinfo.value.code == 2


def test_plot_from_artifacts(tmp_path):
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    from thermocharge.engine.plotting import plot_from_artifacts, plot_run_result

    result = _run_one_cycle()
    write_run_artifacts(out_path=tmp_path, metrics=result.metrics, transitions=result.transitions)

    saved = plot_from_artifacts(tmp_path)
    assert saved == tmp_path / "plot.png"
    assert saved.exists()

    direct = plot_run_result(result, output_path=tmp_path / "direct.png")
    assert direct.exists()
