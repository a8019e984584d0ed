"""
Artifact writing for ThermoCharge regulator runs.

Artifact files produced:
- metrics.json: Run metadata and per-state iteration counts
- transitions.jsonl: One driver iteration per line

Example artifact directory structure:
```
artifacts/runs/20240115_120000_example/
├── metrics.json        # Run metadata
└── transitions.jsonl   # Transition stream
```
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict
from pathlib import Path

from .interfaces import RunMetrics, TransitionSample


def write_run_artifacts(
    *,
    out_path: Path,
    metrics: RunMetrics,
    transitions: list[TransitionSample],
) -> None:
    """
    Write all run artifacts to disk.

    Creates the output directory (if needed). metrics.json is always
    written; transitions.jsonl only when there is at least one transition.

    Args:
        out_path: Output directory path, created with its parents.
        metrics: Run-level metrics.
        transitions: Samples recorded by the driver, in order.

    Example:
        >>> write_run_artifacts(
        ...     out_path=Path("artifacts/runs/my_run"),
        ...     metrics=result.metrics,
        ...     transitions=result.transitions,
        ... )
    """
    out_path = Path(out_path)
    out_path.mkdir(parents=True, exist_ok=True)

    _write_metrics_json(out_path, metrics, transitions)

    if transitions:
        _write_transitions_jsonl(out_path, transitions)


def _write_metrics_json(
    out_path: Path,
    metrics: RunMetrics,
    transitions: list[TransitionSample],
) -> None:
    """
    Write metrics.json artifact.

    Schema:
    {
        "run": {
            "total_transitions": int,
            "total_cycles": int,
            "start_time": str (ISO 8601),
            "finish_time": str (ISO 8601),
            "scenario_name": str,
            "seed": int | null,
            "stop_reason": str
        },
        "states": {"<state label>": int, ...}
    }

    "states" counts the iterations run in each state.
    """
    payload = {
        "run": asdict(metrics),
        "states": dict(Counter(t.source for t in transitions)),
    }

    metrics_path = out_path / "metrics.json"
    metrics_path.write_text(
        json.dumps(payload, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )


def _write_transitions_jsonl(
    out_path: Path,
    transitions: list[TransitionSample],
) -> None:
    """
    Write transitions.jsonl artifact.

    Each line schema:
    {"index": int, "cycle": int, "source": str, "target": str,
     "temperature": float, "battery_charge": float}
    """
    transitions_path = out_path / "transitions.jsonl"
    with transitions_path.open("w", encoding="utf-8") as f:
        for sample in transitions:
            json.dump(asdict(sample), f, sort_keys=True)
            f.write("\n")


def read_transitions(artifact_dir: Path | str) -> list[TransitionSample]:
    """
    Load transitions.jsonl back into samples.

    Raises:
        FileNotFoundError: If transitions.jsonl is missing
    """
    transitions_path = Path(artifact_dir) / "transitions.jsonl"
    if not transitions_path.exists():
        raise FileNotFoundError(f"transitions.jsonl not found in {artifact_dir}")

    samples = []
    with transitions_path.open(encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                samples.append(TransitionSample(**json.loads(line)))
    return samples
