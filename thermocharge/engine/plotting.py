"""
Plotting utilities for ThermoCharge run artifacts.

Plots can be generated directly from RunResult objects or from artifact
files on disk.

Requires matplotlib: pip install thermocharge[plot]
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .metrics import read_transitions

if TYPE_CHECKING:
    from .interfaces import RunResult, TransitionSample

# Background colour for each state the driver moves into
STATE_COLORS = {
    "Start": "tab:gray",
    "Cooling": "tab:blue",
    "Heating": "tab:red",
    "Charging": "tab:green",
    "Finish": "tab:purple",
    "StandBy": "tab:olive",
}


def check_matplotlib_available() -> bool:
    """Check if matplotlib is available."""
    try:
        import matplotlib
        return True
    except ImportError:
        return False


def _state_spans(transitions: list["TransitionSample"]) -> list[tuple[int, int, str]]:
    # Contiguous [first, last] index runs sharing a target state
    spans: list[tuple[int, int, str]] = []
    for t in transitions:
        if spans and spans[-1][2] == t.target:
            first, _, label = spans[-1]
            spans[-1] = (first, t.index, label)
        else:
            spans.append((t.index, t.index, t.target))
    return spans


def plot_transitions(
    transitions: list["TransitionSample"],
    output_path: Path | str | None = None,
    show: bool = False,
    title: str | None = None,
    band: tuple[float, float] | None = (18.0, 20.0),
    battery_floor: float | None = 20.0,
) -> Path | None:
    """
    Plot temperature and battery charge over driver iterations.

    Creates a 2-panel figure:
    1. Temperature, with the comfort band drawn as reference lines
    2. Battery charge, with the regulation floor

    Both panels are shaded by the state each iteration moved into.

    Args:
        transitions: Samples from a run, in order.
        output_path: Where to save the figure. If None and show=False,
                     saves to 'regulator_plot.png'.
        show: If True, display the plot interactively.
        title: Optional figure title.
        band: (low, high) comfort band, or None to omit.
        battery_floor: Battery floor line, or None to omit.

    Returns:
        Path of the saved figure, or None when only shown.

    Raises:
        RuntimeError: If matplotlib is not installed.
        ValueError: If there are no transitions.
    """
    if not check_matplotlib_available():
        raise RuntimeError(
            "matplotlib not installed. Install with: pip install thermocharge[plot]"
        )

    import matplotlib.pyplot as plt

    if not transitions:
        raise ValueError("No transitions to plot")

    idx = [t.index for t in transitions]
    temps = [t.temperature for t in transitions]
    charges = [t.battery_charge for t in transitions]

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 5), sharex=True)

    # Panel 1: Temperature
    ax1.plot(idx, temps, "r-", linewidth=1.5, label="Temperature")
    if band is not None:
        low, high = band
        ax1.axhline(y=high, color="black", linestyle=":", linewidth=1.5,
                    label=f"Band ({low:.1f}-{high:.1f}°C)")
        ax1.axhline(y=low, color="black", linestyle=":", linewidth=1.5)
    ax1.set_ylabel("Temperature (°C)")
    ax1.grid(True, alpha=0.3)
    ax1.legend(loc="upper right")

    # Panel 2: Battery
    ax2.plot(idx, charges, "g-", linewidth=1.5, label="Battery")
    if battery_floor is not None:
        ax2.axhline(y=battery_floor, color="black", linestyle="--", linewidth=1,
                    label=f"Floor ({battery_floor:.0f}%)")
    ax2.set_ylabel("Battery (%)")
    ax2.set_xlabel("Transition")
    ax2.grid(True, alpha=0.3)
    ax2.legend(loc="upper right")

    for first, last, label in _state_spans(transitions):
        color = STATE_COLORS.get(label, "white")
        for ax in (ax1, ax2):
            ax.axvspan(first - 0.5, last + 0.5, color=color, alpha=0.08, linewidth=0)

    if title:
        fig.suptitle(title, fontsize=14, fontweight="bold")

    plt.tight_layout()

    saved = None
    if output_path:
        saved = Path(output_path)
    elif not show:
        saved = Path("regulator_plot.png")
    if saved is not None:
        plt.savefig(saved, dpi=150, bbox_inches="tight")

    if show:
        plt.show()

    plt.close(fig)
    return saved


def plot_run_result(
    result: "RunResult",
    output_path: Path | str | None = None,
    show: bool = False,
) -> Path | None:
    """Plot a RunResult, titled with its scenario name."""
    m = result.metrics
    title = f"ThermoCharge: {m.scenario_name} ({m.total_transitions} transitions, {m.total_cycles} cycles)"
    return plot_transitions(result.transitions, output_path=output_path, show=show, title=title)


def plot_from_artifacts(
    artifact_dir: Path | str,
    output_path: Path | str | None = None,
    show: bool = False,
) -> Path | None:
    """
    Generate a plot from artifact files on disk.

    Args:
        artifact_dir: Directory containing transitions.jsonl.
        output_path: Where to save the figure. If None, saves to artifact_dir/plot.png.
        show: If True, display the plot interactively.

    Raises:
        RuntimeError: If matplotlib is not installed.
        FileNotFoundError: If transitions.jsonl is missing.
    """
    artifact_dir = Path(artifact_dir)
    transitions = read_transitions(artifact_dir)
    if output_path is None and not show:
        output_path = artifact_dir / "plot.png"
    return plot_transitions(transitions, output_path=output_path, show=show,
                            title=f"ThermoCharge: {artifact_dir.name}")
