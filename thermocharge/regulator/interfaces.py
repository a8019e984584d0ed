from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

from thermocharge.regulator.snapshot import Snapshot


@dataclass(frozen=True, slots=True)
class Yielded:
    """A step was taken and the producer can be resumed again."""
    snapshot: Snapshot

    @property
    def done(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Done:
    """The producer's last result; it is terminal afterwards."""
    snapshot: Snapshot

    @property
    def done(self) -> bool:
        return True


StepResult = Union[Yielded, Done]


class StepwiseProducer(Protocol):
    """
    Protocol for producers that hand back one snapshot per resumption.

    The producer does not advance past a step until step() is called
    again. It is not restartable; build a new one for a new phase.
    """

    @property
    def completed(self) -> bool:
        """True once a Done result was produced or the producer was closed."""
        ...

    def step(self) -> StepResult:
        """
        Advance by one step.

        Returns:
            Yielded with the new snapshot, or Done with the final one

        Raises:
            AlreadyCompleted: If the producer is already terminal
        """
        ...

    def close(self) -> None:
        """Abandon the producer and release its private snapshot."""
        ...


class OneShotProducer(Protocol):
    """
    Protocol for producers that run to a single result.

    Intermediate iterations are internal; callers only ever see the
    terminal snapshot.
    """

    @property
    def completed(self) -> bool:
        ...

    def run(self) -> Snapshot:
        """
        Run to completion.

        Raises:
            AlreadyCompleted: If run() already returned
        """
        ...
