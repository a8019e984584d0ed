from __future__ import annotations


class RegulatorError(Exception):
    """Base class for regulator faults."""


class AlreadyCompleted(RegulatorError):
    """
    Raised when a producer is resumed after it has finished or been closed.

    Under the driver's transition table this never happens; seeing it means
    a producer was resumed out of turn.
    """


class InvalidSnapshot(RegulatorError, ValueError):
    """Raised when a snapshot carries non-finite or out-of-domain values."""


class PhaseAborted(RegulatorError):
    """
    Raised by the driver when a phase fails.

    The driver keeps the snapshot and state it had before the phase, so
    nothing partial is ever adopted. The original fault is chained as
    __cause__.
    """

    def __init__(self, state, message: str):
        super().__init__(f"{state.label} phase aborted: {message}")
        self.state = state
