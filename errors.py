"""Exceptions raised by the simulation pipeline.

Every failure a run can end with is one of these; the orchestrator never
returns a partial result.
"""


class SimulationError(Exception):
    """Base class for every error raised by the pipeline."""


class UnknownEquationError(SimulationError, LookupError):
    """The equation selector does not match any registered equation."""

    def __init__(self, selector):
        self.selector = selector
        super().__init__(f"Unknown equation selector: {selector!r}")


class InvalidConfigError(SimulationError, ValueError):
    """Step size, precision or horizon is unusable."""


class LengthMismatchError(SimulationError):
    """Two trajectories that must share a grid have different lengths.

    The integrators walk one common grid, so this points at a bug rather than
    at bad user input.
    """

    def __init__(self, n_approx: int, n_reference: int):
        self.n_approx = n_approx
        self.n_reference = n_reference
        super().__init__(
            f"Trajectory lengths differ: approx has {n_approx} samples, "
            f"reference has {n_reference}"
        )


class NoDataError(SimulationError):
    """A zoom window was requested on an empty error list."""
