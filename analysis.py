from typing import NamedTuple

import numpy as np

from constants import EPS
from errors import LengthMismatchError
from integrators import Trajectory


class ErrorPoint(NamedTuple):
    x: float
    error: float


class PrecisionVerdict(NamedTuple):
    max_error: float
    tolerance: float
    passed: bool


class RankedErrorList:
    """Error points sorted by descending error.

    Indexing with an int gives an ErrorPoint, slicing gives another
    RankedErrorList, so `errors[:5]` and `errors.top(5)` are the same table.
    """

    def __init__(self, x, error):
        x = np.asarray(x, dtype=float)
        error = np.asarray(error, dtype=float)
        if x.shape != error.shape:
            raise ValueError("x and error must have the same shape")
        order = np.argsort(-error, kind="stable")
        self.x = x[order]
        self.error = error[order]
        self.x.setflags(write=False)
        self.error.setflags(write=False)

    def __len__(self):
        return len(self.error)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return RankedErrorList(self.x[i], self.error[i])
        return ErrorPoint(float(self.x[i]), float(self.error[i]))

    def __iter__(self):
        for x, e in zip(self.x, self.error):
            yield ErrorPoint(float(x), float(e))

    def __eq__(self, other):
        if not isinstance(other, RankedErrorList):
            return NotImplemented
        return np.array_equal(self.x, other.x) and np.array_equal(self.error, other.error)

    def __repr__(self):
        return f"RankedErrorList(n={len(self)}, max_error={self.max_error:.3e})"

    def top(self, k: int) -> "RankedErrorList":
        return self[:k]

    @property
    def max_error(self) -> float:
        #full scan, not just the head of the ranking
        return float(self.error.max()) if len(self.error) else 0.0

    def to_list(self) -> list[dict]:
        return [{"x": p.x, "error": p.error} for p in self]


def pointwise_errors(approx: Trajectory, reference: Trajectory) -> np.ndarray:
    """|y_approx - y_ref| per grid index, with differences below EPS set to zero."""
    ya = np.asarray(approx.y, dtype=float)
    yr = np.asarray(reference.y, dtype=float)
    if len(ya) != len(yr):
        raise LengthMismatchError(len(ya), len(yr))

    diff = np.abs(ya - yr)
    return np.where(diff < EPS, 0.0, diff)     #rounding noise counts as no error


def analyze(approx: Trajectory, reference: Trajectory) -> RankedErrorList:
    errors = pointwise_errors(approx, reference)
    return RankedErrorList(approx.x, errors)     #x taken from the approximate run; both share one grid


def evaluate(errors: RankedErrorList, tolerance: float) -> PrecisionVerdict:
    """Pass when the largest error anywhere on the grid is within `tolerance`."""
    max_error = errors.max_error
    return PrecisionVerdict(max_error, float(tolerance), bool(max_error <= tolerance))
