from typing import NamedTuple

from analysis import RankedErrorList
from constants import ZOOM_RADIUS_STEPS
from errors import NoDataError
from integrators import Trajectory, make_trajectory


class ZoomWindow(NamedTuple):
    start_x: float
    end_x: float


def zoom_window(top_errors: RankedErrorList, x0: float, X: float, dx: float,
                radius_steps: int = ZOOM_RADIUS_STEPS) -> ZoomWindow:
    """Window of `radius_steps` steps either side of the worst error, clamped to [x0, X]."""
    if len(top_errors) == 0:
        raise NoDataError("Cannot place a zoom window: the error list is empty")

    peak_x = top_errors[0].x
    half = float(dx) * radius_steps
    start = max(float(x0), peak_x - half)
    end = min(float(X), peak_x + half)
    return ZoomWindow(start, end)


def filter_window(trajectory: Trajectory, window: ZoomWindow, slack: float = 0.0) -> Trajectory:
    X, Y = trajectory
    lo = window.start_x - slack
    hi = window.end_x + slack

    mask = (X >= lo) & (X <= hi)      #inclusive on both ends, order preserved
    return make_trajectory(X[mask], Y[mask])
