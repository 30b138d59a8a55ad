import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from analysis import PrecisionVerdict, RankedErrorList, analyze, evaluate, pointwise_errors
from config import SimulationConfig
from constants import TOP_K, WINDOW_SLACK, ZOOM_RADIUS_STEPS
from equations import lookup
from integrators import integrate
from reference import reference_trajectory
from zoom import ZoomWindow, filter_window, zoom_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunSnapshot:
    """Top-error table of a finished run, handed to the next run for before/after display."""
    top_errors: RankedErrorList
    config: SimulationConfig


@dataclass(frozen=True, eq=False)
class RunResult:
    config: SimulationConfig
    labels: np.ndarray
    approx_series: np.ndarray
    reference_series: np.ndarray
    errors: np.ndarray                  # grid order, same length as labels
    top_errors: RankedErrorList
    zoom: ZoomWindow
    zoom_labels: np.ndarray
    zoom_approx_series: np.ndarray
    zoom_reference_series: np.ndarray
    trial_count: int
    precision: PrecisionVerdict
    previous_top_errors: Optional[RankedErrorList] = None

    def snapshot(self) -> RunSnapshot:
        return RunSnapshot(self.top_errors, self.config)

    def to_dict(self) -> dict:
        return {
            "config": self.config.to_dict(),
            "labels": self.labels.tolist(),
            "approx_series": self.approx_series.tolist(),
            "reference_series": self.reference_series.tolist(),
            "errors": self.errors.tolist(),
            "top_errors": self.top_errors.to_list(),
            "zoom": {"start_x": self.zoom.start_x, "end_x": self.zoom.end_x},
            "zoom_labels": self.zoom_labels.tolist(),
            "zoom_approx_series": self.zoom_approx_series.tolist(),
            "zoom_reference_series": self.zoom_reference_series.tolist(),
            "trial_count": self.trial_count,
            "precision": self.precision._asdict(),
            "previous_top_errors": (
                self.previous_top_errors.to_list() if self.previous_top_errors is not None else None
            ),
        }


def trial_count(dx: float, X: float) -> int:
    """Nominal number of steps, X/dx rounded half up. Informational only."""
    return int(np.floor(X / dx + 0.5))


def run_comparison(config: SimulationConfig, previous: Optional[RunSnapshot] = None) -> RunResult:
    """Integrate with Euler and the reference source, then rank, zoom and grade the errors."""
    config.validate()
    spec = lookup(config.equation)
    y0, x0, dx, X = config.y0, config.x0, config.dx, config.X

    logger.debug(f"Running {spec.label}: y0={y0}, x0={x0}, dx={dx}, X={X}, reference={config.reference}")

    approx = integrate(spec.derivative, y0, x0, dx, X, method="euler")
    reference = reference_trajectory(config.reference, spec, y0, x0, dx, X)

    ranked = analyze(approx, reference)
    top = ranked.top(TOP_K)

    # clamped to [x0, X]; a peak on an overshooting last node falls just outside
    window = zoom_window(top, x0, X, dx, radius_steps=ZOOM_RADIUS_STEPS)
    slack = dx * WINDOW_SLACK
    zoom_approx = filter_window(approx, window, slack=slack)
    zoom_ref = filter_window(reference, window, slack=slack)

    verdict = evaluate(ranked, config.precision)
    logger.info(
        f"{spec.label}: {len(approx.x)} samples, max error {verdict.max_error:.3e} at x={top[0].x:.6g}, "
        f"{'PASS' if verdict.passed else 'FAIL'} (tolerance {verdict.tolerance:g})"
    )

    return RunResult(
        config=config,
        labels=approx.x,
        approx_series=approx.y,
        reference_series=reference.y,
        errors=pointwise_errors(approx, reference),
        top_errors=top,
        zoom=window,
        zoom_labels=zoom_approx.x,
        zoom_approx_series=zoom_approx.y,
        zoom_reference_series=zoom_ref.y,
        trial_count=trial_count(dx, X),
        precision=verdict,
        previous_top_errors=previous.top_errors if previous is not None else None,
    )


def run_sequence(configs: Iterable[SimulationConfig]) -> list[RunResult]:
    """Run configs in order; each run sees the previous run's top-error table."""
    results = []
    previous = None
    for config in configs:
        result = run_comparison(config, previous)
        previous = result.snapshot()
        results.append(result)
    return results
