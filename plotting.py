import matplotlib.pyplot as plt
import numpy as np

from equations import lookup

REFERENCE_NAMES = {
    "rk4": "RK4",
    "exact": "Exact",
    "scipy": "SciPy DOP853",
}


def plot_result(result):
    """Three stacked panels: both solutions, the zoomed region around the worst error, and |error|."""
    label = lookup(result.config.equation).label
    ref_name = REFERENCE_NAMES.get(result.config.reference, result.config.reference)

    fig, axes = plt.subplots(3, 1, figsize=(8, 12))
    ax_full, ax_zoom, ax_err = axes

    ax_full.plot(result.labels, result.approx_series, lw=1.5, color="tab:red", label="Euler")
    ax_full.plot(result.labels, result.reference_series, lw=1.5, color="tab:cyan", label=ref_name)
    ax_full.axvspan(result.zoom.start_x, result.zoom.end_x, color="gray", alpha=0.2) #zoom region
    ax_full.set_title(f"{label}  (dx={result.config.dx:g}, {result.trial_count} steps)")
    ax_full.set_ylabel("y")
    ax_full.legend()

    ax_zoom.plot(result.zoom_labels, result.zoom_approx_series, "o-", color="tab:red", label="Euler (zoom)")
    ax_zoom.plot(result.zoom_labels, result.zoom_reference_series, "s-", color="tab:cyan", label=f"{ref_name} (zoom)")
    ax_zoom.set_title(f"Around the largest error, x in [{result.zoom.start_x:.6g}, {result.zoom.end_x:.6g}]")
    ax_zoom.set_ylabel("y")
    ax_zoom.legend()

    # log axis cannot show exact zeros
    err = np.where(result.errors > 0, result.errors, np.nan)
    ax_err.plot(result.labels, err, lw=0.8)
    ax_err.axhline(result.precision.tolerance, color="k", ls="--", lw=0.8, label="tolerance")
    if np.any(np.isfinite(err)):
        ax_err.set_yscale("log")
    verdict = "PASS" if result.precision.passed else "FAIL"
    ax_err.set_title(f"Absolute error, max {result.precision.max_error:.3e} ({verdict})")
    ax_err.set_xlabel("x")
    ax_err.set_ylabel("|y_euler - y_ref|")
    ax_err.grid(True, which="both", linestyle="--", alpha=0.3)
    ax_err.legend()

    plt.tight_layout()
    return fig
