"""Ways of producing the reference trajectory that the Euler run is measured against.

"rk4"   - the fourth-order fixed-step integrator on the same grid
"exact" - the equation's closed-form solution sampled on the grid
"scipy" - scipy's DOP853 at tight tolerances, evaluated on the grid
"""
import numpy as np
from scipy.integrate import solve_ivp

from equations import EquationSpec
from errors import InvalidConfigError, SimulationError
from integrators import Trajectory, integrate, make_trajectory, step_grid

SCIPY_METHOD = "DOP853"
SCIPY_TOL = 1e-12


def _rk4_reference(spec: EquationSpec, y0, x0, dx, X) -> Trajectory:
    return integrate(spec.derivative, y0, x0, dx, X, method="rk4")


def _exact_reference(spec: EquationSpec, y0, x0, dx, X) -> Trajectory:
    if not spec.has_exact:
        raise InvalidConfigError(f"{spec.label} has no closed-form solution")
    xs = step_grid(float(x0), float(dx), float(X))
    ys = spec.exact(xs, float(x0), float(y0))
    ys = np.array(ys, dtype=float)
    ys[0] = y0      #closed forms can be off by an ulp at x0
    return make_trajectory(xs, ys)


def _scipy_reference(spec: EquationSpec, y0, x0, dx, X) -> Trajectory:
    xs = step_grid(float(x0), float(dx), float(X))
    if len(xs) == 1:
        return make_trajectory(xs, [y0])

    f = spec.derivative
    sol = solve_ivp(
        lambda x, y: [f(x, y[0])],
        (xs[0], xs[-1]),
        [float(y0)],
        method=SCIPY_METHOD,
        t_eval=xs,
        rtol=SCIPY_TOL,
        atol=SCIPY_TOL,
    )
    if not sol.success:
        raise SimulationError(f"scipy reference failed: {sol.message}")
    return make_trajectory(xs, sol.y[0])


REFERENCE_SOURCES = {
    "rk4": _rk4_reference,
    "exact": _exact_reference,
    "scipy": _scipy_reference,
}


def reference_trajectory(source: str, spec: EquationSpec, y0, x0, dx, X) -> Trajectory:
    try:
        build = REFERENCE_SOURCES[source]
    except KeyError:
        raise InvalidConfigError(
            f"Unknown reference source {source!r}; expected one of {sorted(REFERENCE_SOURCES)}"
        ) from None
    return build(spec, y0, x0, dx, X)
