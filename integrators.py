from typing import NamedTuple

import numpy as np

from constants import MAX_STEPS
from errors import InvalidConfigError


class Trajectory(NamedTuple):
    """Aligned, read-only sample arrays; unpacks as `X, Y = trajectory`."""
    x: np.ndarray
    y: np.ndarray


def _frozen(a) -> np.ndarray:
    a = np.array(a, dtype=float)
    a.setflags(write=False)
    return a


def make_trajectory(x, y) -> Trajectory:
    return Trajectory(_frozen(x), _frozen(y))


def euler_step(f, x, y, dx):
    return y + dx * f(x, y)         #one tangent-line move from (x, y)

def rk4_step(f, x, y, dx):
    k1 = f(x, y)
    k2 = f(x + 0.5*dx, y + 0.5*dx*k1)           #half step along k1
    k3 = f(x + 0.5*dx, y + 0.5*dx*k2)           #half step again, along k2
    k4 = f(x + dx, y + dx*k3)                   #full step along k3
    return y + (dx/6)*(k1 + 2*k2 + 2*k3 + k4)   #midpoint slopes count double

METHODS = {
    "euler": euler_step,
    "rk4": rk4_step,
}


def step_count(x0: float, dx: float, X: float) -> int:
    """Number of steps until the first node x0 + n*dx that is >= X."""
    if X <= x0:
        return 0
    n = int(np.ceil((X - x0) / dx))
    if n > MAX_STEPS:
        raise InvalidConfigError(
            f"dx={dx!r} needs {n} steps to reach X={X!r} (limit is {MAX_STEPS})"
        )
    # ceil() on a rounded quotient can land one node off; settle it on the real grid
    while n > 0 and x0 + (n - 1) * dx >= X:
        n -= 1
    while x0 + n * dx < X:
        n += 1
    return n


def step_grid(x0: float, dx: float, X: float) -> np.ndarray:
    """Grid nodes x_n = x0 + n*dx, ending at the first node with x >= X.

    Positions come from the index, not from repeated x += dx, so every method
    walking this grid produces the same number of samples.
    """
    assert dx > 0, "dx must be > 0"
    n = step_count(x0, dx, X)
    return x0 + dx * np.arange(n + 1, dtype=float)


def integrate(f, y0, x0, dx, X, method="rk4") -> Trajectory:     #y0 initial value at x0; X horizon
    try:
        step = METHODS[method]
    except KeyError:
        raise ValueError(f"Unknown integration method: {method!r}") from None

    xs = step_grid(float(x0), float(dx), float(X))
    ys = np.empty_like(xs)
    ys[0] = y = float(y0)

    for n in range(len(xs) - 1):
        y = step(f, xs[n], y, dx)
        ys[n + 1] = y

    return make_trajectory(xs, ys)
