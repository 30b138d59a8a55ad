import numpy as np
import pytest

from equations import Equation, lookup
from errors import InvalidConfigError
from integrators import METHODS, euler_step, integrate, rk4_step, step_count, step_grid


def test_single_steps():
    f = lambda x, y: x + y
    assert euler_step(f, 1.0, 2.0, 0.5) == pytest.approx(2.0 + 0.5 * 3.0)

    # y' = y from y=1: one RK4 step reproduces the degree-4 Taylor polynomial of e^h
    h = 0.1
    expected = 1 + h + h**2 / 2 + h**3 / 6 + h**4 / 24
    assert rk4_step(lambda x, y: y, 0.0, 1.0, h) == pytest.approx(expected, rel=1e-14)


@pytest.mark.parametrize("x0, dx, X", [
    (0.0, 0.1, 0.3),
    (0.0, 0.1, 1.0),
    (0.0, 0.3, 1.0),
    (1.5, 0.001, 2.0),
    (-2.0, 0.07, 3.3),
    (0.0, 0.001, 10.0),
])
def test_grid_ends_at_first_node_past_horizon(x0, dx, X):
    xs = step_grid(x0, dx, X)
    assert xs[0] == x0
    assert xs[-1] >= X
    assert xs[-2] < X
    assert len(xs) == step_count(x0, dx, X) + 1
    np.testing.assert_array_equal(xs, x0 + dx * np.arange(len(xs)))


def test_grid_with_horizon_before_start_is_single_node():
    np.testing.assert_array_equal(step_grid(1.0, 0.1, 1.0), [1.0])
    np.testing.assert_array_equal(step_grid(1.0, 0.1, 0.5), [1.0])


def test_grid_rejects_non_positive_step():
    with pytest.raises(AssertionError):
        step_grid(0.0, 0.0, 1.0)


def test_grid_rejects_too_many_steps():
    with pytest.raises(InvalidConfigError):
        step_grid(0.0, 1e-9, 100.0)


@pytest.mark.parametrize("eq", list(Equation))
@pytest.mark.parametrize("dx", [0.25, 0.01, 0.003])
def test_both_methods_share_length_and_start(eq, dx):
    f = lookup(eq).derivative
    euler = integrate(f, 1.0, 0.0, dx, 2.0, method="euler")
    rk4 = integrate(f, 1.0, 0.0, dx, 2.0, method="rk4")

    assert len(euler.x) == len(rk4.x) == len(euler.y) == len(rk4.y) > 1
    assert (euler.x[0], euler.y[0]) == (0.0, 1.0)
    assert (rk4.x[0], rk4.y[0]) == (0.0, 1.0)
    np.testing.assert_array_equal(euler.x, rk4.x)


def test_trajectory_unpacks_and_is_read_only():
    X, Y = integrate(lambda x, y: -y, 1.0, 0.0, 0.1, 1.0)
    with pytest.raises(ValueError):
        Y[0] = 5.0
    assert len(X) == len(Y)


def test_unknown_method():
    with pytest.raises(ValueError, match="leapfrog"):
        integrate(lambda x, y: y, 1.0, 0.0, 0.1, 1.0, method="leapfrog")
    assert set(METHODS) == {"euler", "rk4"}


def test_rk4_matches_parabola_at_one():
    # y' = -2x, y(0) = 1  ->  y = 1 - x^2, so y(1) = 0
    f = lookup(Equation.NEG_TWO_X).derivative
    X, Y = integrate(f, 1.0, 0.0, 0.01, 1.0, method="rk4")
    i = int(np.argmin(np.abs(X - 1.0)))
    assert X[i] == pytest.approx(1.0)
    assert abs(Y[i]) < 1e-6


def _max_error(eq, dx, method, X_end=2.0):
    spec = lookup(eq)
    X, Y = integrate(spec.derivative, 1.0, 0.0, dx, X_end, method=method)
    return float(np.max(np.abs(Y - spec.exact(X, 0.0, 1.0))))


@pytest.mark.parametrize("eq", [Equation.SINE, Equation.SIN_COS_DECAY])
def test_halving_dx_does_not_increase_rk4_error(eq):
    coarse = _max_error(eq, 0.1, "rk4")
    fine = _max_error(eq, 0.05, "rk4")
    assert fine <= coarse
    assert coarse / fine > 8.0       # about 2^4


def test_euler_is_first_order():
    coarse = _max_error(Equation.SIN_COS_DECAY, 0.02, "euler")
    fine = _max_error(Equation.SIN_COS_DECAY, 0.01, "euler")
    assert 1.6 < coarse / fine < 2.4
