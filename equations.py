from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import numpy as np

from errors import UnknownEquationError


class Equation(Enum):
    """Closed set of supported right-hand sides dy/dx = f(x, y)."""
    NEG_TWO_X = 1
    SINE = 2
    SIN_COS_DECAY = 3


@dataclass(frozen=True)
class EquationSpec:
    key: Equation
    label: str
    derivative: Callable[[float, float], float]
    exact: Optional[Callable] = None  # exact(x, x0, y0), vectorised over x

    @property
    def has_exact(self) -> bool:
        return self.exact is not None


# 1) y' = -2x  ->  y = y0 + x0^2 - x^2
def _neg_two_x(x, y):
    return -2.0 * x

def _neg_two_x_exact(x, x0, y0):
    x = np.asarray(x, dtype=float)
    return y0 + x0**2 - x**2


# 2) y' = sin(x)  ->  y = y0 + cos(x0) - cos(x)
def _sine(x, y):
    return np.sin(x)

def _sine_exact(x, x0, y0):
    x = np.asarray(x, dtype=float)
    return y0 + np.cos(x0) - np.cos(x)


# 3) y' = sin(x)cos(x) - y, i.e. y' + y = sin(2x)/2
#    particular solution sin(2x)/10 - cos(2x)/5, homogeneous C*e^-x
def _sin_cos_decay(x, y):
    return np.sin(x) * np.cos(x) - y

def _particular(x):
    return 0.1 * np.sin(2.0 * x) - 0.2 * np.cos(2.0 * x)

def _sin_cos_decay_exact(x, x0, y0):
    x = np.asarray(x, dtype=float)
    c = (y0 - _particular(x0)) * np.exp(x0)       #constant fixed by y(x0) = y0
    return c * np.exp(-x) + _particular(x)


REGISTRY = {
    Equation.NEG_TWO_X: EquationSpec(Equation.NEG_TWO_X, "y' = -2x", _neg_two_x, _neg_two_x_exact),
    Equation.SINE: EquationSpec(Equation.SINE, "y' = sin(x)", _sine, _sine_exact),
    Equation.SIN_COS_DECAY: EquationSpec(
        Equation.SIN_COS_DECAY, "y' = sin(x)cos(x) - y", _sin_cos_decay, _sin_cos_decay_exact
    ),
}


def _to_equation(selector) -> Equation:
    if isinstance(selector, Equation):
        return selector
    if isinstance(selector, bool):  # bool is an int subclass; True is not equation 1
        raise UnknownEquationError(selector)
    if isinstance(selector, (int, np.integer)):
        try:
            return Equation(int(selector))
        except ValueError:
            raise UnknownEquationError(selector) from None
    if isinstance(selector, str):
        s = selector.strip()
        if s.isdigit():
            return _to_equation(int(s))
        try:
            return Equation[s.upper()]
        except KeyError:
            raise UnknownEquationError(selector) from None
    raise UnknownEquationError(selector)


def lookup(selector) -> EquationSpec:
    """Return the registered equation for an Equation, 1-based number, digit string or member name."""
    eq = _to_equation(selector)
    try:
        return REGISTRY[eq]
    except KeyError:
        raise UnknownEquationError(selector) from None


def resolve(selector) -> Callable[[float, float], float]:
    """Return only the derivative f(x, y) for `selector`."""
    return lookup(selector).derivative


def available() -> list[EquationSpec]:
    return [REGISTRY[eq] for eq in Equation]
