import json
import logging
import math
import numbers
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from constants import (
    DEFAULT_DX,
    DEFAULT_PRECISION,
    DEFAULT_X,
    DEFAULT_X0,
    DEFAULT_Y0,
    MAX_STEPS,
)
from equations import Equation, lookup
from errors import InvalidConfigError
from reference import REFERENCE_SOURCES

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE = "rk4"
REFERENCE_CHOICES = tuple(REFERENCE_SOURCES)


@dataclass(frozen=True)
class SimulationConfig:
    """Everything one comparison run needs. Built fresh per run and never mutated."""
    equation: Equation
    y0: float = DEFAULT_Y0
    x0: float = DEFAULT_X0
    dx: float = DEFAULT_DX
    X: float = DEFAULT_X
    precision: float = DEFAULT_PRECISION
    reference: str = DEFAULT_REFERENCE

    def validate(self) -> "SimulationConfig":
        """Raise InvalidConfigError unless the run can proceed; returns self for chaining."""
        for name in ("y0", "x0", "dx", "X", "precision"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise InvalidConfigError(f"{name} must be a finite number, got {value!r}")
        if self.dx <= 0:
            raise InvalidConfigError(f"dx must be > 0, got {self.dx!r}")
        if self.precision <= 0:
            raise InvalidConfigError(f"precision must be > 0, got {self.precision!r}")
        if self.X <= self.x0:
            raise InvalidConfigError(f"X must be greater than x0 (x0={self.x0!r}, X={self.X!r})")
        if (self.X - self.x0) / self.dx > MAX_STEPS:
            raise InvalidConfigError(
                f"dx={self.dx!r} is too small for the interval [{self.x0!r}, {self.X!r}] "
                f"(more than {MAX_STEPS} steps)"
            )
        if self.reference not in REFERENCE_CHOICES:
            raise InvalidConfigError(
                f"reference must be one of {REFERENCE_CHOICES}, got {self.reference!r}"
            )
        return self

    @classmethod
    def from_inputs(
        cls,
        equation,
        y0: Optional[float] = None,
        x0: Optional[float] = None,
        dx: Optional[float] = None,
        X: Optional[float] = None,
        precision: Optional[float] = None,
        reference: Optional[str] = None,
    ) -> "SimulationConfig":
        """Build a config from raw user input, substituting defaults for unusable dx/precision.

        Other fields are taken as given; validate() still rejects them if they are wrong.
        Values that are not numbers at all raise InvalidConfigError.
        """
        y0 = _as_number("y0", y0)
        x0 = _as_number("x0", x0)
        dx = _as_number("dx", dx)
        X = _as_number("X", X)
        precision = _as_number("precision", precision)

        if dx is None or not dx > 0:
            if dx is not None:
                logger.warning(f"dx={dx!r} is not positive, using default {DEFAULT_DX}")
            dx = DEFAULT_DX
        if precision is None or not precision > 0:
            if precision is not None:
                logger.warning(f"precision={precision!r} is not positive, using default {DEFAULT_PRECISION}")
            precision = DEFAULT_PRECISION

        return cls(
            equation=lookup(equation).key,
            y0=DEFAULT_Y0 if y0 is None else y0,
            x0=DEFAULT_X0 if x0 is None else x0,
            dx=dx,
            X=DEFAULT_X if X is None else X,
            precision=precision,
            reference=reference or DEFAULT_REFERENCE,
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["equation"] = lookup(self.equation).key.value
        return d


def _as_number(name: str, value) -> Optional[float]:
    # JSON strings and booleans are not numbers here, even "0.01"
    if value is None:
        return None
    if isinstance(value, (bool, str, bytes)):
        raise InvalidConfigError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigError(f"{name} must be a number, got {value!r}") from e


def load_config(path) -> SimulationConfig:
    """Read a run configuration from a JSON file; only "equation" is required."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path.resolve()}")
    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        raise InvalidConfigError(f"{path.resolve()} must contain a JSON object")
    if "equation" not in data:
        raise InvalidConfigError(f"Missing key 'equation' in {path.resolve()}")

    unknown = set(data) - {"equation", "y0", "x0", "dx", "X", "precision", "reference"}
    if unknown:
        raise InvalidConfigError(f"Unknown keys in {path.resolve()}: {sorted(unknown)}")

    return SimulationConfig.from_inputs(**data)
